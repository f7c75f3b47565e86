from dataclasses import dataclass

from src.catalog.core.services import DbSessionService
from src.catalog.core.storage import AssetStore


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    asset_store: AssetStore
