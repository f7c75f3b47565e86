"""Transport models shared between the API layer and the services."""

from .upload import UploadedImage

__all__ = ["UploadedImage"]
