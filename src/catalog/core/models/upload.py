"""Uploaded image payload."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedImage(BaseModel):
    """An image file received with a create or update request.

    Absence of an upload is always ``None`` rather than an empty instance,
    see :meth:`from_parts`.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False, description="Raw file bytes")
    filename: str | None = Field(default=None, description="Client-side file name")
    content_type: str | None = Field(default=None, description="Declared MIME type")

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_parts(
        cls,
        content: bytes | None,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> "UploadedImage | None":
        """Return an upload, or None when the form part carried no file."""
        if not content:
            return None
        return cls(content=content, filename=filename or None, content_type=content_type)
