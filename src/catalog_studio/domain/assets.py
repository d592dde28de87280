"""Domain models for uploaded images."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EncodedImage:
    """Base64 payload and the media type it was encoded from."""

    payload: str
    media_type: str


@dataclass(frozen=True)
class ImageAsset:
    """An uploaded image plus its derived encoded form."""

    id: str
    raw: bytes = field(repr=False)
    preview: str = field(repr=False)
    payload: str = field(repr=False)
    media_type: str
    name: str | None = None

    @property
    def label(self) -> str:
        """Human-facing label, falling back to the id."""
        return self.name or self.id
