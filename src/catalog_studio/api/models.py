"""Pydantic models for the HTTP API."""

from pydantic import BaseModel, Field

from catalog_studio.domain.assets import ImageAsset
from catalog_studio.domain.generation import BatchSnapshot, RecordView


class ImageUpload(BaseModel):
    """Base64 encoded image sent by a client."""

    data: str = Field(min_length=1)
    media_type: str | None = None
    name: str | None = None


class UploadRequest(BaseModel):
    """Batch of images to add to a collection."""

    images: list[ImageUpload] = Field(min_length=1)


class AssetSummary(BaseModel):
    """Public view of an uploaded asset."""

    id: str
    name: str | None
    media_type: str
    size_bytes: int

    @classmethod
    def from_asset(cls, asset: ImageAsset) -> "AssetSummary":
        return cls(
            id=asset.id,
            name=asset.name,
            media_type=asset.media_type,
            size_bytes=len(asset.raw),
        )


class RecordSummary(BaseModel):
    """Public view of a generation record."""

    target_id: str
    status: str
    progress: int
    image_count: int
    error: str | None = None

    @classmethod
    def from_view(cls, view: RecordView) -> "RecordSummary":
        return cls(
            target_id=view.target_id,
            status=str(view.status),
            progress=view.progress,
            image_count=len(view.images),
            error=view.error,
        )


class BatchStatus(BaseModel):
    """Current batch progress."""

    records: list[RecordSummary]
    active_index: int | None
    is_processing: bool

    @classmethod
    def from_snapshot(cls, snapshot: BatchSnapshot) -> "BatchStatus":
        return cls(
            records=[RecordSummary.from_view(view) for view in snapshot.records],
            active_index=snapshot.active_index,
            is_processing=snapshot.is_processing,
        )
