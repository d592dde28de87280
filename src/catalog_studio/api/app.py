"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request, Response, status

from catalog_studio.api.models import (
    AssetSummary,
    BatchStatus,
    UploadRequest,
)
from catalog_studio.app_logging import configure_logging
from catalog_studio.containers import AppContainer
from catalog_studio.domain.assets import ImageAsset
from catalog_studio.domain.errors import EncodingError, PreconditionError
from catalog_studio.domain.generation import GenerationStatus
from catalog_studio.services.encoding import decode_payload
from catalog_studio.services.exports import decode_output, export_filename
from catalog_studio.services.library import UploadItem

_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Catalog Studio", lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/scenes")
    async def list_scenes(request: Request) -> list[AssetSummary]:
        """Return scene references in cycling order."""
        state_container: AppContainer = request.app.state.container
        return [AssetSummary.from_asset(a) for a in state_container.library.scenes]

    @app.post("/scenes", status_code=status.HTTP_201_CREATED)
    async def add_scenes(
        payload: UploadRequest, request: Request
    ) -> list[AssetSummary]:
        """Add scene references (background and pose)."""
        state_container: AppContainer = request.app.state.container
        uploads = _to_upload_items(payload)
        assets = await _create_or_422(state_container.library.add_scenes(uploads))
        return [AssetSummary.from_asset(asset) for asset in assets]

    @app.delete("/scenes/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def remove_scene(asset_id: str, request: Request) -> None:
        """Remove a scene reference."""
        state_container: AppContainer = request.app.state.container
        if not state_container.library.remove_scene(asset_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/targets")
    async def list_targets(request: Request) -> list[AssetSummary]:
        """Return target garments in processing order."""
        state_container: AppContainer = request.app.state.container
        return [AssetSummary.from_asset(a) for a in state_container.library.targets]

    @app.post("/targets", status_code=status.HTTP_201_CREATED)
    async def add_targets(
        payload: UploadRequest, request: Request
    ) -> list[AssetSummary]:
        """Add target garments."""
        state_container: AppContainer = request.app.state.container
        uploads = _to_upload_items(payload)
        assets = await _create_or_422(state_container.library.add_targets(uploads))
        return [AssetSummary.from_asset(asset) for asset in assets]

    @app.delete("/targets/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def remove_target(asset_id: str, request: Request) -> None:
        """Remove a target garment."""
        state_container: AppContainer = request.app.state.container
        if not state_container.library.remove_target(asset_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.post("/batch", status_code=status.HTTP_202_ACCEPTED)
    async def start_batch(
        request: Request, background_tasks: BackgroundTasks
    ) -> dict[str, str]:
        """Start a bulk generation run over the current scenes and targets."""
        state_container: AppContainer = request.app.state.container
        orchestrator = state_container.orchestrator
        targets = state_container.library.targets
        scenes = state_container.library.scenes
        credential = state_container.credential
        if orchestrator.is_processing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A batch is already running",
            )
        try:
            # Claimed before returning so a concurrent request sees the 409.
            reserved = orchestrator.reserve(targets, scenes, credential)
        except PreconditionError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        if not reserved or credential is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Add at least one target and one scene reference",
            )

        logger.info("Batch accepted for %d target(s)", len(targets))
        background_tasks.add_task(
            orchestrator.run_reserved, targets, scenes, credential
        )
        return {"status": "started"}

    @app.get("/batch")
    async def batch_status(request: Request) -> BatchStatus:
        """Return per-target progress for the latest batch."""
        state_container: AppContainer = request.app.state.container
        return BatchStatus.from_snapshot(state_container.orchestrator.snapshot())

    @app.get("/batch/{target_id}/shots/{shot_number}")
    async def download_shot(
        target_id: str, shot_number: int, request: Request
    ) -> Response:
        """Download one generated shot as PNG."""
        state_container: AppContainer = request.app.state.container
        orchestrator = state_container.orchestrator
        record = orchestrator.get_record(target_id)
        if (
            record is None
            or record.status != GenerationStatus.COMPLETED
            or not 1 <= shot_number <= len(record.images)
        ):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        target = state_container.library.get_target(target_id)
        label = (
            target.label
            if target
            else f"product-{orchestrator.records.index(record) + 1}"
        )
        filename = export_filename(label, shot_number)
        return Response(
            content=decode_output(record.images[shot_number - 1]),
            media_type="image/png",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


def _to_upload_items(payload: UploadRequest) -> list[UploadItem]:
    try:
        return [
            UploadItem(
                resource=decode_payload(image.data),
                media_type=image.media_type,
                name=image.name,
            )
            for image in payload.images
        ]
    except EncodingError as exc:
        raise HTTPException(status_code=_UNPROCESSABLE, detail=str(exc)) from exc


async def _create_or_422(
    pending: Awaitable[list[ImageAsset]],
) -> list[ImageAsset]:
    try:
        return await pending
    except EncodingError as exc:
        raise HTTPException(status_code=_UNPROCESSABLE, detail=str(exc)) from exc
