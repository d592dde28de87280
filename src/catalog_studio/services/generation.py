"""Sequential shot generation for a single target garment."""

import base64
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from catalog_studio.domain.assets import ImageAsset
from catalog_studio.domain.generation import GeneratedImage
from catalog_studio.services.shot_requests import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_SIZE,
    ShotRequest,
    build_shot_request,
)

logger = logging.getLogger(__name__)

SHOTS_PER_TARGET = 4

ProgressCallback = Callable[[int], None]


class ImageGenerationClient(Protocol):
    """Interface for the remote multimodal image generator."""

    async def generate(
        self, *, model: str, request: ShotRequest
    ) -> list[GeneratedImage]:
        """Run one generation call and return every image part, in order."""

    async def close(self) -> None:
        """Release the underlying connections."""


@dataclass
class TargetGenerator:
    """Drive a fixed number of generation calls for one target."""

    client: ImageGenerationClient
    model: str
    shots_per_target: int = SHOTS_PER_TARGET
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    image_size: str = DEFAULT_IMAGE_SIZE

    async def generate_for_target(
        self,
        target: ImageAsset,
        scene_refs: Sequence[ImageAsset],
        on_progress: ProgressCallback,
    ) -> list[str]:
        """Generate shots for ``target`` cycling through ``scene_refs``.

        Shots run one at a time. The first failing call aborts the remaining
        shots and its exception propagates to the caller.
        """
        outputs: list[str] = []
        if not scene_refs:
            logger.warning(
                "No scene references available, skipping all shots",
                extra={"target_id": target.id},
            )
            return outputs

        for shot_index in range(self.shots_per_target):
            scene_ref = select_scene_reference(scene_refs, shot_index)
            request = build_shot_request(
                shot_index,
                scene_ref,
                target,
                aspect_ratio=self.aspect_ratio,
                image_size=self.image_size,
            )
            logger.debug(
                "Requesting shot %d for target %s with scene %s",
                shot_index + 1,
                target.id,
                scene_ref.id,
            )
            images = await self.client.generate(model=self.model, request=request)
            logger.info(
                "Shot %d/%d for target %s returned %d image(s)",
                shot_index + 1,
                self.shots_per_target,
                target.id,
                len(images),
            )
            for image in images:
                outputs.append(to_png_data_url(image))
                on_progress(len(outputs))
        return outputs


def select_scene_reference(
    scene_refs: Sequence[ImageAsset], shot_index: int
) -> ImageAsset:
    """Round-robin scene reference for a shot index."""
    return scene_refs[shot_index % len(scene_refs)]


def to_png_data_url(image: GeneratedImage) -> str:
    """Encode generated bytes as a PNG data URL."""
    encoded = base64.b64encode(image.data).decode("utf-8")
    return f"data:image/png;base64,{encoded}"
