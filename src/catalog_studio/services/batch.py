"""Batch orchestration across all target garments."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from catalog_studio.domain.assets import ImageAsset
from catalog_studio.domain.errors import PreconditionError
from catalog_studio.domain.generation import (
    BatchSnapshot,
    GenerationRecord,
    GenerationStatus,
    RecordView,
)
from catalog_studio.services.generation import (
    SHOTS_PER_TARGET,
    ImageGenerationClient,
    TargetGenerator,
)
from catalog_studio.services.shot_requests import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_SIZE,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], ImageGenerationClient]


@dataclass
class BatchOrchestrator:
    """Run targets one after another and track a record per target.

    The orchestrator is the only writer of its records. A failure while
    generating one target is stored on that target's record and the loop
    moves on to the next target.
    """

    client_factory: ClientFactory
    model: str
    shots_per_target: int = SHOTS_PER_TARGET
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    image_size: str = DEFAULT_IMAGE_SIZE
    records: list[GenerationRecord] = field(default_factory=list, init=False)
    active_index: int | None = field(default=None, init=False)
    is_processing: bool = field(default=False, init=False)
    _client: ImageGenerationClient | None = field(default=None, init=False)

    def check_preconditions(
        self,
        targets: Sequence[ImageAsset],
        scene_refs: Sequence[ImageAsset],
        credential: str | None,
    ) -> bool:
        """Return False when there is nothing to run; raise if a batch can't start."""
        if not targets or not scene_refs:
            return False
        if self.is_processing:
            raise PreconditionError("A batch is already running")
        if credential is None or not credential.strip():
            raise PreconditionError("API key not found")
        return True

    def reserve(
        self,
        targets: Sequence[ImageAsset],
        scene_refs: Sequence[ImageAsset],
        credential: str | None,
    ) -> bool:
        """Claim the orchestrator for a batch without awaiting.

        Returns False when there is nothing to run. After a True return the
        caller must follow up with ``run_reserved``.
        """
        if not self.check_preconditions(targets, scene_refs, credential):
            return False
        self.is_processing = True
        return True

    async def run_batch(
        self,
        targets: Sequence[ImageAsset],
        scene_refs: Sequence[ImageAsset],
        credential: str | None,
    ) -> None:
        """Generate shots for every target, in order."""
        if not self.reserve(targets, scene_refs, credential):
            logger.info("Batch skipped: no targets or no scene references")
            return
        await self.run_reserved(targets, scene_refs, credential)

    async def run_reserved(
        self,
        targets: Sequence[ImageAsset],
        scene_refs: Sequence[ImageAsset],
        credential: str,
    ) -> None:
        """Run a batch previously claimed with ``reserve``."""
        targets = tuple(targets)
        scene_refs = tuple(scene_refs)
        try:
            self._client = self.client_factory(credential)
            generator = TargetGenerator(
                client=self._client,
                model=self.model,
                shots_per_target=self.shots_per_target,
                aspect_ratio=self.aspect_ratio,
                image_size=self.image_size,
            )
            self.records = [
                GenerationRecord(
                    target_id=target.id, shots_per_target=self.shots_per_target
                )
                for target in targets
            ]
            logger.info(
                "Batch started: %d target(s), %d scene reference(s)",
                len(targets),
                len(scene_refs),
            )
            for index, target in enumerate(targets):
                self.active_index = index
                await self._process_target(
                    generator, self.records[index], target, scene_refs
                )
        finally:
            self.active_index = None
            self.is_processing = False
            await self.close()
        logger.info(
            "Batch finished: %d completed, %d failed",
            sum(1 for r in self.records if r.status == GenerationStatus.COMPLETED),
            sum(1 for r in self.records if r.status == GenerationStatus.ERROR),
        )

    async def close(self) -> None:
        """Close the generation client of the running batch, if any."""
        client, self._client = self._client, None
        if client is not None:
            await client.close()

    def snapshot(self) -> BatchSnapshot:
        """Return an immutable view for observers."""
        return BatchSnapshot(
            records=tuple(RecordView.from_record(record) for record in self.records),
            active_index=self.active_index,
            is_processing=self.is_processing,
        )

    def get_record(self, target_id: str) -> GenerationRecord | None:
        for record in self.records:
            if record.target_id == target_id:
                return record
        return None

    async def _process_target(
        self,
        generator: TargetGenerator,
        record: GenerationRecord,
        target: ImageAsset,
        scene_refs: Sequence[ImageAsset],
    ) -> None:
        record.start()
        try:
            images = await generator.generate_for_target(
                target, scene_refs, record.report_progress
            )
        except Exception as exc:
            logger.exception(
                "Generation failed for target",
                extra={"target_id": target.id},
            )
            record.fail(str(exc) or type(exc).__name__)
            return
        record.complete(images)
