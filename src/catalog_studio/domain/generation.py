"""Domain models for batch generation progress."""

from dataclasses import dataclass, field
from enum import StrEnum


class GenerationStatus(StrEnum):
    """Lifecycle of a single target within a batch."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


_ALLOWED_TRANSITIONS: dict[GenerationStatus, set[GenerationStatus]] = {
    GenerationStatus.PENDING: {GenerationStatus.PROCESSING},
    GenerationStatus.PROCESSING: {GenerationStatus.COMPLETED, GenerationStatus.ERROR},
    GenerationStatus.COMPLETED: set(),
    GenerationStatus.ERROR: set(),
}


@dataclass(frozen=True)
class GeneratedImage:
    """Single image part returned by the generation service."""

    data: bytes
    mime_type: str = "image/png"


@dataclass
class GenerationRecord:
    """Per-target progress owned by the batch orchestrator."""

    target_id: str
    shots_per_target: int
    images: list[str] = field(default_factory=list)
    status: GenerationStatus = GenerationStatus.PENDING
    error: str | None = None
    progress: int = 0

    def start(self) -> None:
        """Move the record into processing."""
        self._transition(GenerationStatus.PROCESSING)

    def report_progress(self, count: int) -> None:
        """Update the shot counter, clamped to the shots-per-target bound."""
        self.progress = max(0, min(count, self.shots_per_target))

    def complete(self, images: list[str]) -> None:
        """Store the produced images and mark the record completed."""
        self._transition(GenerationStatus.COMPLETED)
        self.images = list(images)
        self.progress = self.shots_per_target
        self.error = None

    def fail(self, message: str) -> None:
        """Mark the record failed; partial outputs are not kept."""
        self._transition(GenerationStatus.ERROR)
        self.images = []
        self.error = message

    @property
    def is_terminal(self) -> bool:
        return self.status in {GenerationStatus.COMPLETED, GenerationStatus.ERROR}

    def _transition(self, new_status: GenerationStatus) -> None:
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid status transition {self.status} -> {new_status}"
            )
        self.status = new_status


@dataclass(frozen=True)
class RecordView:
    """Read-only copy of a record for observers."""

    target_id: str
    status: GenerationStatus
    progress: int
    images: tuple[str, ...]
    error: str | None

    @classmethod
    def from_record(cls, record: GenerationRecord) -> "RecordView":
        return cls(
            target_id=record.target_id,
            status=record.status,
            progress=record.progress,
            images=tuple(record.images),
            error=record.error,
        )


@dataclass(frozen=True)
class BatchSnapshot:
    """Point-in-time view of the orchestrator state."""

    records: tuple[RecordView, ...]
    active_index: int | None
    is_processing: bool
