"""Domain models for catalog synchronization."""

from dataclasses import dataclass

STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class SyncOptions:
    """Options controlling a product dump sync run."""

    batch_size: int = 2000
    target_language: str = "cs"
    fallback_language: str = "en"
    strict_region: bool = False
    region_tag: str = ""
    progress_every: int = 100_000


@dataclass(frozen=True)
class SyncResult:
    """Counters and outcome of a sync run."""

    status: str
    processed: int
    saved: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the run reached the end of the stream."""
        return self.status == STATUS_COMPLETED
