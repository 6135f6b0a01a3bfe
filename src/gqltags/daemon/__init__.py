"""Background rebuild coordination for tag indexes."""

from gqltags.daemon.coordinator import (
    RebuildCoordinator,
    RebuildOutcome,
    RebuildState,
    RebuildStatus,
)

__all__ = [
    "RebuildCoordinator",
    "RebuildOutcome",
    "RebuildState",
    "RebuildStatus",
]
