"""Rebuild coordination: one rebuild per tag file, coalesced follow-ups."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog

from gqltags.config.models import TagsConfig
from gqltags.core.errors import GqlTagsError, InternalError, TagIndexError
from gqltags.index.builder import TagIndexBuilder
from gqltags.index.models import BuildResult, EntityDeclaration, TagIndex, Workspace
from gqltags.index.resolver import resolve_tag_file_path
from gqltags.index.tagfile import read_tag_file, write_tag_file

logger = structlog.get_logger()


class RebuildState(Enum):
    """Per tag file rebuild state."""

    IDLE = "idle"
    BUILDING = "building"
    FAILED = "failed"


@dataclass(frozen=True)
class RebuildOutcome:
    """What a triggered rebuild produced."""

    destination: Path | None
    result: BuildResult | None = None
    error: GqlTagsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def index(self) -> TagIndex | None:
        return self.result.index if self.result is not None else None


@dataclass
class RebuildStatus:
    """Current state for one tag file."""

    state: RebuildState
    pending: bool = False
    last_error: str | None = None
    rebuilds_completed: int = 0


@dataclass
class _Slot:
    destination: Path
    workspace: Workspace
    state: RebuildState = RebuildState.IDLE
    index: TagIndex | None = None
    pending: bool = False
    driver: asyncio.Task[RebuildOutcome] | None = None
    last_error: GqlTagsError | None = None
    rebuilds_completed: int = 0

    @property
    def in_flight(self) -> bool:
        return self.driver is not None and not self.driver.done()


@dataclass
class RebuildCoordinator:
    """
    Runs tag index rebuilds off the event loop and publishes their results.

    Design:
    - Each tag file path has one slot; at most one rebuild runs per slot
    - Triggers during a rebuild set a single pending flag, so any number of
      them cause exactly one follow-up rebuild
    - The committed index is swapped by a single reference assignment;
      readers see the old index or the new one, never a mix
    - A failed rebuild leaves the previous index in place

    Trigger methods must be called from the event loop thread. Queries may
    be made from any thread.
    """

    config: TagsConfig = field(default_factory=TagsConfig)
    max_workers: int = 2

    _executor: ThreadPoolExecutor | None = field(default=None, init=False)
    _slots: dict[Path, _Slot] = field(default_factory=dict, init=False)
    _on_complete: Callable[[RebuildOutcome], Awaitable[None]] | None = field(
        default=None, init=False
    )

    def start(self) -> None:
        """Start the rebuild thread pool."""
        if self._executor is not None:
            return
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="gqltags-rebuild",
        )
        logger.info("rebuild_coordinator_started", max_workers=self.max_workers)

    async def stop(self) -> None:
        """Wait for in-flight rebuilds, then shut the thread pool down."""
        drivers = [s.driver for s in self._slots.values() if s.in_flight]
        if drivers:
            await asyncio.gather(*drivers, return_exceptions=True)

        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        logger.info("rebuild_coordinator_stopped")

    def set_on_complete(self, callback: Callable[[RebuildOutcome], Awaitable[None]]) -> None:
        """Set callback to invoke after every rebuild attempt."""
        self._on_complete = callback

    # =========================================================================
    # Triggers
    # =========================================================================

    def on_save(self, workspace: Workspace) -> asyncio.Future[RebuildOutcome]:
        return self.request_rebuild(workspace)

    def on_first_access(self, workspace: Workspace) -> asyncio.Future[RebuildOutcome] | None:
        """Make an index available, rebuilding only if no tag file exists.

        Returns the rebuild future when one was started or is running, else
        None (an index is already committed or was loaded from disk).
        """
        try:
            destination = resolve_tag_file_path(workspace, self.config)
        except TagIndexError:
            return self.request_rebuild(workspace)

        slot = self._slots.get(destination)
        if slot is not None:
            if slot.in_flight:
                return slot.driver
            if slot.index is not None:
                return None

        if not destination.is_file():
            return self.request_rebuild(workspace)

        try:
            contents = read_tag_file(destination)
        except TagIndexError as e:
            logger.warning("tag_file_unreadable", path=str(destination), error=e.message)
            return self.request_rebuild(workspace)

        slot = self._slots.setdefault(destination, _Slot(destination, workspace))
        slot.index = contents.index
        logger.info(
            "tag_file_loaded",
            path=str(destination),
            declarations=len(contents.index),
            skipped_lines=contents.skipped_lines,
        )
        return None

    def request_rebuild(self, workspace: Workspace) -> asyncio.Future[RebuildOutcome]:
        """Start a rebuild, or schedule one follow-up if one is running."""
        loop = asyncio.get_running_loop()
        try:
            destination = resolve_tag_file_path(workspace, self.config)
        except TagIndexError as e:
            logger.warning("rebuild_unresolvable", error=e.message)
            future: asyncio.Future[RebuildOutcome] = loop.create_future()
            future.set_result(RebuildOutcome(destination=None, error=e))
            return future

        slot = self._slots.get(destination)
        if slot is None:
            slot = self._slots[destination] = _Slot(destination, workspace)
        slot.workspace = workspace

        driver = slot.driver
        if driver is not None and not driver.done():
            slot.pending = True
            logger.debug("rebuild_coalesced", path=str(destination))
            return driver

        self.start()
        slot.driver = loop.create_task(self._drive(slot))
        return slot.driver

    async def _drive(self, slot: _Slot) -> RebuildOutcome:
        while True:
            slot.pending = False
            outcome = await self._rebuild_once(slot)
            if not slot.pending:
                return outcome
            logger.debug("rebuild_follow_up", path=str(slot.destination))

    async def _rebuild_once(self, slot: _Slot) -> RebuildOutcome:
        slot.state = RebuildState.BUILDING
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                self._executor,
                self._build_sync,
                slot.workspace,
                slot.destination,
            )
        except GqlTagsError as e:
            outcome = self._fail(slot, e)
        except Exception as e:
            logger.exception("rebuild_crashed", path=str(slot.destination))
            outcome = self._fail(slot, InternalError.unexpected(str(e)))
        else:
            # Single reference assignment: the swap readers observe
            slot.index = result.index
            slot.state = RebuildState.IDLE
            slot.last_error = None
            slot.rebuilds_completed += 1
            outcome = RebuildOutcome(destination=slot.destination, result=result)

        if self._on_complete is not None:
            try:
                await self._on_complete(outcome)
            except Exception:
                logger.exception("rebuild_callback_failed", path=str(slot.destination))
        return outcome

    def _fail(self, slot: _Slot, error: GqlTagsError) -> RebuildOutcome:
        slot.state = RebuildState.FAILED
        slot.last_error = error
        logger.error("rebuild_failed", path=str(slot.destination), error=str(error))
        return RebuildOutcome(destination=slot.destination, error=error)

    def _build_sync(self, workspace: Workspace, destination: Path) -> BuildResult:
        """Synchronous build + write - runs in thread pool."""
        result = TagIndexBuilder(self.config).build(workspace)
        write_tag_file(result.index, destination)
        return result

    # =========================================================================
    # Queries
    # =========================================================================

    def _slot_for(self, workspace: Workspace) -> _Slot | None:
        try:
            destination = resolve_tag_file_path(workspace, self.config)
        except TagIndexError:
            return None
        return self._slots.get(destination)

    def index_for(self, workspace: Workspace) -> TagIndex | None:
        slot = self._slot_for(workspace)
        return slot.index if slot is not None else None

    def lookup(self, workspace: Workspace, name: str) -> list[EntityDeclaration]:
        index = self.index_for(workspace)
        return index.lookup(name) if index is not None else []

    def status(self, workspace: Workspace) -> RebuildStatus:
        slot = self._slot_for(workspace)
        if slot is None:
            return RebuildStatus(state=RebuildState.IDLE)
        return RebuildStatus(
            state=slot.state,
            pending=slot.pending,
            last_error=str(slot.last_error) if slot.last_error else None,
            rebuilds_completed=slot.rebuilds_completed,
        )
