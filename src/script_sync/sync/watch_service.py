"""Watch service for script-sync."""

import asyncio
from typing import Awaitable, Callable, List, Optional

from loguru import logger
from rich.console import Console

from script_sync.services.file_service import ProjectFileService, WatchSubscription
from script_sync.sync.sync_cycle import SyncCycle


class WatchController:
    """Runs the initial push and, in watch mode, a push per batch of local changes.

    Batches never overlap: each one waits for the previous push to settle.
    The controller owns the subscription and is the only thing that stops it.
    """

    def __init__(
        self,
        file_service: ProjectFileService,
        cycle: SyncCycle,
        console: Console,
        watch: bool = False,
    ):
        self.file_service = file_service
        self.cycle = cycle
        self.console = console
        self.watch = watch
        self.subscription: Optional[WatchSubscription] = None
        self._lock = asyncio.Lock()
        self._on_ready: Callable[[], Awaitable[None]] = self.report_waiting

    async def report_waiting(self) -> None:
        self.console.print("Waiting for changes...")

    async def push_pending(self) -> bool:
        """Push whatever is pending right now."""
        pending = await self.file_service.list_changed_files()
        if not pending:
            self.console.print("Script is already up to date.")
            return True
        return await self.cycle.run([f.local_path for f in pending])

    async def handle_batch(self, paths: List[str]) -> bool:
        """Process one batch of changed paths from the watcher."""
        async with self._lock:
            if self.stopped:
                logger.debug(f"Watch stopped, ignoring {len(paths)} changed paths")
                return False

            if not await self.cycle.run(paths):
                self.stop()
                return False

        await self._on_ready()
        return True

    @property
    def stopped(self) -> bool:
        return self.subscription is not None and self.subscription.stopped

    def stop(self) -> None:
        if self.subscription is not None:
            self.subscription.stop()

    async def start(self, on_ready: Optional[Callable[[], Awaitable[None]]] = None) -> None:
        """Push pending changes, then keep pushing until the watch ends."""
        if on_ready is not None:
            self._on_ready = on_ready

        if not await self.push_pending() or not self.watch:
            return

        self.subscription = self.file_service.watch_local_files(self._on_ready, self.handle_batch)
        try:
            await self.subscription.wait()
        finally:
            self.stop()
        logger.debug("Watch session ended")
