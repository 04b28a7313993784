"""Service for diffing, pushing and watching project files."""

import asyncio
import hashlib
import shutil
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, Dict, List, Optional, Protocol

from loguru import logger
from watchfiles import Change, awatch

from script_sync.config import ProjectConfig
from script_sync.ignore_utils import is_pushable, load_ignore_patterns
from script_sync.services.exceptions import PushError, WatchError
from script_sync.models import ChangedFile, PushedFile

ReadyCallback = Callable[[], Awaitable[None]]
BatchCallback = Callable[[List[str]], Awaitable[bool]]
BatchSource = Callable[[asyncio.Event], AsyncIterator[List[str]]]


class WatchSubscription:
    """
    An active subscription to local file changes.

    Batches are handed to `on_batch` one at a time; the next batch is not
    pulled from the source until the previous handler returned. `stop()` may
    be called any number of times, from inside a handler or from outside.
    """

    def __init__(self, source: BatchSource, on_ready: ReadyCallback, on_batch: BatchCallback):
        self._source = source
        self._on_ready = on_ready
        self._on_batch = on_batch
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> "WatchSubscription":
        """Start listening. Must be called from a running event loop."""
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return self

    def stop(self) -> None:
        if self._stop_event.is_set():
            return
        logger.debug("Stopping file watcher")
        self._stop_event.set()

    async def wait(self) -> None:
        """Wait for the subscription to end, re-raising whatever ended it."""
        if self._task is None:
            return
        await self._task

    async def _run(self) -> None:
        batches = self._source(self._stop_event)
        try:
            await self._on_ready()
            while not self._stop_event.is_set():
                try:
                    batch = await anext(batches)
                except StopAsyncIteration:
                    break
                except Exception as e:
                    logger.error(f"File watcher failed: {e}")
                    raise WatchError(f"File watcher failed: {e}") from e

                if self._stop_event.is_set():
                    break
                await self._on_batch(batch)
        finally:
            self.stop()
            await batches.aclose()


class ProjectFileService(Protocol):
    """What the push controller needs from a project store."""

    async def list_changed_files(self) -> List[ChangedFile]: ...

    async def push(self) -> List[PushedFile]: ...

    def watch_local_files(
        self, on_ready: ReadyCallback, on_batch: BatchCallback
    ) -> WatchSubscription: ...


def compute_checksum(path: Path) -> str:
    """SHA-256 hex digest of a file's bytes."""
    return hashlib.sha256(path.read_bytes()).hexdigest()


class MirrorFileService:
    """
    Project file service backed by a directory acting as the remote store.

    Features:
    - Checksum based diffing between project and store
    - Ignore file and suffix filtering
    - Stale remote files are removed on push
    - Debounced watching via watchfiles
    """

    def __init__(self, config: ProjectConfig):
        self.config = config
        self.base_path = config.home
        self.remote_path = config.remote_root

    def _local_files(self) -> Dict[str, Path]:
        patterns = load_ignore_patterns(self.base_path, self.config.ignore_file)
        files = {}
        for path in sorted(self.base_path.rglob("*")):
            if not path.is_file():
                continue
            relative = path.relative_to(self.base_path)
            if is_pushable(relative, self.config.file_extensions, patterns):
                files[relative.as_posix()] = path
        return files

    def _remote_checksums(self) -> Dict[str, str]:
        if not self.remote_path.exists():
            return {}
        return {
            path.relative_to(self.remote_path).as_posix(): compute_checksum(path)
            for path in self.remote_path.rglob("*")
            if path.is_file()
        }

    def _find_changes(self) -> List[ChangedFile]:
        remote = self._remote_checksums()
        changed = [
            ChangedFile(local_path=rel_path)
            for rel_path, path in self._local_files().items()
            if remote.get(rel_path) != compute_checksum(path)
        ]
        logger.debug(f"Changes found: {len(changed)}")
        return changed

    async def list_changed_files(self) -> List[ChangedFile]:
        """List project files that differ from the remote store."""
        return await asyncio.to_thread(self._find_changes)

    def _push(self) -> List[PushedFile]:
        patterns = load_ignore_patterns(self.base_path, self.config.ignore_file)
        local = self._local_files()
        remote = self._remote_checksums()
        pushed = []
        try:
            for rel_path, path in local.items():
                if remote.get(rel_path) == compute_checksum(path):
                    continue
                target = self.remote_path / rel_path
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(path, target)
                pushed.append(PushedFile(local_path=rel_path, remote_path=str(target)))

            # files the project could never have pushed are left alone
            stale = [
                rel_path
                for rel_path in sorted(remote.keys() - local.keys())
                if is_pushable(Path(rel_path), self.config.file_extensions, patterns)
            ]
            for rel_path in stale:
                logger.debug(f"Removing stale remote file: {rel_path}")
                (self.remote_path / rel_path).unlink()
            if stale:
                logger.info(f"Removed {len(stale)} stale files from {self.remote_path}")
        except OSError as e:
            logger.error(f"Failed to push files: {e}")
            raise PushError(f"Failed to push files: {e}") from e

        logger.info(f"Pushed {len(pushed)} files to {self.remote_path}")
        return pushed

    async def push(self) -> List[PushedFile]:
        """Write every changed project file to the remote store."""
        return await asyncio.to_thread(self._push)

    def filter_changes(self, change: Change, path: str) -> bool:
        """Only react to files that would be pushed"""
        try:
            relative = Path(path).relative_to(self.base_path)
        except ValueError:
            return False
        patterns = load_ignore_patterns(self.base_path, self.config.ignore_file)
        return is_pushable(relative, self.config.file_extensions, patterns)

    async def _batches(self, stop_event: asyncio.Event) -> AsyncIterator[List[str]]:
        async for changes in awatch(
            self.base_path,
            watch_filter=self.filter_changes,
            debounce=self.config.sync_delay,
            stop_event=stop_event,
            recursive=True,
        ):
            paths = sorted({Path(path).relative_to(self.base_path).as_posix() for _, path in changes})
            if paths:
                logger.debug(f"Detected changes: {paths}")
                yield paths

    def watch_local_files(
        self, on_ready: ReadyCallback, on_batch: BatchCallback
    ) -> WatchSubscription:
        """Start watching the project and return the subscription handle."""
        logger.debug(f"Watching {self.base_path}")
        return WatchSubscription(self._batches, on_ready, on_batch).start()
