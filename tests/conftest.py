"""Common test fixtures."""

from io import StringIO
from pathlib import Path
from typing import AsyncIterator, List, Optional

import pytest
from rich.console import Console

from script_sync.config import ProjectConfig
from script_sync.models import ChangedFile, PushedFile
from script_sync.services.file_service import WatchSubscription
from script_sync.sync import ForceFlag, ManifestGate, SyncCycle, WatchController


class StubConfirm:
    """Records prompts and answers with a fixed value."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.calls: list[tuple[str, bool]] = []

    async def __call__(self, message: str, default: bool = False) -> bool:
        self.calls.append((message, default))
        return self.answer


class StubFileService:
    """In-memory project file service.

    `batches` are delivered in order by the watcher; `push_results` holds one
    result list per push call and the last one is repeated.
    """

    def __init__(
        self,
        pending: Optional[List[str]] = None,
        push_results: Optional[List[List[str]]] = None,
        batches: Optional[List[List[str]]] = None,
    ):
        self.pending = pending or []
        self.push_results = push_results or [[]]
        self.batches = batches or []
        self.push_calls = 0
        self.push_error: Optional[Exception] = None
        self.subscription: Optional[WatchSubscription] = None
        self.delivered: list[List[str]] = []

    async def list_changed_files(self) -> List[ChangedFile]:
        return [ChangedFile(local_path=p) for p in self.pending]

    async def push(self) -> List[PushedFile]:
        self.push_calls += 1
        if self.push_error:
            raise self.push_error
        paths = self.push_results[min(self.push_calls, len(self.push_results)) - 1]
        return [PushedFile(local_path=p, remote_path=f"remote/{p}") for p in paths]

    async def _batches(self, stop_event) -> AsyncIterator[List[str]]:
        for batch in self.batches:
            self.delivered.append(batch)
            yield batch

    def watch_local_files(self, on_ready, on_batch) -> WatchSubscription:
        self.subscription = WatchSubscription(self._batches, on_ready, on_batch).start()
        return self.subscription


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def test_console(output) -> Console:
    """Console that captures output instead of writing to a terminal."""
    return Console(file=output, width=120, force_terminal=False, color_system=None)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def test_config(project_dir, tmp_path) -> ProjectConfig:
    return ProjectConfig(home=project_dir, remote_root=tmp_path / "remote", env="test")


@pytest.fixture
def confirm_yes() -> StubConfirm:
    return StubConfirm(True)


@pytest.fixture
def confirm_no() -> StubConfirm:
    return StubConfirm(False)


@pytest.fixture
def make_controller(test_console):
    """Factory wiring a controller around a stub file service."""

    def _make(
        file_service: StubFileService,
        confirm: StubConfirm,
        interactive: bool = True,
        force: bool = False,
        watch: bool = False,
    ) -> WatchController:
        gate = ManifestGate(confirm=confirm, interactive=lambda: interactive)
        cycle = SyncCycle(
            file_service=file_service, gate=gate, force=ForceFlag(force), console=test_console
        )
        return WatchController(
            file_service=file_service, cycle=cycle, console=test_console, watch=watch
        )

    return _make
