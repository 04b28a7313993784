"""One push attempt: consent check, push, report."""

from typing import Sequence

from loguru import logger
from rich.console import Console

from script_sync.services.file_service import ProjectFileService
from script_sync.sync.manifest_gate import ManifestGate
from script_sync.sync.utils import ForceFlag, format_push_summary


class SyncCycle:
    def __init__(
        self,
        file_service: ProjectFileService,
        gate: ManifestGate,
        force: ForceFlag,
        console: Console,
    ):
        self.file_service = file_service
        self.gate = gate
        self.force = force
        self.console = console

    async def run(self, changed_paths: Sequence[str]) -> bool:
        """Push pending changes.

        Returns:
            False when the push was declined and no further cycles should run,
            True otherwise. Push failures are not caught here.
        """
        logger.debug(f"Sync cycle for {len(changed_paths)} changed paths")

        decision = await self.gate.should_proceed(changed_paths, self.force.value)
        if not decision.proceed:
            self.console.print("Skipping push.")
            return False
        if decision.force_now_true:
            self.force.upgrade()

        with self.console.status("Pushing files..."):
            files = await self.file_service.push()

        self.console.print(format_push_summary(len(files)))
        for f in files:
            self.console.print(f"└─ {f.local_path}", markup=False, highlight=False)
        return True
