"""Consent check before overwriting the remote manifest."""

from dataclasses import dataclass
from pathlib import PurePath
from typing import Awaitable, Callable, Sequence

from loguru import logger

from script_sync.config import MANIFEST_NAME
from script_sync.utils import is_interactive, prompt_confirm

CONFIRM_MESSAGE = "Manifest file has been updated. Do you want to push and overwrite?"

ConfirmPrompt = Callable[..., Awaitable[bool]]


@dataclass(frozen=True)
class GateDecision:
    proceed: bool
    force_now_true: bool = False


class ManifestGate:
    """
    Decides whether a push may go ahead when the manifest is among the changes.

    Only the manifest needs consent; every other file is pushed as is.
    """

    def __init__(
        self,
        manifest_name: str = MANIFEST_NAME,
        confirm: ConfirmPrompt = prompt_confirm,
        interactive: Callable[[], bool] = is_interactive,
    ):
        self.manifest_name = manifest_name
        self.confirm = confirm
        self.interactive = interactive

    def manifest_changed(self, changed_paths: Sequence[str]) -> bool:
        return any(PurePath(path).name == self.manifest_name for path in changed_paths)

    async def should_proceed(self, changed_paths: Sequence[str], force_already: bool) -> GateDecision:
        if not self.manifest_changed(changed_paths) or force_already:
            return GateDecision(proceed=True)

        if not self.interactive():
            logger.info("Manifest changed in a non-interactive session, not overwriting")
            return GateDecision(proceed=False)

        if await self.confirm(CONFIRM_MESSAGE, default=False):
            return GateDecision(proceed=True, force_now_true=True)
        return GateDecision(proceed=False)
