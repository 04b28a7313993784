"""Tests for terminal detection and prompting."""

import sys

import pytest
from rich.prompt import Confirm

from script_sync.sync.manifest_gate import CONFIRM_MESSAGE, ManifestGate
from script_sync.utils import is_interactive, prompt_confirm


class _StubStream:
    def __init__(self, tty: bool):
        self.tty = tty

    def isatty(self) -> bool:
        return self.tty


class _StubAsk:
    """Stands in for Confirm.ask and records what it was asked."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.calls: list[tuple[str, bool]] = []

    def __call__(self, message: str, default: bool = True) -> bool:
        self.calls.append((message, default))
        return self.answer


@pytest.fixture
def terminal(monkeypatch):
    """Pretend both stdin and stdout are attached to a terminal."""
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.setattr(sys, "stdin", _StubStream(True))
    monkeypatch.setattr(sys, "stdout", _StubStream(True))


def test_interactive_on_terminal(terminal):
    assert is_interactive()


def test_not_interactive_under_ci(terminal, monkeypatch):
    monkeypatch.setenv("CI", "1")

    assert not is_interactive()


@pytest.mark.parametrize("stdin_tty,stdout_tty", [(False, True), (True, False), (False, False)])
def test_not_interactive_without_tty(monkeypatch, stdin_tty, stdout_tty):
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.setattr(sys, "stdin", _StubStream(stdin_tty))
    monkeypatch.setattr(sys, "stdout", _StubStream(stdout_tty))

    assert not is_interactive()


@pytest.mark.asyncio
async def test_prompt_confirm_delegates_to_rich(monkeypatch):
    ask = _StubAsk(True)
    monkeypatch.setattr(Confirm, "ask", ask)

    assert await prompt_confirm("Overwrite?")
    assert ask.calls == [("Overwrite?", False)]


@pytest.mark.asyncio
async def test_default_gate_prompts_on_terminal(terminal, monkeypatch):
    ask = _StubAsk(True)
    monkeypatch.setattr(Confirm, "ask", ask)

    decision = await ManifestGate().should_proceed(["appsscript.json"], force_already=False)

    assert decision.proceed
    assert decision.force_now_true
    assert ask.calls == [(CONFIRM_MESSAGE, False)]


@pytest.mark.asyncio
async def test_default_gate_declines_under_ci(terminal, monkeypatch):
    monkeypatch.setenv("CI", "true")
    ask = _StubAsk(True)
    monkeypatch.setattr(Confirm, "ask", ask)

    decision = await ManifestGate().should_proceed(["appsscript.json"], force_already=False)

    assert not decision.proceed
    assert ask.calls == []
