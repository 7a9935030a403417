"""Shared fixtures: settings rooted in tmp_path and a fake subprocess runner."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from ada_babel.config import Settings
from ada_babel.context import EvalContext


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(temp_dir=tmp_path / "artifacts")


@pytest.fixture
def ctx(settings: Settings) -> EvalContext:
    return EvalContext(settings=settings)


@dataclass
class FakeRun:
    """Records subprocess.run calls and replays queued CompletedProcess results."""
    calls: list[dict] = field(default_factory=list)
    queue: list[object] = field(default_factory=list)
    on_call: Callable[[list[str]], None] | None = None

    def push(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.queue.append((returncode, stdout, stderr))

    def push_exception(self, exc: BaseException) -> None:
        self.queue.append(exc)

    def __call__(self, args, **kwargs):
        self.calls.append({"args": list(args), **kwargs})
        if self.on_call is not None:
            self.on_call(list(args))
        item = self.queue.pop(0) if self.queue else (0, "", "")
        if isinstance(item, BaseException):
            raise item
        returncode, stdout, stderr = item
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)

    @property
    def argvs(self) -> list[list[str]]:
        return [c["args"] for c in self.calls]


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr("ada_babel.runner.process.subprocess.run", fake)
    return fake
