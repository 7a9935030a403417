"""
Evaluation context: the explicit state shared by block evaluations.

One EvalContext carries what would otherwise be process-wide globals:
the artifact counter, the template registry, and the export header
generator together with its one-deep backup slot. Independent contexts
(separate documents, tests) never interfere with each other.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ada_babel.config import Settings, load_settings
from ada_babel.templates import TemplateRegistry, default_registry

# Produces the header text for an exported file from the origin document name.
HeaderGenerator = Callable[[str], str]

_UNSET = object()


@dataclass
class EvalContext:
    settings: Settings = field(default_factory=load_settings)
    templates: TemplateRegistry = field(default_factory=default_registry)
    remote: bool = False
    counter: int = 0
    header_generator: Optional[HeaderGenerator] = None
    _header_backup: object = field(default=_UNSET, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def temp_root(self) -> Path:
        """Directory that holds generated artifacts, created on demand."""
        if self.remote and self.settings.remote_temp_dir is not None:
            root = self.settings.remote_temp_dir
        else:
            root = self.settings.temp_dir
        root.mkdir(parents=True, exist_ok=True)
        return root

    def next_counter(self, increment: bool = True) -> int:
        with self._lock:
            if increment:
                self.counter += 1
            return self.counter

    # Header generator save/restore (used by the tangle hooks).

    @property
    def has_header_backup(self) -> bool:
        return self._header_backup is not _UNSET

    def push_header_generator(self, generator: HeaderGenerator) -> None:
        with self._lock:
            if self._header_backup is not _UNSET:
                raise RuntimeError("Export hooks are already active for this context")
            self._header_backup = self.header_generator
            self.header_generator = generator

    def pop_header_generator(self) -> None:
        with self._lock:
            if self._header_backup is _UNSET:
                raise RuntimeError("No saved header generator to restore")
            self.header_generator = self._header_backup  # type: ignore[assignment]
            self._header_backup = _UNSET
