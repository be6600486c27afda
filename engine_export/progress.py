"""
Progress reporting for the export loops.

The paginator and the curation URL resolver report through a
ProgressReporter so they can run without a terminal.
"""

from __future__ import annotations

from typing import Optional

from tqdm import tqdm


class ProgressReporter:
    """Observer interface for long-running loops."""

    def start(self, label: str, total: int) -> None:
        pass

    def advance(self, n: int = 1) -> None:
        pass

    def finish(self) -> None:
        pass


class NullProgress(ProgressReporter):
    """Reports nothing."""


class TqdmProgress(ProgressReporter):
    """Renders each loop as a tqdm bar labelled with the stage banner."""

    def __init__(self, unit: str = "it", leave: bool = True):
        self.unit = unit
        self.leave = leave
        self._bar: Optional[tqdm] = None

    def start(self, label: str, total: int) -> None:
        self.finish()
        self._bar = tqdm(total=total, desc=label, unit=self.unit, leave=self.leave)

    def advance(self, n: int = 1) -> None:
        if self._bar is not None:
            self._bar.update(n)

    def finish(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
