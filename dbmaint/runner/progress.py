"""
Progress monitors.

The executor reports through the `ProgressMonitor` protocol and polls it for
cancellation before every action.
"""

from logging import getLogger
from typing import TextIO

logger = getLogger(__name__)


class NullProgressMonitor:
    """Tracks progress silently. Cancellation is requested with `cancel()`."""

    def __init__(self):
        self.label = None
        self.sub_label = None
        self.total = 0
        self.units = 0
        self.finished = False
        self._cancelled = False

    def begin_task(self, label: str, total: int) -> None:
        self.label = label
        self.total = total
        self.units = 0
        self.finished = False

    def sub_task(self, label: str) -> None:
        self.sub_label = label

    def worked(self, units: int) -> None:
        self.units += units

    def cancel(self) -> None:
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> None:
        self.finished = True


class WriterProgressMonitor(NullProgressMonitor):
    """Echoes task and sub-task labels to a text sink, one line each."""

    def __init__(self, stream: TextIO):
        super().__init__()
        self.stream = stream

    def _write(self, line: str):
        self.stream.write(line + "\n")
        self.stream.flush()

    def begin_task(self, label: str, total: int) -> None:
        super().begin_task(label, total)
        self._write(label)

    def sub_task(self, label: str) -> None:
        super().sub_task(label)
        self._write(label)

    def cancel(self) -> None:
        super().cancel()
        logger.info("Cancellation requested for %r", self.label)
