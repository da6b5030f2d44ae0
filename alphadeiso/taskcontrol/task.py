"""Task status protocol for running processing steps under a host scheduler.

A host creates a task, calls :meth:`Task.run` (usually from a worker thread)
and polls :attr:`Task.status`, :attr:`Task.finished_percentage` and
:attr:`Task.error_message` while it runs. Cancellation is cooperative: the
host calls :meth:`Task.cancel`, which sets a :class:`CancellationHandle` that
the task checks at its own suspension points.

Status flow::

    WAITING -> PROCESSING -> FINISHED | CANCELED | ERROR
"""

import logging
from enum import Enum
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class TaskStatus(Enum):
    WAITING = "waiting"
    PROCESSING = "processing"
    FINISHED = "finished"
    CANCELED = "canceled"
    ERROR = "error"


class CancellationHandle:
    """Cancel flag shared between the host and a running task."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class Task:
    """Base class for a unit of work run by a host scheduler.

    Subclasses implement :meth:`process`, which returns ``True`` when the work
    completed and ``False`` when it stopped because the handle was cancelled.
    Any exception escaping :meth:`process` ends the task in ``ERROR``.
    """

    def __init__(self) -> None:
        self.status = TaskStatus.WAITING
        self.error_message: Optional[str] = None
        self.handle = CancellationHandle()

    @property
    def description(self) -> str:
        raise NotImplementedError

    @property
    def finished_percentage(self) -> float:
        return 0.0

    @property
    def created_objects(self) -> List[Any]:
        return []

    def process(self) -> bool:
        raise NotImplementedError

    def cancel(self) -> None:
        self.handle.cancel()
        if self.status == TaskStatus.WAITING:
            self.status = TaskStatus.CANCELED

    def run(self) -> None:
        if self.handle.cancelled:
            logger.info(f"Task cancelled before start: {self.description}")
            self.status = TaskStatus.CANCELED
            return

        self.status = TaskStatus.PROCESSING
        try:
            completed = self.process()
        except Exception as e:
            logger.exception(f"Task failed: {self.description}")
            self.error_message = f"{self.description} failed: {type(e).__name__}: {e}"
            self.status = TaskStatus.ERROR
            return

        if completed:
            self.status = TaskStatus.FINISHED
        else:
            logger.info(f"Task cancelled: {self.description}")
            self.status = TaskStatus.CANCELED
