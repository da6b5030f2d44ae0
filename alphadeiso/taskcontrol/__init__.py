"""Task control: status protocol and cooperative cancellation."""

from .task import (
    CancellationHandle,
    Task,
    TaskStatus,
)

__all__ = [
    'CancellationHandle',
    'Task',
    'TaskStatus',
]
