"""
Infrastructure event handlers.
Turns task domain events into follow-up work and notifications.
"""

from .task_handlers import RecurringTaskHandler, TaskNotificationHandler
from .event_setup import build_event_dispatcher

__all__ = [
    "RecurringTaskHandler",
    "TaskNotificationHandler",
    "build_event_dispatcher",
]
