"""
Publish/subscribe notifications for issued SQL statements.
"""

from .dispatcher import Notifier
from .events import SQL_EVENT, SQLEvent
from .log_subscriber import SQLLogSubscriber

__all__ = ["Notifier", "SQL_EVENT", "SQLEvent", "SQLLogSubscriber"]
