"""
Event Types for the Feed Session

Defines the events emitted while entries are filtered, so removal,
pagination and reporting can observe the session without coupling to it.
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union


@dataclass
class BaseEvent:
    """
    Base class for all feed session events.

    Provides common fields for event identification and timing.
    """
    timestamp: float = field(default_factory=time.time)
    session_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    event_id: str = field(default_factory=lambda: str(uuid.uuid4())[:12])

    @property
    def datetime(self) -> datetime:
        """Get event timestamp as datetime object."""
        return datetime.fromtimestamp(self.timestamp)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            'event_type': self.event_type,
            'timestamp': self.timestamp,
            'session_id': self.session_id,
            'event_id': self.event_id,
            'datetime': self.datetime.isoformat(),
            **{k: v for k, v in self.__dict__.items()
               if k not in ['timestamp', 'session_id', 'event_id']}
        }


@dataclass
class EntryRemovedEvent(BaseEvent):
    """Emitted when an entry is discarded."""
    entry_id: str = ""
    reason: str = ""
    linked_result: str = "none"
    triggered: List[str] = field(default_factory=list)


@dataclass
class EntryKeptEvent(BaseEvent):
    """Emitted when an entry is kept and counted."""
    entry_id: str = ""
    reason: str = ""
    accepted_count: int = 0


@dataclass
class LoadMoreRequestedEvent(BaseEvent):
    """Emitted when the session asks the feed for more entries."""
    accepted_count: int = 0
    target_load_count: int = 0


@dataclass
class CycleResetEvent(BaseEvent):
    """Emitted when a load-more cycle ends and the counter is reset."""
    accepted_count: int = 0
    target_load_count: int = 0
    cancelled: bool = False
    url: Optional[str] = None


EventType = Union[
    BaseEvent,
    EntryRemovedEvent,
    EntryKeptEvent,
    LoadMoreRequestedEvent,
    CycleResetEvent,
]
