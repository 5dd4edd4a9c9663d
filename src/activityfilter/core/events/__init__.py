"""
Event System for the Feed Session

Observer pattern implementation that lets removal, pagination and reporting
react to filtering decisions without coupling to the condition engine.
"""

from activityfilter.core.events.types import (
    BaseEvent,
    EntryRemovedEvent,
    EntryKeptEvent,
    LoadMoreRequestedEvent,
    CycleResetEvent,
)

from activityfilter.core.events.emitter import EventEmitter

__all__ = [
    'BaseEvent',
    'EntryRemovedEvent',
    'EntryKeptEvent',
    'LoadMoreRequestedEvent',
    'CycleResetEvent',
    'EventEmitter',
]
