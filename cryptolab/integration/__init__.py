# Integration Module
"""
Session event history shared by the RSA tool and the hash visualizer.
"""

from .event_log import DemoEvent, EventLog, EventType

__all__ = [
    'DemoEvent',
    'EventLog',
    'EventType',
]
