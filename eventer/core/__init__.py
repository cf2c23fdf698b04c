"""Event registry core: listener storage, dispatch and payload contracts."""

from .contracts import EventCatalogue, TypedEventRegistry
from .listener import NO_PAYLOAD, Listener, ListenerEntry
from .registry import EventRegistry

__all__ = ["EventRegistry", "TypedEventRegistry", "EventCatalogue", "ListenerEntry", "Listener", "NO_PAYLOAD"]
