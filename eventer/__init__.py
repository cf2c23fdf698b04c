"""A strongly-typed publish/subscribe event registry."""

from .core import NO_PAYLOAD, EventCatalogue, EventRegistry, Listener, ListenerEntry, TypedEventRegistry
from .exceptions import EventerConfigurationError, EventerException, PayloadContractError

__all__ = [
    "EventRegistry",
    "TypedEventRegistry",
    "EventCatalogue",
    "ListenerEntry",
    "Listener",
    "NO_PAYLOAD",
    "EventerException",
    "EventerConfigurationError",
    "PayloadContractError",
]
