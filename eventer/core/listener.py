"""Listener entries stored by the event registry."""

from dataclasses import dataclass, field
from typing import Any, Callable, Final, TypeAlias

# A listener takes the event payload, or nothing at all for events that carry no data.
Listener: TypeAlias = Callable[..., Any]


class _NoPayload:
    """Marker type for dispatches that carry no data."""

    _instance = None

    def __new__(cls) -> "_NoPayload":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_PAYLOAD"

    def __bool__(self) -> bool:
        return False


NO_PAYLOAD: Final = _NoPayload()


@dataclass(eq=False)
class ListenerEntry:
    """A registered listener with its metadata.

    Entries compare by identity: registering the same callable twice yields two
    distinct entries.

    Attributes:
        listener: The callable to invoke on dispatch.
        once: Whether the entry is dropped after its first invocation.
        fired: Set once a dispatch has claimed a once-entry; a claimed entry is never called again.
    """

    listener: Listener
    once: bool = False
    fired: bool = field(default=False, init=False, repr=False)

    def invoke(self, payload: Any = NO_PAYLOAD) -> Any:
        """Call the listener, passing `payload` unless it is NO_PAYLOAD."""
        if payload is NO_PAYLOAD:
            return self.listener()
        return self.listener(payload)

    def matches(self, listener: Listener) -> bool:
        return self.listener == listener
