"""Generic event registry with once-listeners and snapshot dispatch."""

import logging
from threading import RLock
from typing import Any, Dict, Generic, List, Optional, Self, TypeVar

from eventer.core.listener import NO_PAYLOAD, Listener, ListenerEntry

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=str)


class EventRegistry(Generic[E]):
    """A registry of named-event listeners that can be dispatched on demand.

    Typical usage:
        registry: EventRegistry[str] = EventRegistry()

        def on_hello(data):
            print(f"Hello listener received: {data}")

        registry.register("hello", on_hello).register("bye", print, once=True)
        registry.dispatch("hello", {"eventData": "Hello there!"})
        registry.dispatch("bye")  # print() is called with no arguments, then dropped
        registry.unregister("hello", on_hello)

    Listeners run synchronously on the caller's thread, in registration order.
    Each dispatch works on a snapshot of the event's listeners taken when the
    dispatch starts, so listeners that register or unregister others only
    affect later dispatches. A once-listener is called by exactly one dispatch,
    even when nested or concurrent dispatches share it in their snapshots. Exceptions raised by a listener propagate to the
    caller of `dispatch` and the rest of that pass is skipped.

    Type Parameters:
        E: The event names accepted by this registry (``str`` or a ``Literal`` of names)
    """

    def __init__(self) -> None:
        """Initialize a registry with no known events."""
        self._listener_entries_by_event: Dict[E, List[ListenerEntry]] = {}
        self._lock = RLock()

    def _get_or_create_entries(self, event_name: E) -> List[ListenerEntry]:
        # Caller must hold self._lock.
        entries = self._listener_entries_by_event.get(event_name)
        if entries is None:
            entries = []
            self._listener_entries_by_event[event_name] = entries
        return entries

    def register(self, event_name: E, listener: Listener, *, once: bool = False) -> Self:
        """Add `listener` to event `event_name`.

        Registering the same listener more than once adds independent entries.

        Args:
            event_name: Name of the event to listen to.
            listener: Callable taking the event payload (or nothing, for events without data).
            once: Drop the listener after it has been called once.

        Returns:
            This registry, for chaining.
        """
        with self._lock:
            self._get_or_create_entries(event_name).append(ListenerEntry(listener=listener, once=once))
        logger.debug("Registered listener %r for event '%s' (once=%s)", listener, event_name, once)
        return self

    def unregister(self, event_name: E, listener: Listener) -> Self:
        """Remove the first registration of `listener` from event `event_name`.

        Unknown events and listeners that are not registered are ignored.
        An unknown event is not created by this call.

        Args:
            event_name: Name of the event.
            listener: The listener to remove.

        Returns:
            This registry, for chaining.
        """
        with self._lock:
            entries = self._listener_entries_by_event.get(event_name)
            if entries is None:
                return self
            for index, entry in enumerate(entries):
                if entry.matches(listener):
                    del entries[index]
                    logger.debug("Unregistered listener %r from event '%s'", listener, event_name)
                    break
        return self

    def dispatch(self, event_name: E, payload: Any = NO_PAYLOAD) -> Self:
        """Call every listener of event `event_name`.

        Listeners are called in registration order with `payload`, or with no
        arguments when `payload` is omitted. Once-listeners that were called are
        removed after the pass. If a listener raises, the exception propagates,
        the remaining listeners are skipped, and once-listeners already called
        (including the failing one) are still removed.

        Args:
            event_name: Name of the event.
            payload: Data to pass to the listeners.

        Returns:
            This registry, for chaining.
        """
        with self._lock:
            entries = self._listener_entries_by_event.get(event_name)
            if not entries:
                return self
            snapshot = list(entries)

        logger.debug("Dispatching event '%s' to %d listeners", event_name, len(snapshot))
        called_once_entries: List[ListenerEntry] = []
        try:
            for entry in snapshot:
                if entry.once:
                    if not self._claim(entry):
                        continue
                    called_once_entries.append(entry)
                try:
                    entry.invoke(payload)
                except Exception:
                    logger.debug("Listener %r for event '%s' raised", entry.listener, event_name, exc_info=True)
                    raise
        finally:
            if called_once_entries:
                self._discard_entries(event_name, called_once_entries)
        return self

    def _claim(self, entry: ListenerEntry) -> bool:
        # A once-entry fires for the first dispatch that reaches it, even when other
        # dispatches (nested or on other threads) hold it in their snapshots.
        with self._lock:
            if entry.fired:
                return False
            entry.fired = True
            return True

    def _discard_entries(self, event_name: E, discarded: List[ListenerEntry]) -> None:
        discarded_ids = {id(entry) for entry in discarded}
        with self._lock:
            entries = self._listener_entries_by_event.get(event_name)
            if entries is None:
                return
            entries[:] = [entry for entry in entries if id(entry) not in discarded_ids]

    def notify(self, event_name: E) -> Self:
        """Dispatch an event that carries no data."""
        return self.dispatch(event_name)

    def emit(self, event_name: E, payload: Any) -> Self:
        """Dispatch an event with `payload`, even when the payload is None."""
        return self.dispatch(event_name, payload)

    # DOM-style names (addEventListener, removeEventListener, dispatchEvent).
    def add_event_listener(self, event_name: E, listener: Listener, *, once: bool = False) -> Self:
        return self.register(event_name, listener, once=once)

    def remove_event_listener(self, event_name: E, listener: Listener) -> Self:
        return self.unregister(event_name, listener)

    def dispatch_event(self, event_name: E, payload: Any = NO_PAYLOAD) -> Self:
        return self.dispatch(event_name, payload)

    def has_event(self, event_name: E) -> bool:
        """Return True if `event_name` has ever had a listener registered, even if it has none now."""
        with self._lock:
            return event_name in self._listener_entries_by_event

    def listener_count(self, event_name: E) -> int:
        """Return the number of entries currently registered for `event_name`."""
        with self._lock:
            return len(self._listener_entries_by_event.get(event_name, ()))

    def get_listeners(self, event_name: E) -> List[ListenerEntry]:
        """Return a *copy* of the entries registered for `event_name`."""
        with self._lock:
            return list(self._listener_entries_by_event.get(event_name, ()))

    def event_names(self) -> List[E]:
        """Return every known event name, in the order they were first registered."""
        with self._lock:
            return list(self._listener_entries_by_event)

    def clear(self, event_name: Optional[E] = None) -> Self:
        """Remove all listeners of `event_name`, or of every event when omitted.

        Cleared events stay known to `has_event`.
        """
        with self._lock:
            if event_name is None:
                for entries in self._listener_entries_by_event.values():
                    entries.clear()
            else:
                entries = self._listener_entries_by_event.get(event_name)
                if entries is not None:
                    entries.clear()
        return self
