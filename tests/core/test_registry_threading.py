import threading
from unittest.mock import MagicMock

from eventer.core.registry import EventRegistry

THREADS = 8
ROUNDS = 200


def _run_in_threads(target) -> None:
    barrier = threading.Barrier(THREADS)

    def worker():
        barrier.wait()
        target()

    threads = [threading.Thread(target=worker) for _ in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def test_concurrent_registration_keeps_every_entry():
    registry: EventRegistry[str] = EventRegistry()
    listener = MagicMock()

    def register_many():
        for _ in range(ROUNDS):
            registry.register("e", listener)

    _run_in_threads(register_many)

    assert registry.listener_count("e") == THREADS * ROUNDS


def test_concurrent_register_and_unregister_balance_out():
    registry: EventRegistry[str] = EventRegistry()
    listener = MagicMock()

    def register_then_unregister():
        for _ in range(ROUNDS):
            registry.register("e", listener)
            registry.unregister("e", listener)

    _run_in_threads(register_then_unregister)

    assert registry.listener_count("e") == 0
    assert registry.has_event("e")


def test_once_listener_fires_once_across_concurrent_dispatches():
    registry: EventRegistry[str] = EventRegistry()
    counter_lock = threading.Lock()
    calls = []

    def once_listener():
        with counter_lock:
            calls.append(1)

    registry.register("e", once_listener, once=True)
    registry.register("e", lambda: None)

    def dispatch_many():
        for _ in range(ROUNDS):
            registry.dispatch("e")

    _run_in_threads(dispatch_many)

    assert len(calls) == 1
    assert registry.listener_count("e") == 1


def test_overlapping_dispatches_call_once_listener_once():
    registry: EventRegistry[str] = EventRegistry()
    both_dispatching = threading.Barrier(2, timeout=5)
    once_listener = MagicMock()

    def gate():
        # Both dispatches hold a snapshot containing the once entry before either reaches it.
        both_dispatching.wait()

    registry.register("e", gate).register("e", once_listener, once=True)

    threads = [threading.Thread(target=registry.dispatch, args=("e",)) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert not both_dispatching.broken
    once_listener.assert_called_once_with()
    assert [entry.listener for entry in registry.get_listeners("e")] == [gate]


def test_listener_can_reenter_registry_from_another_thread():
    registry: EventRegistry[str] = EventRegistry()
    late = MagicMock()

    def registers_from_thread():
        thread = threading.Thread(target=registry.register, args=("e", late))
        thread.start()
        thread.join(timeout=5)
        assert not thread.is_alive()

    registry.register("e", registers_from_thread, once=True).dispatch("e").dispatch("e")

    late.assert_called_once_with()
