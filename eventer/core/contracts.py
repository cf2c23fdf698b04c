"""Runtime payload contracts for typed event registries."""

import logging
from threading import Lock
from typing import Any, Dict, Mapping, Optional, Self

from pydantic import TypeAdapter, ValidationError

from eventer.core.listener import NO_PAYLOAD
from eventer.core.registry import E, EventRegistry
from eventer.exceptions import PayloadContractError
from eventer.settings import Settings

logger = logging.getLogger(__name__)


class EventCatalogue:
    """The events an application declares, with the payload type each one carries.

    A contract of ``None`` declares an event that carries no data. Any other
    contract is a type pydantic can validate against: a ``BaseModel``, a
    ``TypedDict``, a dataclass, a builtin, a ``Union``...

    Example:
        class HelloData(TypedDict):
            eventData: str

        catalogue = EventCatalogue({"helloEvent": HelloData, "byeEvent": None})
        catalogue.check("helloEvent", {"eventData": "Hello there!"})  # ok
        catalogue.check("byeEvent", {"unexpected": True})  # raises PayloadContractError

    Event names missing from the catalogue are not checked.
    """

    def __init__(self, contracts: Mapping[str, Any]) -> None:
        self._contracts: Dict[str, Any] = dict(contracts)
        self._adapters: Dict[str, TypeAdapter] = {}
        self._adapters_lock = Lock()

    def declares(self, event_name: str) -> bool:
        return event_name in self._contracts

    def contract_for(self, event_name: str) -> Optional[Any]:
        """Return the payload type declared for `event_name` (None for no-data or undeclared events)."""
        return self._contracts.get(event_name)

    def requires_payload(self, event_name: str) -> bool:
        return self._contracts.get(event_name) is not None

    def _adapter_for(self, event_name: str) -> TypeAdapter:
        with self._adapters_lock:
            adapter = self._adapters.get(event_name)
            if adapter is None:
                adapter = TypeAdapter(self._contracts[event_name])
                self._adapters[event_name] = adapter
            return adapter

    def check(self, event_name: str, payload: Any = NO_PAYLOAD) -> None:
        """Validate `payload` against the contract of `event_name`.

        The payload is only inspected; it is never coerced or replaced.

        Raises:
            PayloadContractError: If a no-data event gets a payload, a data event gets
                none, or the payload fails validation.
        """
        if event_name not in self._contracts:
            return
        if not self.requires_payload(event_name):
            if payload is not NO_PAYLOAD:
                raise PayloadContractError(event_name, "event carries no data but a payload was given")
            return
        if payload is NO_PAYLOAD:
            raise PayloadContractError(event_name, "event requires a payload but none was given")
        try:
            self._adapter_for(event_name).validate_python(payload)
        except ValidationError as e:
            raise PayloadContractError(event_name, f"payload does not match its contract: {e}") from e


class TypedEventRegistry(EventRegistry[E]):
    """An EventRegistry that checks dispatched payloads against an EventCatalogue.

    In strict mode a payload that breaks its contract raises PayloadContractError
    before any listener runs. Otherwise the problem is logged and the event is
    dispatched anyway.
    """

    def __init__(self, catalogue: EventCatalogue, strict: Optional[bool] = None) -> None:
        """Initialize a typed registry.

        Args:
            catalogue: The declared events and their payload types.
            strict: Reject bad payloads. Defaults to the EVENTER_STRICT_CONTRACTS setting.
        """
        super().__init__()
        self._catalogue = catalogue
        self._strict = Settings().get_strict_contracts() if strict is None else strict

    @property
    def catalogue(self) -> EventCatalogue:
        return self._catalogue

    @property
    def strict(self) -> bool:
        return self._strict

    def dispatch(self, event_name: E, payload: Any = NO_PAYLOAD) -> Self:
        try:
            self._catalogue.check(event_name, payload)
        except PayloadContractError as e:
            if self._strict:
                raise
            logger.warning(f"Dispatching despite contract violation: {e}")
        return super().dispatch(event_name, payload)
