class EventerException(Exception):
    """Base exception for all eventer errors."""

    pass


class EventerConfigurationError(EventerException, ValueError):
    """Exception raised when an environment setting holds an invalid value."""

    pass


class PayloadContractError(EventerException, ValueError):
    """Exception raised when a dispatched payload does not match its event's declared contract."""

    def __init__(self, event_name: str, message: str) -> None:
        super().__init__(f"Event '{event_name}': {message}")
        self.event_name = event_name
