from enum import Enum


class BookingStatus(str, Enum):
    """
    Lifecycle of a booking. `WAITING` is the only initial status, `APPROVED` and `REJECTED` are terminal
    """

    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def __str__(self) -> str:
        return f"{self.name}<{self.value}>"


class BookingState(str, Enum):
    """
    Filter used to list bookings, relative to the current time or to the booking status
    """

    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"

    def __str__(self) -> str:
        return f"{self.name}<{self.value}>"

    @classmethod
    def from_string(cls, value: str) -> "BookingState | None":
        """
        Parse a state name, ignoring case. Return None for unknown states.
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None
