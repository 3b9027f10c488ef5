"""Exception types raised by the mood light core."""


class MoodLightError(Exception):
    """Base class for mood light errors."""


class InvalidSelectionError(MoodLightError, ValueError):
    """A selector value outside its enumeration was supplied.

    Raised before any state is touched, so the caller can simply
    re-issue a valid request.
    """

    def __init__(self, kind: str, value: object, size: int | None = None) -> None:
        self.kind = kind
        self.value = value
        self.size = size
        if size is None:
            message = f"Invalid {kind} selection: {value!r}"
        else:
            message = f"Invalid {kind} selection: {value!r} (expected int in [0, {size}))"
        super().__init__(message)
