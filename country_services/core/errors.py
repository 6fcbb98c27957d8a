from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Where a lookup failed. Callers only ever see InvalidArgument."""

    NULL_ARGUMENT = "null_argument"
    BLANK_ARGUMENT = "blank_argument"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    EMPTY_RESULT = "empty_result"
    CANCELLED = "cancelled"
    SIGNAL = "signal"


NULL_MESSAGE = "argument is null"
INVALID_MESSAGE = "argument is invalid"


class LookupCancelled(Exception):
    """The caller's cancel event fired before the response was read."""


class CancelSignalError(RuntimeError):
    """Waiting on the caller's cancel event failed; the error is chained."""


class InvalidArgument(ValueError):
    """Raised for every failed lookup, whatever the underlying cause."""

    def __init__(self, message: str = INVALID_MESSAGE, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.kind = kind

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__
