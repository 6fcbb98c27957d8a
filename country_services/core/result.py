from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from country_services.core.errors import (
    INVALID_MESSAGE,
    NULL_MESSAGE,
    ErrorKind,
    InvalidArgument,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    cause: Optional[BaseException] = None

    @property
    def message(self) -> str:
        return NULL_MESSAGE if self.kind is ErrorKind.NULL_ARGUMENT else INVALID_MESSAGE

    def to_error(self) -> InvalidArgument:
        return InvalidArgument(self.message, kind=self.kind)


Result = Union[Success[T], Failure]


def unwrap(result: "Result[T]") -> T:
    """Return the success value or raise the collapsed InvalidArgument."""
    if isinstance(result, Success):
        return result.value
    raise result.to_error() from result.cause
