"""Result type for explicit error handling.

Every release operation that can fail (option resolution, git, npm, mvn)
returns a Result instead of raising, so the pipeline can stop at the first
failing step and report it with context.

Usage:
    match release_version_of(metadata.version):
        case Ok(version):
            console.print(f"releasing {version}")
        case Err(error):
            console.error(error.reason)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying a value."""

    value: T

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying an error value."""

    error: E

    def unwrap(self) -> None:
        """Raises ValueError, there is no value to return.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
