"""Result type for checks that collect every error instead of stopping at the first.

Validation carries either a value or a non-empty tuple of messages.
``accumulate`` combines independent checks and concatenates their messages.
``Validation.unwrap`` is the fail-fast bridge between pipeline stages: it
raises StageFailedError so later stages never run.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from docs_ts.exceptions import StageFailedError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Validation(Generic[T]):
    """Either a value (no errors) or the list of problems that prevented it."""

    value: T | None = None
    errors: tuple[str, ...] = ()

    @classmethod
    def success(cls, value: T) -> "Validation[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: Iterable[str]) -> "Validation[T]":
        errors = tuple(errors)
        if not errors:
            raise ValueError("A failed validation needs at least one error")
        return cls(errors=errors)

    @property
    def is_success(self) -> bool:
        return not self.errors

    def map(self, fn: Callable[[T], U]) -> "Validation[U]":
        """Apply fn to the value of a success; failures pass through untouched."""
        if self.errors:
            return Validation(errors=self.errors)
        return Validation(value=fn(self.value))  # type: ignore[arg-type]

    def unwrap(self, stage: str) -> T:
        """Return the value, or stop the pipeline at this stage with every collected error."""
        if self.errors:
            raise StageFailedError(stage, self.errors)
        return self.value  # type: ignore[return-value]


def accumulate(results: Iterable[Validation[T]]) -> Validation[list[T]]:
    """Combine independent results, keeping all values or all errors.

    Every result is inspected even after the first failure, so the returned
    failure carries the concatenation of all error tuples in input order.
    """
    values: list[T] = []
    errors: list[str] = []
    for result in results:
        if result.errors:
            errors.extend(result.errors)
        else:
            values.append(result.value)  # type: ignore[arg-type]
    if errors:
        return Validation.failure(errors)
    return Validation.success(values)
