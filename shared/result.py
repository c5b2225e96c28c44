"""Result helpers for operations that can fail while acquiring their input."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Optional, TypeVar


T = TypeVar("T")
E = TypeVar("E")


class CatalogReadError(Exception):
    """Raised (or carried by a :class:`Result`) when a catalog source is unreadable."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


@dataclass(slots=True)
class Result(Generic[T, E]):
    """Discriminated union capturing either a success value or an error."""

    value: Optional[T] = None
    error: Optional[E] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(value=value)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            if isinstance(self.error, BaseException):
                raise RuntimeError(f"Tried to unwrap error result: {self.error}") from self.error
            raise RuntimeError(f"Tried to unwrap error result: {self.error}")
        assert self.value is not None
        return self.value


__all__ = ["CatalogReadError", "Result"]
