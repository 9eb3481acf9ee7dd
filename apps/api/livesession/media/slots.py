"""Single-owner holder for live media objects."""
from __future__ import annotations

from typing import Generic, TypeVar

from .errors import SlotOccupiedError

T = TypeVar("T")


class OwnedSlot(Generic[T]):
    """Hold at most one object; a new one may only be installed after the old one is released."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._value: T | None = None

    def __bool__(self) -> bool:
        return self._value is not None

    def get(self) -> T | None:
        return self._value

    def install(self, value: T) -> T:
        if self._value is not None:
            raise SlotOccupiedError(f"A {self._name} is already active.")
        self._value = value
        return value

    def release(self) -> T | None:
        value, self._value = self._value, None
        return value
