"""
Typed outcome of a storage read or write
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """Either a value or the error that prevented producing one"""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "StorageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "StorageResult[T]":
        return cls(error=error)

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default when the operation failed or found nothing"""
        if not self.ok or self.value is None:
            return default
        return self.value
