"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}",
            ) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class MoveDirection(_EnumMixin):
    """Direction used when swapping a file with its neighbour."""

    UP = "up"
    DOWN = "down"

    @property
    def offset(self) -> int:
        """Return the index offset of the neighbour."""
        return -1 if self is MoveDirection.UP else 1
