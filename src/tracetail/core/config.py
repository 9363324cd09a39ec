"""Configuration for the event buffer and its consumers."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_CAPACITY = 10_000

CAPACITY_ENV = "TRACETAIL_BUFFER_CAPACITY"
FILTER_ENABLED_ENV = "TRACETAIL_FILTER_ENABLED"

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BufferConfig:
    """Settings shared by an event buffer and the views reading it.

    Attributes:
        capacity: Maximum number of events retained. Must be positive.
        filter_enabled: When False, views show every event and ignore
            filter text.
    """

    capacity: int = DEFAULT_CAPACITY
    filter_enabled: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ValueError(f"capacity must be an integer, got {self.capacity!r}")
        if self.capacity < 1:
            raise ValueError(f"capacity must be positive, got {self.capacity}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BufferConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            BufferConfig with defaults for any unset variable.

        Raises:
            ValueError: If a variable is set to a malformed value.
        """
        if environ is None:
            environ = os.environ

        capacity = DEFAULT_CAPACITY
        raw_capacity = environ.get(CAPACITY_ENV, "").strip()
        if raw_capacity:
            try:
                capacity = int(raw_capacity)
            except ValueError:
                raise ValueError(
                    f"{CAPACITY_ENV} must be an integer, got {raw_capacity!r}"
                ) from None

        filter_enabled = True
        raw_enabled = environ.get(FILTER_ENABLED_ENV, "").strip().lower()
        if raw_enabled in _FALSE_VALUES:
            filter_enabled = False
        elif raw_enabled and raw_enabled not in _TRUE_VALUES:
            raise ValueError(
                f"{FILTER_ENABLED_ENV} must be a boolean, got {raw_enabled!r}"
            )

        return cls(capacity=capacity, filter_enabled=filter_enabled)
