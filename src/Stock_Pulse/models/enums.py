"""StrEnum types for the quote dashboard domain.

Values are lowercase strings. Use enum members in business logic, never raw strings.
"""

from enum import StrEnum


class ChangeDirection(StrEnum):
    """Direction of the day-over-day close change."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"
