"""Domain models for diff options.

DiffOptions is the single options object handed to a diff engine. It is
built from command-line flags layered over an optional config file.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_CONTEXT_LINES = 3


class DiffAlgorithm(Enum):
    """Line-alignment strategy requested from the diff engine."""

    MYERS = "myers"
    PATIENCE = "patience"
    HISTOGRAM = "histogram"

    @classmethod
    def from_string(cls, value: str) -> DiffAlgorithm:
        """Parse DiffAlgorithm from string value.

        Raises:
            ValueError: If value is not a valid algorithm
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid diff algorithm: {value}. Must be one of: {', '.join(valid_values)}"
        )


@dataclass
class DiffOptions:
    """Options controlling line alignment and hunk layout.

    Attributes:
        context_lines: Unchanged lines shown around each change
        ignore_all_space: Ignore all whitespace when comparing lines (-w)
        ignore_space_change: Ignore changes in amount of whitespace (-b)
        ignore_blank_lines: Ignore changes whose lines are all blank (-B)
        minimal: Spend extra time to find the smallest diff
        algorithm: Alignment strategy
        show_function: Label hunks with the nearest preceding function line
    """

    context_lines: int = DEFAULT_CONTEXT_LINES
    ignore_all_space: bool = False
    ignore_space_change: bool = False
    ignore_blank_lines: bool = False
    minimal: bool = False
    algorithm: DiffAlgorithm = DiffAlgorithm.MYERS
    show_function: bool = False

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> DiffOptions:
        """Parse options from a config mapping.

        Args:
            data: Raw dictionary (e.g. from YAML), or None for defaults

        Returns:
            Typed DiffOptions instance

        Raises:
            ValueError: If a value has the wrong type or is out of range
        """
        if data is None:
            return cls()

        context_lines = data.get("context_lines", DEFAULT_CONTEXT_LINES)
        if not isinstance(context_lines, int) or isinstance(context_lines, bool) or context_lines < 0:
            raise ValueError(f"context_lines must be a non-negative integer, got {context_lines!r}")

        algorithm = data.get("algorithm", DiffAlgorithm.MYERS.value)

        return cls(
            context_lines=context_lines,
            ignore_all_space=_as_bool(data, "ignore_all_space"),
            ignore_space_change=_as_bool(data, "ignore_space_change"),
            ignore_blank_lines=_as_bool(data, "ignore_blank_lines"),
            minimal=_as_bool(data, "minimal"),
            algorithm=DiffAlgorithm.from_string(str(algorithm)),
            show_function=_as_bool(data, "show_function"),
        )


def _as_bool(data: dict, key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value
