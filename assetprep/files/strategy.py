"""Strategy vocabulary for FileCollection transformations."""

from collections.abc import Sequence
from enum import Enum


class Strategy(str, Enum):
    """Named transformation from one FileCollection to a new one."""

    CLONE = "clone"  # Same files, copied metadata
    GZIP = "gzip"  # Gzip-compressed derivatives, same paths
    GZIP_SUFFIX = "gzip-suffix"  # Gzip-compressed derivatives with a .gz suffix


def parse_strategies(strategy: str | Sequence[str]) -> list[Strategy]:
    """Validate a strategy selector.

    Args:
        strategy: One strategy name or an ordered list of names

    Returns:
        The requested strategies in request order

    Raises:
        TypeError: If the selector is empty or not a string / list of strings
        ValueError: If a name is not one of clone, gzip, gzip-suffix
    """
    if isinstance(strategy, str) and strategy:
        strategy = [strategy]
    if not isinstance(strategy, (list, tuple)) or not strategy:
        raise TypeError("provided strategy should be a non-empty list or string")

    parsed = []
    for name in strategy:
        if not isinstance(name, str):
            raise TypeError(f"strategy names must be strings, got {type(name).__name__}")
        try:
            parsed.append(Strategy(name))
        except ValueError:
            valid = ", ".join(s.value for s in Strategy)
            raise ValueError(f"unknown strategy {name!r}, expected one of: {valid}") from None
    return parsed
