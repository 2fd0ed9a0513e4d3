"""Ignore-flag resolution shared by every catalog mutation."""

from collections.abc import Callable
from enum import Enum


class Resolution(str, Enum):
    """Outcome of an existence check."""

    PROCEED = "proceed"
    NOOP = "noop"
    FAIL = "fail"


def resolve(conflict: bool, ignore: bool) -> Resolution:
    """
    Decide how a mutation continues after its existence check.

    ``conflict`` is True when the entity is in the wrong state for the
    operation: present for a create, absent for an alter or drop.

    Args:
        conflict: Whether the existence check failed
        ignore: The caller's ignore flag

    Returns:
        PROCEED when there is no conflict, NOOP when the conflict is ignored,
        FAIL otherwise
    """
    if not conflict:
        return Resolution.PROCEED
    return Resolution.NOOP if ignore else Resolution.FAIL


def should_proceed(
    conflict: bool,
    ignore: bool,
    on_conflict: Callable[[], Exception],
) -> bool:
    """
    Apply :func:`resolve`, raising the conflict error when it fails.

    Returns:
        True to continue with the mutation, False for an ignored no-op

    Raises:
        Exception: The error built by ``on_conflict``
    """
    resolution = resolve(conflict, ignore)
    if resolution is Resolution.FAIL:
        raise on_conflict()
    return resolution is Resolution.PROCEED
