"""Outlier policies applied to a component's grades before they are averaged.

A component carries exactly one policy. Each policy is a callable which
receives the component's graded values sorted in ascending order and returns
the aggregated grade, or `None` if no grade can be computed.

"""

from __future__ import annotations

import dataclasses
import typing

import numpy as np


# private helpers ----------------------------------------------------------------------


def _check_count(count):
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise ValueError(f"Count must be a positive integer, not {count!r}.")
    if count < 1:
        raise ValueError(f"Count must be a positive integer, not {count!r}.")


def _is_positive(count):
    return count is not None and count > 0


# public classes =======================================================================


@dataclasses.dataclass(frozen=True)
class NoPolicy:
    """Average every graded value with equal weight."""

    def __call__(self, grades: typing.Sequence[float]) -> typing.Optional[float]:
        if not grades:
            return None
        return float(np.mean(grades))


@dataclasses.dataclass(frozen=True)
class DropLowest:
    """Drop the lowest `count` grades, then average the rest.

    At least one grade is always kept, no matter how large `count` is: with
    `n` graded values, at most `n - 1` of them are dropped.

    Parameters
    ----------
    count : int
        The number of grades to drop. Must be positive.

    Raises
    ------
    ValueError
        If `count` is not a positive integer.

    """

    count: int

    def __post_init__(self):
        _check_count(self.count)

    def __call__(self, grades: typing.Sequence[float]) -> typing.Optional[float]:
        if not grades:
            return None
        k = min(self.count, len(grades) - 1)
        return float(np.mean(grades[k:]))


@dataclasses.dataclass(frozen=True)
class DownweightLowest:
    """Reduce the weight of the lowest `count` grades by `percent` percent.

    Unlike :class:`DropLowest`, every grade may end up downweighted. If that
    leaves a total weight of zero (all grades downweighted by 100%), no grade
    can be computed and `None` is returned.

    Parameters
    ----------
    count : int
        The number of grades to downweight. Must be positive.
    percent : float
        How much weight to take away from each of the lowest grades, as a
        number between 0 and 100. Not validated; callers clamp it on entry.

    Raises
    ------
    ValueError
        If `count` is not a positive integer.

    """

    count: int
    percent: float

    def __post_init__(self):
        _check_count(self.count)

    @property
    def multiplier(self) -> float:
        """The weight given to each downweighted grade."""
        return 1 - self.percent / 100

    def __call__(self, grades: typing.Sequence[float]) -> typing.Optional[float]:
        if not grades:
            return None
        k = min(self.count, len(grades))
        weights = np.ones(len(grades))
        weights[:k] = self.multiplier

        total = weights.sum()
        if total == 0:
            return None
        return float(np.dot(grades, weights) / total)


OutlierPolicy = typing.Union[NoPolicy, DropLowest, DownweightLowest]


# public functions =====================================================================


def from_fields(
    drop_lowest_count: typing.Optional[int] = None,
    downweight_lowest_count: typing.Optional[int] = None,
    downweight_percent: typing.Optional[float] = None,
) -> OutlierPolicy:
    """Build a policy from the legacy pair of nullable policy fields.

    Older data stores the policy as two independent fields, which can both be
    set at the same time. When that happens, drop-lowest takes precedence.
    A count that is missing or not positive means "no policy"; so does a
    downweight count without a percentage.

    Never raises.

    Example
    -------
    >>> from_fields(drop_lowest_count=2, downweight_lowest_count=1, downweight_percent=50)
    DropLowest(count=2)

    """
    if _is_positive(drop_lowest_count):
        return DropLowest(int(drop_lowest_count))

    if _is_positive(downweight_lowest_count) and downweight_percent is not None:
        return DownweightLowest(int(downweight_lowest_count), downweight_percent)

    return NoPolicy()


def to_fields(policy: OutlierPolicy) -> dict:
    """Inverse of :func:`from_fields`.

    Returns
    -------
    dict
        With keys `drop_lowest_count`, `downweight_lowest_count` and
        `downweight_percent`; unused fields are `None`.

    Raises
    ------
    TypeError
        If the policy is of an unknown type.

    """
    fields = {
        "drop_lowest_count": None,
        "downweight_lowest_count": None,
        "downweight_percent": None,
    }

    if isinstance(policy, DropLowest):
        fields["drop_lowest_count"] = policy.count
    elif isinstance(policy, DownweightLowest):
        fields["downweight_lowest_count"] = policy.count
        fields["downweight_percent"] = policy.percent
    elif not isinstance(policy, NoPolicy):
        raise TypeError("Unknown policy type.")

    return fields
