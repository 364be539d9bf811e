"""Mapping grades to letter grades, and formatting grades for display."""

import collections
import typing

import numpy as np
import pandas as pd

from ._util import clamp


# helper functions =====================================================================


def _check_that_scale_monotonically_decreases(scale):
    prev = float("inf")
    for threshold in scale.values():
        if threshold >= prev:
            raise ValueError("Scale is not monotonically decreasing.")
        prev = threshold


def _resolve_scale(scale):
    if scale is None:
        return DEFAULT_SCALE

    if list(scale) != list(DEFAULT_SCALE):
        raise ValueError(
            f"Scale has invalid letter grades. Must be in {set(DEFAULT_SCALE.keys())}"
        )
    _check_that_scale_monotonically_decreases(scale)
    return scale


# common scales ========================================================================

DEFAULT_SCALE = collections.OrderedDict(
    [
        ("A+", 90),
        ("A", 85),
        ("A-", 80),
        ("B+", 76),
        ("B", 72),
        ("B-", 68),
        ("C+", 64),
        ("C", 60),
        ("C-", 55),
        ("D", 50),
        ("F", 0),
    ]
)
"""The default grading scale. Thresholds are inclusive lower bounds, in percent."""

#: the letter shown when there is no grade to map
NO_GRADE = "N/A"

#: the text shown in place of a missing grade
PLACEHOLDER = "—"

# public functions =====================================================================


def letter_grade(grade: typing.Optional[float], scale=None) -> str:
    """Map a single grade to a letter grade.

    The grade is first clamped to [0, 100], so that out-of-range aggregates
    (for instance, a course grade computed from weights summing to more than
    100) still map to a letter instead of failing.

    Parameters
    ----------
    grade : Optional[float]
        The grade, as a percentage.
    scale : OrderedDict
        An ordered dictionary mapping letter grades to their thresholds.
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    str
        The letter grade, or :attr:`NO_GRADE` if `grade` is `None`.

    Raises
    ------
    ValueError
        If the provided scale has invalid letter grades.

    """
    scale = _resolve_scale(scale)

    if grade is None:
        return NO_GRADE

    grade = clamp(grade)
    for letter, threshold in scale.items():
        if grade >= threshold:
            return letter
    else:
        return "F"


def map_grades_to_letter_grades(grades: pd.Series, scale=None) -> pd.Series:
    """Map each grade in a series to a letter grade.

    Parameters
    ----------
    grades : pandas.Series
        A series of grades as percentages. Missing entries (`NaN` or `None`)
        are mapped to :attr:`NO_GRADE`.
    scale : OrderedDict
        An ordered dictionary mapping letter grades to their thresholds.
        Default: :attr:`DEFAULT_SCALE`.

    Returns
    -------
    pandas.Series
        A series containing the resulting letter grades.

    Raises
    ------
    ValueError
        If the provided scale has invalid letter grades.

    """
    scale = _resolve_scale(scale)

    def _map(grade):
        if pd.isna(grade):
            return NO_GRADE
        return letter_grade(grade, scale)

    return grades.apply(_map).astype(object)


def format_grade(grade: typing.Optional[float], placeholder: str = PLACEHOLDER) -> str:
    """Format a grade with one decimal place.

    Rounding follows Python's float formatting: the exact binary value is
    rounded half-to-even, so `2.25` becomes `"2.2"` and `2.75` becomes
    `"2.8"`.

    """
    if grade is None or (isinstance(grade, float) and np.isnan(grade)):
        return placeholder
    return format(grade, ".1f")


def grade_band(grade: typing.Optional[float]) -> str:
    """A coarse label for a grade, used for colour coding.

    One of "excellent" (90+), "good" (80+), "average" (70+), "passing" (60+),
    "failing", or "none" if there is no grade.

    """
    if grade is None:
        return "none"
    if grade >= 90:
        return "excellent"
    if grade >= 80:
        return "good"
    if grade >= 70:
        return "average"
    if grade >= 60:
        return "passing"
    return "failing"
