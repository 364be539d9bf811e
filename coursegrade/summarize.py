"""Tables summarizing computed grades."""

import typing

import numpy as np
import pandas as pd

from .core import Course, GradeOptions
from . import aggregation, scales


def _or_nan(value):
    return np.nan if value is None else value


def components(course: Course, opts: typing.Optional[GradeOptions] = None) -> pd.DataFrame:
    """Compute a table summarizing each component of a course.

    Parameters
    ----------
    course : Course
        The course whose components are summarized.
    opts : Optional[GradeOptions]
        Supplies the letter grade scale.

    Returns
    -------
    pd.DataFrame
        A table indexed by component id, with columns "name", "weight",
        "grade", "weighted value", "letter" and "band". Missing numbers are
        `NaN`.

    """
    if opts is None:
        opts = GradeOptions()

    rows = []
    for component in course.components:
        grade = aggregation.component_grade(component)
        rows.append(
            {
                "id": component.id,
                "name": component.name,
                "weight": _or_nan(component.weight),
                "grade": _or_nan(grade),
                "weighted value": _or_nan(aggregation.weighted_value(component)),
                "letter": scales.letter_grade(grade, opts.scale),
                "band": scales.grade_band(grade),
            }
        )

    columns = ["id", "name", "weight", "grade", "weighted value", "letter", "band"]
    return pd.DataFrame(rows, columns=columns).set_index("id")


def courses(
    courses: typing.Sequence[Course], opts: typing.Optional[GradeOptions] = None
) -> pd.DataFrame:
    """Compute a table summarizing the outcome of each course.

    Parameters
    ----------
    courses : Sequence[Course]
        The courses to summarize.
    opts : Optional[GradeOptions]
        Configures the weight check and the letter grade scale.

    Returns
    -------
    pd.DataFrame
        A table indexed by course id, with columns "name", "total weight",
        "complete", "course grade", "final grade", "letter" and "band". The
        "course grade" is the raw weighted sum; the "final grade" is the same
        number, but only when "complete" (the weights sum to 100), and `NaN`
        otherwise. The letter and band are derived from the final grade.

    """
    if opts is None:
        opts = GradeOptions()

    rows = []
    for course in courses:
        raw = aggregation.course_grade(course.components, opts)
        final = aggregation.authoritative_course_grade(course.components, opts)
        rows.append(
            {
                "id": course.id,
                "name": course.name,
                "total weight": aggregation.total_weight(course.components),
                "complete": aggregation.weights_are_complete(course.components, opts),
                "course grade": _or_nan(raw),
                "final grade": _or_nan(final),
                "letter": scales.letter_grade(final, opts.scale),
                "band": scales.grade_band(final),
            }
        )

    columns = [
        "id",
        "name",
        "total weight",
        "complete",
        "course grade",
        "final grade",
        "letter",
        "band",
    ]
    return pd.DataFrame(rows, columns=columns).set_index("id")
