"""A package for computing weighted course grades from component grades."""

from .core import (
    SubComponent,
    Component,
    Course,
    GradeOptions,
)

from .aggregation import (
    graded_values,
    component_grade,
    weighted_value,
    course_grade,
    total_weight,
    weights_are_complete,
    authoritative_course_grade,
)

from .scales import (
    DEFAULT_SCALE,
    NO_GRADE,
    letter_grade,
    map_grades_to_letter_grades,
    format_grade,
    grade_band,
)

from .store import GradeStore

from . import policies
from . import summarize
from . import io
from . import reports

__all__ = [
    "SubComponent",
    "Component",
    "Course",
    "GradeOptions",
    "graded_values",
    "component_grade",
    "weighted_value",
    "course_grade",
    "total_weight",
    "weights_are_complete",
    "authoritative_course_grade",
    "DEFAULT_SCALE",
    "NO_GRADE",
    "letter_grade",
    "map_grades_to_letter_grades",
    "format_grade",
    "grade_band",
    "GradeStore",
    "policies",
    "summarize",
    "io",
    "reports",
]
