"""Read and write courses as a flat table.

The table has one row per sub-component. Course and component fields are
filled in only on the first row of each component, and left blank on the
rows that continue it:

    Course Name,Component Name,Component Weight (%),Drop Lowest,...,Grade
    Math 20A,Homework,40,1,,,Homework 1,95
    ,,,,,,Homework 2,80
    Math 20A,Exams,60,,,,Midterm,72.5

A course with no components is written as a single row holding only its
name; a component with no sub-components is written as a single row with
blank sub-component cells.

"""

import logging
import math
import pathlib
import typing

import pandas as pd

from ..core import Component, Course, SubComponent
from .._util import clamp, new_id

logger = logging.getLogger(__name__)

COLUMNS = [
    "Course Name",
    "Component Name",
    "Component Weight (%)",
    "Drop Lowest",
    "Downweight Count",
    "Downweight %",
    "Sub-component Name",
    "Grade",
]


# private helpers ----------------------------------------------------------------------


def _format_number(number) -> str:
    if number is None:
        return ""
    number = float(number)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _parse_number(text, convert):
    if not text:
        return None
    try:
        number = convert(text)
    except (ValueError, OverflowError):
        logger.warning("Ignoring number that could not be parsed: %r.", text)
        return None
    if math.isnan(number):
        return None
    return number


def _parse_int(text):
    return int(float(text))


def _parse_clamped(text):
    number = _parse_number(text, float)
    return None if number is None else clamp(number)


def _component_fields(course, component):
    return [
        course.name,
        component.name,
        _format_number(component.weight),
        _format_number(component.drop_lowest_count),
        _format_number(component.downweight_lowest_count),
        _format_number(component.downweight_percent),
    ]


# public functions =====================================================================


def to_frame(courses: typing.Iterable[Course]) -> pd.DataFrame:
    """Encode courses as a table of strings.

    Parameters
    ----------
    courses : Iterable[Course]
        The courses to encode.

    Returns
    -------
    pd.DataFrame
        A table with the columns in :attr:`COLUMNS`. Every cell is a string;
        missing values are empty strings.

    """
    blank = [""] * 6
    rows = []
    for course in courses:
        if not course.components:
            rows.append([course.name] + [""] * 7)
            continue

        for component in course.components:
            head = _component_fields(course, component)
            if not component.sub_components:
                rows.append(head + ["", ""])

            for i, sub in enumerate(component.sub_components):
                fields = head if i == 0 else blank
                rows.append(fields + [sub.name, _format_number(sub.grade)])

    return pd.DataFrame(rows, columns=COLUMNS, dtype=object)


def from_frame(table: pd.DataFrame) -> typing.List[Course]:
    """Decode a table produced by :func:`to_frame`.

    Blank course names continue the previous course, and rows naming a
    course that was already seen are merged into it. A row with a component
    name starts a new component, and a row with a sub-component name or a
    grade adds a sub-component to it. Grades and downweight percentages are
    clamped to [0, 100]. Numbers that cannot be parsed are treated as
    missing. Every component ends up with at least one sub-component;
    components without any receive a single unnamed, ungraded one. Fresh
    identifiers are generated for every entity.

    Cells are stripped of surrounding whitespace, so names with leading or
    trailing spaces do not survive a round trip exactly. A blank course or
    component name reads as a continuation of the previous one.

    Parameters
    ----------
    table : pd.DataFrame
        A table with (at least) the columns in :attr:`COLUMNS`.

    Returns
    -------
    list[Course]
        The decoded courses, in order of first appearance.

    Raises
    ------
    ValueError
        If the table is missing any of the columns.

    """
    missing = [c for c in COLUMNS if c not in table.columns]
    if missing:
        raise ValueError(f"Table is missing columns: {missing}.")

    table = table[COLUMNS].fillna("").astype(str)

    # course name -> (course id, list of [component fields, sub-components])
    courses = {}
    current_course_name = None
    current_component = None

    for row in table.itertuples(index=False):
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue

        (
            course_name,
            component_name,
            weight,
            drop_lowest,
            downweight_count,
            downweight_percent,
            sub_name,
            grade,
        ) = cells

        if course_name and course_name != current_course_name:
            current_component = None
        if not course_name:
            course_name = current_course_name or ""
        current_course_name = course_name

        if course_name not in courses:
            courses[course_name] = (new_id(), [])
        course_id, components = courses[course_name]

        if component_name:
            current_component = (
                dict(
                    id=new_id(),
                    course_id=course_id,
                    name=component_name,
                    weight=_parse_number(weight, float),
                    drop_lowest_count=_parse_number(drop_lowest, _parse_int),
                    downweight_lowest_count=_parse_number(downweight_count, _parse_int),
                    downweight_percent=_parse_clamped(downweight_percent),
                ),
                [],
            )
            components.append(current_component)

        if current_component is not None and (sub_name or grade):
            fields, subs = current_component
            subs.append(
                SubComponent(
                    id=new_id(),
                    component_id=fields["id"],
                    name=sub_name,
                    grade=_parse_clamped(grade),
                )
            )

    result = []
    for course_name, (course_id, components) in courses.items():
        built = []
        for fields, subs in components:
            if not subs:
                subs = [SubComponent(id=new_id(), component_id=fields["id"])]
            built.append(Component.from_fields(sub_components=subs, **fields))
        result.append(Course(id=course_id, name=course_name, components=built))

    return result


def write(path: typing.Union[str, pathlib.Path], courses: typing.Iterable[Course]):
    """Writes courses to a CSV file."""
    table = to_frame(courses)
    table.to_csv(path, index=False)
    logger.info("Wrote %d rows to %s.", len(table), path)


def read(path: typing.Union[str, pathlib.Path]) -> typing.List[Course]:
    """Reads courses from a CSV file written by :func:`write`."""
    table = pd.read_csv(path, dtype=str, keep_default_na=False)
    logger.info("Read %d rows from %s.", len(table), path)
    return from_frame(table)
