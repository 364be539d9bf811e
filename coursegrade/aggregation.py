"""Aggregate sub-component grades into component grades and course grades.

Every function here is pure: it reads a snapshot of the course tree and
returns a number. Missing data never raises; whenever a grade cannot be
computed, the result is `None`.

"""

from __future__ import annotations

import math
import typing

from .core import Component, GradeOptions, SubComponent


def graded_values(sub_components: typing.Iterable[SubComponent]) -> typing.List[float]:
    """The grades of the graded sub-components, in their original order.

    Ungraded sub-components are left out entirely; they neither count as a
    zero nor toward the number of grades.

    """
    return [s.grade for s in sub_components if s.grade is not None]


def component_grade(component: Component) -> typing.Optional[float]:
    """Compute the grade of a single component.

    The graded values are sorted and passed to the component's outlier
    policy. A single graded value is returned unchanged, whatever the policy.

    Parameters
    ----------
    component : Component
        The component to grade.

    Returns
    -------
    Optional[float]
        The component grade, or `None` if nothing is graded or if the policy
        leaves no weight to average over.

    """
    grades = graded_values(component.sub_components)

    if not grades:
        return None

    if len(grades) == 1:
        return grades[0]

    return component.policy(sorted(grades))


def weighted_value(component: Component) -> typing.Optional[float]:
    """The component's contribution to the course grade, in percentage points."""
    grade = component_grade(component)
    if grade is None or component.weight is None:
        return None
    return grade * component.weight / 100


def course_grade(
    components: typing.Iterable[Component], opts: typing.Optional[GradeOptions] = None
) -> typing.Optional[float]:
    """Compute the course grade from its components.

    Each component with both a grade and a weight contributes
    `grade * weight / 100`, and the contributions are summed. The sum is not
    divided by the weight that actually contributed, so the result only reads
    as a percentage out of 100 when the weights sum to 100; use
    :func:`weights_are_complete` or :func:`authoritative_course_grade` to
    check that.

    Parameters
    ----------
    components : Iterable[Component]
        The components of the course.
    opts : Optional[GradeOptions]
        If `opts.renormalize` is `True`, the sum is instead scaled by
        `100 / contributing_weight`.

    Returns
    -------
    Optional[float]
        The course grade, or `None` if no component has both a grade and a
        weight.

    """
    if opts is None:
        opts = GradeOptions()

    total = 0.0
    contributing_weight = 0.0
    contributed = False
    for component in components:
        value = weighted_value(component)
        if value is None:
            continue
        total += value
        contributing_weight += component.weight
        contributed = True

    if not contributed:
        return None

    if opts.renormalize:
        if contributing_weight == 0:
            return None
        return total / contributing_weight * 100

    return total


def total_weight(components: typing.Iterable[Component]) -> float:
    """The sum of the component weights; a missing weight counts as zero."""
    return sum((c.weight for c in components if c.weight is not None), 0.0)


def weights_are_complete(
    components: typing.Iterable[Component], opts: typing.Optional[GradeOptions] = None
) -> bool:
    """Whether the component weights sum to 100, within `opts.weight_tolerance`."""
    if opts is None:
        opts = GradeOptions()
    return math.isclose(
        total_weight(components), 100, rel_tol=0, abs_tol=opts.weight_tolerance
    )


def authoritative_course_grade(
    components: typing.Sequence[Component], opts: typing.Optional[GradeOptions] = None
) -> typing.Optional[float]:
    """The course grade, but only if the weights sum to 100; `None` otherwise."""
    if not weights_are_complete(components, opts):
        return None
    return course_grade(components, opts)
