"""An in-memory store for editing a list of courses.

The entities in :mod:`coursegrade.core` are immutable values. The store holds
the current list of courses and replaces entities as they are edited, so that
every call to :attr:`GradeStore.courses` returns a consistent snapshot which
can be handed to the functions in :mod:`coursegrade.aggregation`.

Input is cleaned here, before it reaches the grade computations: grades and
downweight percentages are clamped to [0, 100], and setting an outlier policy
replaces whichever policy the component had before.

"""

import dataclasses
import logging
import typing

import pandas as pd

from .core import Component, Course, GradeOptions, SubComponent
from .policies import DownweightLowest, OutlierPolicy
from . import summarize
from ._util import clamp, new_id

logger = logging.getLogger(__name__)


# private helpers ----------------------------------------------------------------------


def _default_sub_component(component_id, number=1):
    return SubComponent(id=new_id(), component_id=component_id, name=f"Assignment {number}")


def _default_component(course_id):
    component_id = new_id()
    return Component(
        id=component_id,
        course_id=course_id,
        name="New Component",
        weight=0,
        sub_components=[_default_sub_component(component_id)],
    )


def _replace_by_id(items, item_id, new_item):
    return tuple(new_item if item.id == item_id else item for item in items)


def _find(items, item_id, kind):
    for item in items:
        if item.id == item_id:
            return item
    raise KeyError(f"No {kind} with id {item_id!r}.")


# GradeStore ===========================================================================


class GradeStore:
    """Holds a list of courses and applies edits to them.

    Parameters
    ----------
    courses : Optional[Sequence[Course]]
        The initial courses. Default: no courses.
    opts : Optional[GradeOptions]
        Options used by :meth:`summary`.

    Raises
    ------
    KeyError
        From any method, if an id does not refer to an existing entity.

    """

    def __init__(
        self,
        courses: typing.Optional[typing.Sequence[Course]] = None,
        opts: typing.Optional[GradeOptions] = None,
    ):
        self._courses = tuple(courses) if courses is not None else ()
        self.opts = opts if opts is not None else GradeOptions()

    def __repr__(self):
        return f"GradeStore(courses={list(self._courses)!r})"

    @property
    def courses(self) -> typing.Tuple[Course, ...]:
        """A snapshot of the current courses."""
        return self._courses

    # lookups ----------------------------------------------------------------------

    def course(self, course_id: str) -> Course:
        return _find(self._courses, course_id, "course")

    def component(self, course_id: str, component_id: str) -> Component:
        return _find(self.course(course_id).components, component_id, "component")

    # internal updates -------------------------------------------------------------

    def _put_course(self, course):
        self._courses = _replace_by_id(self._courses, course.id, course)

    def _put_component(self, course_id, component):
        course = self.course(course_id)
        components = _replace_by_id(course.components, component.id, component)
        self._put_course(dataclasses.replace(course, components=components))

    # courses ----------------------------------------------------------------------

    def load(self, courses: typing.Sequence[Course]):
        """Replace every course, for instance after an import."""
        self._courses = tuple(courses)
        logger.info("Loaded %d courses.", len(self._courses))

    def add_course(self, name: str = "New Course") -> Course:
        course = Course(id=new_id(), name=name)
        self._courses = self._courses + (course,)
        logger.debug("Added course %s.", course.id)
        return course

    def delete_course(self, course_id: str):
        self.course(course_id)
        self._courses = tuple(c for c in self._courses if c.id != course_id)
        logger.debug("Deleted course %s.", course_id)

    def rename_course(self, course_id: str, name: str):
        self._put_course(dataclasses.replace(self.course(course_id), name=name))

    # components -------------------------------------------------------------------

    def add_component(self, course_id: str) -> Component:
        """Add a component with weight 0 and a single ungraded sub-component."""
        course = self.course(course_id)
        component = _default_component(course_id)
        self._put_course(
            dataclasses.replace(course, components=course.components + (component,))
        )
        logger.debug("Added component %s to course %s.", component.id, course_id)
        return component

    def delete_component(self, course_id: str, component_id: str):
        course = self.course(course_id)
        self.component(course_id, component_id)
        components = tuple(c for c in course.components if c.id != component_id)
        self._put_course(dataclasses.replace(course, components=components))
        logger.debug("Deleted component %s.", component_id)

    def update_component(
        self,
        course_id: str,
        component_id: str,
        *,
        name: typing.Optional[str] = None,
        weight: typing.Optional[float] = None,
        clear_weight: bool = False,
    ) -> Component:
        """Change a component's name and/or weight.

        Arguments that are `None` are left unchanged. Pass `clear_weight=True`
        to remove the weight. To change the outlier policy, use
        :meth:`set_policy`.

        """
        component = self.component(course_id, component_id)
        changes = {}
        if name is not None:
            changes["name"] = name
        if clear_weight:
            changes["weight"] = None
        elif weight is not None:
            changes["weight"] = weight

        component = dataclasses.replace(component, **changes)
        self._put_component(course_id, component)
        return component

    def set_policy(
        self, course_id: str, component_id: str, policy: OutlierPolicy
    ) -> Component:
        """Set the component's outlier policy, replacing the previous one.

        The percentage of a :class:`DownweightLowest` policy is clamped to
        [0, 100].

        """
        if isinstance(policy, DownweightLowest):
            policy = DownweightLowest(policy.count, clamp(policy.percent))

        component = dataclasses.replace(
            self.component(course_id, component_id), policy=policy
        )
        self._put_component(course_id, component)
        logger.debug("Set policy of component %s to %r.", component_id, policy)
        return component

    # sub-components ---------------------------------------------------------------

    def add_sub_component(self, course_id: str, component_id: str) -> SubComponent:
        """Add an ungraded sub-component named after its position."""
        component = self.component(course_id, component_id)
        sub = _default_sub_component(component_id, len(component.sub_components) + 1)
        self._put_component(
            course_id,
            dataclasses.replace(
                component, sub_components=component.sub_components + (sub,)
            ),
        )
        return sub

    def delete_sub_component(
        self, course_id: str, component_id: str, sub_component_id: str
    ):
        """Delete a sub-component. The last one of a component is never deleted."""
        component = self.component(course_id, component_id)
        _find(component.sub_components, sub_component_id, "sub-component")

        if len(component.sub_components) <= 1:
            logger.debug("Not deleting the only sub-component of %s.", component_id)
            return

        subs = tuple(s for s in component.sub_components if s.id != sub_component_id)
        self._put_component(
            course_id, dataclasses.replace(component, sub_components=subs)
        )

    def update_sub_component(
        self,
        course_id: str,
        component_id: str,
        sub_component_id: str,
        *,
        name: typing.Optional[str] = None,
        grade: typing.Optional[float] = None,
        clear_grade: bool = False,
    ) -> SubComponent:
        """Change a sub-component's name and/or grade.

        Grades are clamped to [0, 100]. Pass `clear_grade=True` to mark the
        sub-component as ungraded.

        """
        component = self.component(course_id, component_id)
        sub = _find(component.sub_components, sub_component_id, "sub-component")

        changes = {}
        if name is not None:
            changes["name"] = name
        if clear_grade:
            changes["grade"] = None
        elif grade is not None:
            changes["grade"] = clamp(grade)

        sub = dataclasses.replace(sub, **changes)
        subs = _replace_by_id(component.sub_components, sub_component_id, sub)
        self._put_component(
            course_id, dataclasses.replace(component, sub_components=subs)
        )
        return sub

    # grades -----------------------------------------------------------------------

    def summary(self) -> pd.DataFrame:
        """Summarize the current courses; see :func:`coursegrade.summarize.courses`."""
        return summarize.courses(self._courses, self.opts)
