"""The course tree: courses made of components made of sub-components."""

from __future__ import annotations

import dataclasses
import typing

from .. import policies
from ..policies import OutlierPolicy


@dataclasses.dataclass(frozen=True)
class SubComponent:
    """A single graded item, such as one homework.

    Attributes
    ----------
    id : str
        Identifier of the sub-component.
    component_id : str
        Identifier of the component this item belongs to.
    name : str
        Display name.
    grade : Optional[float]
        The grade as a percentage. `None` means the item is not graded yet,
        which is not the same as a zero.

    """

    id: str
    component_id: str
    name: str = ""
    grade: typing.Optional[float] = None

    @property
    def is_graded(self) -> bool:
        return self.grade is not None


@dataclasses.dataclass(frozen=True)
class Component:
    """A weighted category of a course, such as "Homework" or "Exams".

    Attributes
    ----------
    id : str
        Identifier of the component.
    course_id : str
        Identifier of the course this component belongs to.
    name : str
        Display name.
    weight : Optional[float]
        Weight of the component in the course, in percent.
    policy : OutlierPolicy
        The outlier policy applied to the sub-component grades before they
        are averaged. Default: :class:`coursegrade.policies.NoPolicy`.
    sub_components : tuple[SubComponent, ...]
        The graded items. Their order matters for display only.

    """

    id: str
    course_id: str
    name: str = ""
    weight: typing.Optional[float] = None
    policy: OutlierPolicy = dataclasses.field(default_factory=policies.NoPolicy)
    sub_components: typing.Tuple[SubComponent, ...] = ()

    def __post_init__(self):
        # accept any sequence, but store a tuple so the value stays hashable
        object.__setattr__(self, "sub_components", tuple(self.sub_components))

    @classmethod
    def from_fields(
        cls,
        id,
        course_id,
        name="",
        weight=None,
        drop_lowest_count=None,
        downweight_lowest_count=None,
        downweight_percent=None,
        sub_components=(),
    ) -> "Component":
        """Create a component from the legacy nullable policy fields.

        See :func:`coursegrade.policies.from_fields` for how the fields are
        resolved into a single policy.

        """
        policy = policies.from_fields(
            drop_lowest_count=drop_lowest_count,
            downweight_lowest_count=downweight_lowest_count,
            downweight_percent=downweight_percent,
        )
        return cls(
            id=id,
            course_id=course_id,
            name=name,
            weight=weight,
            policy=policy,
            sub_components=sub_components,
        )

    @property
    def drop_lowest_count(self) -> typing.Optional[int]:
        return policies.to_fields(self.policy)["drop_lowest_count"]

    @property
    def downweight_lowest_count(self) -> typing.Optional[int]:
        return policies.to_fields(self.policy)["downweight_lowest_count"]

    @property
    def downweight_percent(self) -> typing.Optional[float]:
        return policies.to_fields(self.policy)["downweight_percent"]


@dataclasses.dataclass(frozen=True)
class Course:
    """A course and its components.

    Attributes
    ----------
    id : str
        Identifier of the course.
    name : str
        Display name.
    components : tuple[Component, ...]
        The weighted components of the course.

    """

    id: str
    name: str = ""
    components: typing.Tuple[Component, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "components", tuple(self.components))

    def find_component(self, component_id: str) -> Component:
        """Look up a component by its identifier.

        Raises
        ------
        KeyError
            If no component has the identifier.

        """
        for component in self.components:
            if component.id == component_id:
                return component
        raise KeyError(f"Component {component_id!r} is not in course {self.id!r}.")
