from .course import SubComponent, Component, Course
from .options import GradeOptions

__all__ = [
    "SubComponent",
    "Component",
    "Course",
    "GradeOptions",
]
