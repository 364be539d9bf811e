import dataclasses
import typing


@dataclasses.dataclass
class GradeOptions:
    """Configures how course grades are computed and displayed.

    Attributes
    ----------
    weight_tolerance: float
        Absolute tolerance, in percentage points, used when checking whether
        the component weights of a course sum to 100. Sums of fractional
        weights such as 33.34 + 33.33 + 33.33 are not exactly 100 in floating
        point. Set to 0 for an exact comparison. Default: 1e-6.

    renormalize: bool
        If `True`, the course grade is divided by the total weight of the
        components that actually have a grade, so that a partially graded
        course still reports a number between 0 and 100. If `False`, the
        weighted contributions are simply summed. Default: `False`.

    scale: Optional[OrderedDict]
        The letter grade scale. If `None`, :attr:`coursegrade.scales.DEFAULT_SCALE`
        is used. Default: `None`.

    """

    weight_tolerance: float = 1e-6
    renormalize: bool = False
    scale: typing.Optional[typing.Mapping[str, float]] = None
