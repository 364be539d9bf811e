from .outliers import (
    NoPolicy,
    DropLowest,
    DownweightLowest,
    OutlierPolicy,
    from_fields,
    to_fields,
)

__all__ = [
    "NoPolicy",
    "DropLowest",
    "DownweightLowest",
    "OutlierPolicy",
    "from_fields",
    "to_fields",
]
