import coursegrade
from coursegrade.policies import NoPolicy


def make_component(grades, weight=None, policy=None, name="component"):
    """Build a component whose sub-components have the given grades."""
    if policy is None:
        policy = NoPolicy()
    subs = [
        coursegrade.SubComponent(id=f"{name}-{i}", component_id=name, name=f"item {i}", grade=g)
        for i, g in enumerate(grades)
    ]
    return coursegrade.Component(
        id=name,
        course_id="course",
        name=name,
        weight=weight,
        policy=policy,
        sub_components=subs,
    )
