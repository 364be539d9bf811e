import pytest
from pytest import approx

import coursegrade
from coursegrade.policies import DropLowest, DownweightLowest


@pytest.fixture
def store():
    return coursegrade.GradeStore()


def test_add_course_with_defaults(store):
    # when
    course = store.add_course()

    # then
    assert store.courses == (course,)
    assert course.name == "New Course"
    assert course.components == ()


def test_add_component_with_defaults(store):
    # given
    course = store.add_course()

    # when
    component = store.add_component(course.id)

    # then
    assert component.name == "New Component"
    assert component.weight == 0
    assert component.course_id == course.id
    [sub] = component.sub_components
    assert sub.name == "Assignment 1"
    assert sub.grade is None
    assert store.course(course.id).components == (component,)


def test_add_sub_component_is_named_after_position(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)

    # when
    sub = store.add_sub_component(course.id, component.id)

    # then
    assert sub.name == "Assignment 2"
    assert len(store.component(course.id, component.id).sub_components) == 2


def test_update_sub_component_clamps_grade(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)
    sub = component.sub_components[0]

    # when
    high = store.update_sub_component(course.id, component.id, sub.id, grade=130)
    low = store.update_sub_component(course.id, component.id, sub.id, grade=-4)

    # then
    assert high.grade == 100
    assert low.grade == 0


def test_update_sub_component_can_clear_grade(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)
    sub = component.sub_components[0]
    store.update_sub_component(course.id, component.id, sub.id, grade=80, name="HW 1")

    # when
    updated = store.update_sub_component(course.id, component.id, sub.id, clear_grade=True)

    # then
    assert updated.grade is None
    assert updated.name == "HW 1"


def test_set_policy_replaces_the_previous_policy(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)
    store.set_policy(course.id, component.id, DropLowest(2))

    # when
    updated = store.set_policy(course.id, component.id, DownweightLowest(1, 50))

    # then
    assert updated.policy == DownweightLowest(1, 50)
    assert updated.drop_lowest_count is None


def test_set_policy_clamps_downweight_percent(store):
    course = store.add_course()
    component = store.add_component(course.id)
    updated = store.set_policy(course.id, component.id, DownweightLowest(1, 150))
    assert updated.policy == DownweightLowest(1, 100)


def test_delete_sub_component_keeps_the_last_one(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)
    sub = component.sub_components[0]

    # when
    store.delete_sub_component(course.id, component.id, sub.id)

    # then
    assert store.component(course.id, component.id).sub_components == (sub,)


def test_delete_sub_component(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)
    first = component.sub_components[0]
    second = store.add_sub_component(course.id, component.id)

    # when
    store.delete_sub_component(course.id, component.id, first.id)

    # then
    assert store.component(course.id, component.id).sub_components == (second,)


def test_delete_component_and_course(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)

    # when
    store.delete_component(course.id, component.id)

    # then
    assert store.course(course.id).components == ()

    store.delete_course(course.id)
    assert store.courses == ()


def test_unknown_ids_raise_key_error(store):
    course = store.add_course()
    with pytest.raises(KeyError):
        store.course("nope")
    with pytest.raises(KeyError):
        store.delete_component(course.id, "nope")
    with pytest.raises(KeyError):
        store.update_sub_component(course.id, "nope", "nope", grade=50)


def test_edits_do_not_change_earlier_snapshots(store):
    # given
    course = store.add_course()
    snapshot = store.courses

    # when
    store.rename_course(course.id, "Math 20A")

    # then
    assert snapshot[0].name == "New Course"
    assert store.course(course.id).name == "Math 20A"


def test_summary_after_edits(store):
    # given
    course = store.add_course("Math 20A")
    homework = store.add_component(course.id)
    exams = store.add_component(course.id)
    store.update_component(course.id, homework.id, name="Homework", weight=40)
    store.update_component(course.id, exams.id, name="Exams", weight=60)
    store.update_sub_component(
        course.id, homework.id, homework.sub_components[0].id, grade=80
    )
    store.update_sub_component(course.id, exams.id, exams.sub_components[0].id, grade=90)

    # when
    summary = store.summary()

    # then
    assert summary.loc[course.id, "complete"]
    assert summary.loc[course.id, "final grade"] == approx(86.0)
    assert summary.loc[course.id, "letter"] == "A"


def test_update_component_can_clear_weight(store):
    # given
    course = store.add_course()
    component = store.add_component(course.id)
    store.update_component(course.id, component.id, weight=40)

    # when
    updated = store.update_component(
        course.id, component.id, name="Labs", clear_weight=True
    )

    # then
    assert updated.weight is None
    assert updated.name == "Labs"
    assert store.component(course.id, component.id).weight is None
    assert coursegrade.total_weight(store.course(course.id).components) == 0


def test_load_replaces_all_courses(store):
    # given
    store.add_course()
    courses = [coursegrade.Course(id="c1", name="Physics")]

    # when
    store.load(courses)

    # then
    assert store.courses == tuple(courses)
