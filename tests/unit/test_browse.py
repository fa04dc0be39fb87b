"""
Unit tests for category grouping and cyclic browse navigation
"""
import pytest

from app.client.browse import (
    UNCLASSIFIED,
    BrowseCursor,
    browse_order,
    group_idioms,
    is_classified,
    sort_idioms,
)
from app.schemas.idiom import IdiomRead


def make(name, major=None, minor=None):
    return IdiomRead(idiom=name, major_type_code=major, minor_type_code=minor)


@pytest.fixture
def idioms():
    # fetch order, deliberately not sorted
    return [
        make("画龙点睛", "B", "SUB_B1"),
        make("一马当先", "A", "SUB_A2"),
        make("未分类甲"),
        make("守株待兔", "A", "SUB_A1"),
        make("亡羊补牢", "A", "SUB_A1"),
        make("只有大类", "A", " "),
        make("对牛弹琴", "B", "SUB_B1"),
    ]


def test_is_classified_requires_both_codes():
    assert is_classified(make("x", "A", "SUB_A1"))
    assert not is_classified(make("x", "A", None))
    assert not is_classified(make("x", "  ", "SUB_A1"))
    assert not is_classified(make("x"))


def test_group_orders_majors_and_minors_with_unclassified_last(idioms):
    grouping = group_idioms(idioms)

    assert list(grouping) == ["A", "B", UNCLASSIFIED]
    assert list(grouping["A"]) == ["SUB_A1", "SUB_A2"]
    assert list(grouping[UNCLASSIFIED]) == [UNCLASSIFIED]
    assert [i.idiom for i in grouping[UNCLASSIFIED][UNCLASSIFIED]] == ["未分类甲", "只有大类"]


def test_group_keeps_fetch_order_inside_bucket(idioms):
    grouping = group_idioms(idioms)
    assert [i.idiom for i in grouping["A"]["SUB_A1"]] == ["守株待兔", "亡羊补牢"]


def test_group_resort_orders_bucket_by_name(idioms):
    grouping = group_idioms(idioms, resort=True)
    names = [i.idiom for i in grouping["A"]["SUB_A1"]]
    assert names == sorted(names)


def test_classified_sort_before_unclassified_regardless_of_name():
    ordered = sort_idioms([make("啊"), make("做", "Z", "SUB_Z")])
    assert [i.idiom for i in ordered] == ["做", "啊"]


def test_sort_ties_broken_by_name():
    ordered = sort_idioms([make("b", "A", "S"), make("a", "A", "S")])
    assert [i.idiom for i in ordered] == ["a", "b"]


def test_next_moves_across_buckets_and_wraps(idioms):
    grouping = group_idioms(idioms)
    cursor = BrowseCursor(grouping)
    order = browse_order(grouping)

    assert cursor.next(order[-1]).idiom == order[0].idiom
    # end of SUB_A1 -> first of SUB_A2 in the same major
    assert cursor.next(make("亡羊补牢")).idiom == "一马当先"
    # end of major A -> first minor of major B
    assert cursor.next(make("一马当先")).idiom == "画龙点睛"


def test_previous_is_inverse_of_next(idioms):
    cursor = BrowseCursor(group_idioms(idioms))
    for item in idioms:
        assert cursor.previous(cursor.next(item)).idiom == item.idiom


def test_n_steps_visit_every_idiom_once_and_return(idioms):
    cursor = BrowseCursor(group_idioms(idioms))
    start = idioms[3]

    seen = []
    current = start
    for _ in range(len(idioms)):
        current = cursor.next(current)
        seen.append(current.idiom)

    assert current.idiom == start.idiom
    assert sorted(seen) == sorted(i.idiom for i in idioms)


def test_unknown_current_starts_at_first(idioms):
    cursor = BrowseCursor(group_idioms(idioms))
    assert cursor.next(make("不存在")).idiom == "守株待兔"
    assert cursor.previous(None).idiom == "守株待兔"


def test_empty_grouping_has_no_neighbours():
    cursor = BrowseCursor(group_idioms([]))
    assert cursor.next(None) is None
    assert cursor.previous(make("x")) is None
    assert len(cursor) == 0
