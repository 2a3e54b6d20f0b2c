"""Tests for slot templates."""

from __future__ import annotations

from ruleanchor.datastructs import Assignment
from ruleanchor.templates import Template, fill_value


def test_plain_template_is_always_filled() -> None:
    template = Template("a_u")

    assert template.slots == frozenset()
    assert template.is_filled_by(Assignment())
    assert template.fill(Assignment()) == "a_u"


def test_template_filled_by_assignment() -> None:
    """Slots are substituted with the assigned values."""
    template = Template("room_{i}_{floor}")
    slots = Assignment.of(i=3, floor="top")

    assert template.is_filled_by(slots)
    assert template.fill(slots) == "room_3_top"


def test_partially_filled_template_keeps_missing_slots() -> None:
    template = Template("room_{i}_{floor}")
    slots = Assignment.of(i=3)

    assert not template.is_filled_by(slots)
    assert template.fill(slots) == "room_3_{floor}"


def test_fill_value_leaves_non_templates_unchanged() -> None:
    assert fill_value(5, Assignment.of(x=1)) == 5
    assert fill_value("say {x}", Assignment.of(x="hi")) == "say hi"


def test_single_slot_value_keeps_assigned_type() -> None:
    """A value that is exactly one slot takes the assigned value as is."""
    filled = fill_value("{x}", Assignment.of(x=1))

    assert filled == 1
    assert isinstance(filled, int)
    assert fill_value("{x}", Assignment.of(y=1)) == "{x}"


def test_mixed_slot_value_becomes_string() -> None:
    assert fill_value("{a}{b}", Assignment.of(a=1, b=2)) == "12"
    assert fill_value("v_{a}", Assignment.of(a=1)) == "v_1"
