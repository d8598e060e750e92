"""
Tests for expense category classification and report row ordering.
"""
from types import SimpleNamespace

import pytest

from jet_finances.services.category_service import (
    ALL_CATEGORIES,
    FLIGHT_CATEGORIES,
    NON_FLIGHT_CATEGORIES,
    category_sort_key,
    classify_base,
    classify_display,
    is_non_flight,
)


def expense(type_text, subtype=None):
    return SimpleNamespace(type=type_text, subtype=subtype)


@pytest.mark.parametrize("category", sorted(ALL_CATEGORIES))
def test_exact_category_name_classifies_to_itself(category):
    assert classify_base(expense(category)) == category


@pytest.mark.parametrize("category", sorted(ALL_CATEGORIES))
def test_matching_ignores_case_and_padding(category):
    assert classify_base(expense(f"  {category.upper()} ")) == category


@pytest.mark.parametrize("type_text", ["Random Unmapped Label", "", None, "   ", "Parking"])
def test_unrelated_type_is_unclassified(type_text):
    assert classify_base(expense(type_text)) is None


@pytest.mark.parametrize("type_text, category", [
    ("CAMO management fee", "CAMO and Management"),
    ("Bank disbursement", "Disbursement fee"),
    ("Hull insurance", "Insurance charge"),
    ("Annual subscription", "Subscriptions"),
    ("Falcon Care program", "FalconCare"),
    ("groundhandling OMDW", "Ground handling"),
    ("Enroute charges", "Navigation charges"),
    ("Overflight permit", "Overfly charges"),
    ("Crew food", "Catering"),
    ("FlightPlanning service", "Flight planning"),
    ("Misc other charges", "Other charges"),
])
def test_substring_rules(type_text, category):
    assert classify_base(expense(type_text)) == category


def test_first_matching_rule_wins():
    # "insurance" rule precedes "catering" rule
    assert classify_base(expense("Catering insurance")) == "Insurance charge"


def test_words_without_substring_rule_need_exact_match():
    assert classify_base(expense("Crew training")) is None
    assert classify_base(expense("Jet fuel")) is None
    assert classify_base(expense("Heavy maintenance")) is None


def test_display_label_with_subcategories():
    item = expense("Crew", " Training ")
    assert classify_display(item, show_subcategories=True) == "Crew - Training"
    assert classify_display(item, show_subcategories=False) == "Crew"


def test_display_label_without_subtype():
    assert classify_display(expense("Fuel", "  "), show_subcategories=True) == "Fuel"


def test_display_label_unclassified():
    assert classify_display(expense("Random", "Sub"), show_subcategories=True) is None


def test_flight_groups_partition_categories():
    assert NON_FLIGHT_CATEGORIES.isdisjoint(FLIGHT_CATEGORIES)
    for category in NON_FLIGHT_CATEGORIES:
        assert is_non_flight(expense(category)) is True
    for category in FLIGHT_CATEGORIES:
        assert is_non_flight(expense(category)) is False
    assert is_non_flight(expense("Random")) is None


def test_sort_order_follows_priority_then_label():
    labels = ["Fuel", "Crew - Training", "FalconCare", "Crew", "Unknown", "CAMO and Management", "Crew - Allowance"]
    assert sorted(labels, key=category_sort_key) == [
        "CAMO and Management",
        "Crew",
        "Crew - Allowance",
        "Crew - Training",
        "FalconCare",
        "Fuel",
        "Unknown",
    ]
