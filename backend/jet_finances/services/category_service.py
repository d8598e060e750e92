"""
Category classification service.

Maps the free-text expense type onto one of the fixed report categories.
Rules are evaluated top to bottom against the lower-cased type text and the
first match wins. Types matching no rule are unclassified and left out of
reports.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

# Non-flight (recurring / overhead) categories
CAMO_AND_MANAGEMENT = "CAMO and Management"
CREW = "Crew"
DISBURSEMENT_FEE = "Disbursement fee"
INSURANCE_CHARGE = "Insurance charge"
MAINTENANCE = "Maintenance"
SUBSCRIPTIONS = "Subscriptions"
OTHER_CHARGES = "Other charges"
FALCONCARE = "FalconCare"
HONEYWELL = "Honeywell"

# Flight (per-trip) categories
GROUND_HANDLING = "Ground handling"
FUEL = "Fuel"
NAVIGATION_CHARGES = "Navigation charges"
OVERFLY_CHARGES = "Overfly charges"
CATERING = "Catering"
FLIGHT_PLANNING = "Flight planning"

NON_FLIGHT_CATEGORIES = frozenset({
    CAMO_AND_MANAGEMENT,
    CREW,
    DISBURSEMENT_FEE,
    INSURANCE_CHARGE,
    MAINTENANCE,
    SUBSCRIPTIONS,
    OTHER_CHARGES,
    FALCONCARE,
    HONEYWELL,
})

FLIGHT_CATEGORIES = frozenset({
    GROUND_HANDLING,
    FUEL,
    NAVIGATION_CHARGES,
    OVERFLY_CHARGES,
    CATERING,
    FLIGHT_PLANNING,
})

ALL_CATEGORIES = NON_FLIGHT_CATEGORIES | FLIGHT_CATEGORIES


@dataclass(frozen=True)
class ClassificationRule:
    """
    One row of the classification table.

    A type matches when it equals one of ``exact``, contains every word in
    ``contains_all``, or contains any word in ``contains_any``.
    """
    category: str
    exact: Tuple[str, ...] = ()
    contains_all: Tuple[str, ...] = ()
    contains_any: Tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if text in self.exact:
            return True
        if self.contains_all and all(word in text for word in self.contains_all):
            return True
        return any(word in text for word in self.contains_any)


# Order matters: first match wins
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(CAMO_AND_MANAGEMENT, exact=("camo and management",), contains_all=("camo", "management")),
    ClassificationRule(CREW, exact=("crew",)),
    ClassificationRule(DISBURSEMENT_FEE, exact=("disbursement fee",), contains_any=("disbursement",)),
    ClassificationRule(INSURANCE_CHARGE, exact=("insurance charge",), contains_any=("insurance",)),
    ClassificationRule(MAINTENANCE, exact=("maintenance",)),
    ClassificationRule(SUBSCRIPTIONS, exact=("subscriptions",), contains_any=("subscription",)),
    ClassificationRule(FALCONCARE, exact=("falconcare", "falcon care"), contains_any=("falconcare", "falcon care")),
    ClassificationRule(HONEYWELL, exact=("honeywell",)),
    ClassificationRule(GROUND_HANDLING, exact=("ground handling",), contains_any=("ground handling", "groundhandling")),
    ClassificationRule(FUEL, exact=("fuel",)),
    ClassificationRule(NAVIGATION_CHARGES, exact=("navigation charges",), contains_any=("navigation", "enroute")),
    ClassificationRule(OVERFLY_CHARGES, exact=("overfly charges",), contains_any=("overfly", "overflight")),
    ClassificationRule(CATERING, exact=("catering",), contains_any=("catering", "food")),
    ClassificationRule(FLIGHT_PLANNING, exact=("flight planning",), contains_any=("flight planning", "flightplanning")),
    ClassificationRule(OTHER_CHARGES, exact=("other charges",), contains_any=("other charges",)),
)

# Display order of report rows: overhead, third-party maintenance programs, per-flight costs
CATEGORY_PRIORITY: Tuple[Tuple[str, ...], ...] = (
    (
        CAMO_AND_MANAGEMENT,
        CREW,
        INSURANCE_CHARGE,
        MAINTENANCE,
        SUBSCRIPTIONS,
        OTHER_CHARGES,
        DISBURSEMENT_FEE,
    ),
    (
        FALCONCARE,
        HONEYWELL,
    ),
    (
        GROUND_HANDLING,
        FUEL,
        NAVIGATION_CHARGES,
        OVERFLY_CHARGES,
        CATERING,
        FLIGHT_PLANNING,
    ),
)

_PRIORITY_INDEX = {
    category: index
    for index, category in enumerate(name for group in CATEGORY_PRIORITY for name in group)
}

SUBCATEGORY_SEPARATOR = " - "


def classify_label(type_text: Optional[str]) -> Optional[str]:
    """Classify a raw expense type string; returns None when no rule matches."""
    if not type_text:
        return None
    text = type_text.strip().lower()
    if not text:
        return None
    for rule in CLASSIFICATION_RULES:
        if rule.matches(text):
            return rule.category
    return None


def classify_base(expense) -> Optional[str]:
    """Return the base category of an expense record (anything with a ``type`` attribute)."""
    return classify_label(expense.type)


def classify_display(expense, show_subcategories: bool) -> Optional[str]:
    """
    Return the report row label for an expense.

    With show_subcategories the subtype is appended ("Crew - Training");
    unclassified expenses return None.
    """
    base = classify_base(expense)
    if base is None:
        return None
    subtype = (expense.subtype or "").strip()
    if show_subcategories and subtype:
        return f"{base}{SUBCATEGORY_SEPARATOR}{subtype}"
    return base


def is_non_flight(expense) -> Optional[bool]:
    """True for overhead categories, False for per-flight ones, None when unclassified."""
    base = classify_base(expense)
    if base is None:
        return None
    return base in NON_FLIGHT_CATEGORIES


def base_of_label(label: str) -> str:
    """Strip the subtype suffix from a display label."""
    return label.split(SUBCATEGORY_SEPARATOR, 1)[0]


def category_sort_key(label: str) -> Tuple[int, str]:
    """Sort key for report rows: priority table first, then the full label alphabetically."""
    priority = _PRIORITY_INDEX.get(base_of_label(label), len(_PRIORITY_INDEX))
    return priority, label.lower()


def get_available_categories() -> list:
    """Get categories in report display order."""
    return [name for group in CATEGORY_PRIORITY for name in group]
