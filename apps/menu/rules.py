"""Topping eligibility.

Works on anything exposing ``category`` / ``allow_toppings`` attributes so
pricing code can use it on unsaved instances.
"""

GENERAL_CATEGORY = "General"


def is_topping_eligible(item, topping) -> bool:
    if not getattr(item, "allow_toppings", True):
        return False
    return topping.category == item.category or topping.category == GENERAL_CATEGORY


def filter_eligible(item, toppings):
    return [t for t in toppings if is_topping_eligible(item, t)]
