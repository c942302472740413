# storefront/discounts/factory.py
from typing import Dict, FrozenSet, Optional, Union
from ..models.discount import DiscountKind, DiscountPolicy
from .exceptions import UnrecognizedDiscountKindError, UnsupportedDiscountKindError
from .rules import Calculator, DiscountRule, fixed_amount_discount

# Kinds with an executable rule
RULE_CALCULATORS: Dict[DiscountKind, Calculator] = {
    DiscountKind.FIXED_AMOUNT: fixed_amount_discount,
}

PERCENTAGE_NOT_SUPPORTED = (
    "Percentage discounts are not supported yet; "
    "only fixed-amount discounts can be applied"
)

def _as_kind(kind: Union[DiscountKind, str]) -> Optional[DiscountKind]:
    try:
        return DiscountKind(kind)
    except ValueError:
        return None

def create_rule(policy: DiscountPolicy) -> DiscountRule:
    """Build the rule for the policy's kind"""
    kind = _as_kind(policy.kind)
    if kind is None:
        raise UnrecognizedDiscountKindError(policy.kind)

    calculate = RULE_CALCULATORS.get(kind)
    if calculate is None:
        if kind == DiscountKind.PERCENTAGE:
            raise UnsupportedDiscountKindError(kind, PERCENTAGE_NOT_SUPPORTED)
        raise UnsupportedDiscountKindError(kind, f"Discount kind {kind.value} is not supported yet")

    return DiscountRule(policy, calculate)

def supported_kinds() -> FrozenSet[DiscountKind]:
    """Kinds create_rule can build"""
    return frozenset(RULE_CALCULATORS)

def is_kind_supported(kind: Union[DiscountKind, str]) -> bool:
    """Check a kind before attempting create_rule"""
    return _as_kind(kind) in RULE_CALCULATORS
