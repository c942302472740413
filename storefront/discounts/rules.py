# storefront/discounts/rules.py
"""Eligibility checks and calculators for discount policies"""
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Tuple
from ..models.discount import (
    DiscountCalculationInput,
    DiscountKind,
    DiscountPolicy,
    DiscountPreview,
    DiscountResult,
    RejectionReason,
)
from ..utils.formatters import format_money
from ..utils.timeutils import current_time, ensure_aware

Calculator = Callable[[DiscountPolicy, DiscountCalculationInput], Decimal]
Rejection = Tuple[RejectionReason, str]

def check_eligibility(policy: DiscountPolicy, total_amount: Decimal,
                      now: Optional[datetime] = None) -> Optional[Rejection]:
    """Return why the policy does not apply, or None when it does"""
    if not policy.is_active:
        return RejectionReason.INACTIVE, "Discount is inactive"

    now = ensure_aware(now) if now is not None else current_time()
    if now < policy.valid_from:
        return RejectionReason.NOT_STARTED, "Discount is not yet within its validity window"
    if now > policy.valid_to:
        return RejectionReason.EXPIRED, "Discount validity window has expired"

    if policy.min_amount is not None and total_amount < policy.min_amount:
        return (
            RejectionReason.BELOW_MINIMUM,
            f"Order total must be at least {format_money(policy.min_amount)} to use this discount"
        )

    return None

def fixed_amount_discount(policy: DiscountPolicy, calc_input: DiscountCalculationInput) -> Decimal:
    """Take the policy value off, never more than the order total"""
    return min(policy.value, calc_input.total_amount)

class DiscountRule:
    """A policy bound to the calculator for its kind"""

    def __init__(self, policy: DiscountPolicy, calculate: Calculator):
        self._policy = policy
        self._calculate = calculate

    @property
    def policy(self) -> DiscountPolicy:
        return self._policy

    @property
    def name(self) -> str:
        return self._policy.name

    @property
    def kind(self) -> DiscountKind:
        return self._policy.kind

    def apply(self, calc_input: DiscountCalculationInput,
              now: Optional[datetime] = None) -> DiscountResult:
        """Validate the policy against the input and compute the discount"""
        total = calc_input.total_amount
        rejection = check_eligibility(self._policy, total, now)
        if rejection:
            reason, message = rejection
            return DiscountResult.rejected(total, message, reason)

        discount_amount = self._calculate(self._policy, calc_input)
        return DiscountResult(
            discount_amount=discount_amount,
            final_amount=max(Decimal(0), total - discount_amount),
            is_applicable=True,
            message=f"Discount applied: {self._policy.name}"
        )

    def preview(self, total_amount: Decimal, now: Optional[datetime] = None) -> DiscountPreview:
        """Show what apply would do, with a hint when the total is short of the minimum"""
        calc_input = DiscountCalculationInput(total_amount=total_amount)
        total_amount = calc_input.total_amount
        rejection = check_eligibility(self._policy, total_amount, now)
        if rejection:
            reason, message = rejection
            if reason == RejectionReason.BELOW_MINIMUM:
                remaining = self._policy.min_amount - total_amount
                message = f"Add {format_money(remaining)} more to use this discount"
            return DiscountPreview(
                can_apply=False,
                discount_amount=Decimal(0),
                message=message,
                reason=reason
            )

        discount_amount = self._calculate(self._policy, calc_input)
        return DiscountPreview(
            can_apply=True,
            discount_amount=discount_amount,
            message=f"{format_money(discount_amount)} off will be applied"
        )

    def describe(self) -> str:
        """Short human description of the offer"""
        text = f"{format_money(self._policy.value)} off"
        if self._policy.min_amount:
            text += f" on orders of {format_money(self._policy.min_amount)} or more"
        return text

    def __repr__(self) -> str:
        return f"DiscountRule(id={self._policy.id!r}, kind={self._policy.kind!r})"
