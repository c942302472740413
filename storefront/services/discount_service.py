# storefront/services/discount_service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Protocol
from ..discounts.exceptions import DiscountError, DiscountStorageError
from ..discounts.factory import create_rule, is_kind_supported
from ..models.discount import (
    AppliedDiscount,
    DiscountCalculationInput,
    DiscountLineItem,
    DiscountPolicy,
    PolicyPreview,
    RejectionReason,
)
from ..utils.timeutils import current_time

APPLY_FAILED_MESSAGE = "An error occurred while applying the discount"
NOT_FOUND_MESSAGE = "Discount policy not found"

class PolicyStore(Protocol):
    """Lookup contract the service needs from storage"""

    async def find_policy_by_id(self, policy_id: str) -> Optional[DiscountPolicy]:
        ...

    async def list_policies(self, is_active: Optional[bool] = True,
                            valid_at: Optional[datetime] = None) -> List[DiscountPolicy]:
        ...

class DiscountService:
    """Applies and previews discount policies loaded from a policy store"""

    def __init__(self, store: PolicyStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def apply_discount(self, policy_id: str, calc_input: DiscountCalculationInput,
                             now: Optional[datetime] = None) -> AppliedDiscount:
        """Apply one policy to an order total

        Business rejections, unsupported kinds and storage failures all come
        back as an inapplicable result rather than an exception.
        """
        total = calc_input.total_amount
        try:
            policy = await self.store.find_policy_by_id(policy_id)
        except DiscountStorageError as e:
            self.logger.error(f"Error loading discount policy {policy_id}: {e}")
            return AppliedDiscount.rejected(total, APPLY_FAILED_MESSAGE, RejectionReason.ERROR)

        if policy is None:
            return AppliedDiscount.rejected(total, NOT_FOUND_MESSAGE, RejectionReason.NOT_FOUND)

        try:
            rule = create_rule(policy)
        except DiscountError as e:
            self.logger.warning(f"Discount policy {policy_id} cannot be applied: {e}")
            return AppliedDiscount(
                discount_amount=Decimal(0),
                final_amount=total,
                is_applicable=False,
                message=str(e),
                reason=RejectionReason.UNSUPPORTED_KIND,
                policy=policy
            )

        try:
            result = rule.apply(calc_input, now)
        except (ValueError, ArithmeticError) as e:
            self.logger.error(f"Error calculating discount {policy_id}: {e}")
            return AppliedDiscount.rejected(total, APPLY_FAILED_MESSAGE, RejectionReason.ERROR)

        return AppliedDiscount(**result.model_dump(), policy=policy)

    async def calculate_discount(self, policy_id: str, total_amount: Decimal,
                                 items: Optional[Iterable[DiscountLineItem]] = None) -> Decimal:
        """Discount amount only; zero when the policy does not apply"""
        calc_input = DiscountCalculationInput(
            total_amount=total_amount,
            items=list(items) if items is not None else None
        )
        result = await self.apply_discount(policy_id, calc_input)
        return result.discount_amount

    async def list_available_policies(self, now: Optional[datetime] = None) -> List[DiscountPolicy]:
        """Active policies whose window covers now, newest first"""
        now = now or current_time()
        try:
            return await self.store.list_policies(is_active=True, valid_at=now)
        except DiscountStorageError as e:
            self.logger.error(f"Error listing discount policies: {e}")
            return []

    async def preview_all(self, total_amount: Decimal, now: Optional[datetime] = None,
                          include_unsupported: bool = False) -> List[PolicyPreview]:
        """Preview every available policy against a total

        One failing policy yields a can_apply=False entry and never aborts
        the rest.
        """
        total_amount = Decimal(total_amount)
        now = now or current_time()
        policies = await self.list_available_policies(now)
        if not include_unsupported:
            policies = [p for p in policies if is_kind_supported(p.kind)]

        return [self._preview_policy(policy, total_amount, now) for policy in policies]

    def _preview_policy(self, policy: DiscountPolicy, total_amount: Decimal,
                        now: datetime) -> PolicyPreview:
        try:
            preview = create_rule(policy).preview(total_amount, now)
        except (DiscountError, ValueError, ArithmeticError) as e:
            self.logger.warning(f"Could not preview discount policy {policy.id}: {e}")
            return PolicyPreview(
                policy=policy,
                can_apply=False,
                discount_amount=Decimal(0),
                final_amount=total_amount,
                message=str(e) or "Error while processing the discount"
            )

        return PolicyPreview(
            policy=policy,
            can_apply=preview.can_apply,
            discount_amount=preview.discount_amount,
            final_amount=total_amount - preview.discount_amount,
            message=preview.message
        )
