# storefront/models/discount.py
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union
import pytz
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .base import TimeStampedModel
from ..config import Config
from ..utils.timeutils import ensure_aware

class DiscountKind(str, Enum):
    """Discount kinds"""
    FIXED_AMOUNT = "FIXED_AMOUNT"  # absolute currency units
    PERCENTAGE = "PERCENTAGE"  # percentage points of the total

class RejectionReason(str, Enum):
    """Why a discount did not apply"""
    INACTIVE = "inactive"
    NOT_STARTED = "not_started"
    EXPIRED = "expired"
    BELOW_MINIMUM = "below_minimum"
    NOT_FOUND = "not_found"
    UNSUPPORTED_KIND = "unsupported_kind"
    ERROR = "error"

class DiscountPolicy(TimeStampedModel):
    """A configured discount offer"""
    id: str
    name: str
    description: Optional[str] = None
    # Unknown stored kinds stay as raw strings so the factory can reject them
    kind: Union[DiscountKind, str] = Field(union_mode="left_to_right")
    value: Decimal = Field(ge=0)
    min_amount: Optional[Decimal] = Field(default=None, ge=0)
    max_amount: Optional[Decimal] = Field(default=None, ge=0)  # percentage cap
    is_active: bool = True
    valid_from: datetime
    valid_to: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, value):
        try:
            return DiscountKind(value)
        except ValueError:
            return value

    @field_validator("valid_from", mode="before")
    @classmethod
    def _window_start(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return pytz.timezone(Config.TIMEZONE).localize(datetime.combine(value, time.min))
        return value

    @field_validator("valid_to", mode="before")
    @classmethod
    def _window_end(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return pytz.timezone(Config.TIMEZONE).localize(datetime.combine(value, time.max))
        return value

    @field_validator("valid_from", "valid_to")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

class DiscountLineItem(BaseModel):
    """Single order line passed along with a calculation"""
    product_id: str
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0)

class DiscountCalculationInput(BaseModel):
    """Order total (and optional lines) a discount is evaluated against"""
    total_amount: Decimal = Field(ge=0)
    items: Optional[List[DiscountLineItem]] = None

class DiscountResult(BaseModel):
    """Outcome of applying a discount"""
    discount_amount: Decimal
    final_amount: Decimal
    is_applicable: bool
    message: str
    reason: Optional[RejectionReason] = None

    @classmethod
    def rejected(cls, total_amount: Decimal, message: str,
                 reason: Optional[RejectionReason] = None) -> "DiscountResult":
        return cls(
            discount_amount=Decimal(0),
            final_amount=total_amount,
            is_applicable=False,
            message=message,
            reason=reason
        )

class AppliedDiscount(DiscountResult):
    """Discount result together with the policy it was computed from"""
    policy: Optional[DiscountPolicy] = None

class DiscountPreview(BaseModel):
    """Non-committal answer to 'what would this discount do'"""
    can_apply: bool
    discount_amount: Decimal
    message: str
    reason: Optional[RejectionReason] = None

class PolicyPreview(BaseModel):
    """Preview of one available policy against a total"""
    policy: DiscountPolicy
    can_apply: bool
    discount_amount: Decimal
    final_amount: Decimal
    message: str
