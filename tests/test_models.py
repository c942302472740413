"""Discount policy parsing."""
from datetime import date, datetime
from decimal import Decimal

import pytest
import pytz
from pydantic import ValidationError

from storefront.config import Config
from storefront.models.discount import (
    AppliedDiscount,
    DiscountCalculationInput,
    DiscountKind,
    RejectionReason,
)


def test_kind_parsed_to_enum(policy):
    assert policy.kind is DiscountKind.FIXED_AMOUNT


def test_unknown_kind_kept_as_string(make_policy):
    policy = make_policy(kind="LOYALTY_POINTS")
    assert policy.kind == "LOYALTY_POINTS"
    assert not isinstance(policy.kind, DiscountKind)


def test_date_window_is_widened_in_shop_timezone(policy):
    shop_tz = pytz.timezone(Config.TIMEZONE)
    assert policy.valid_from == shop_tz.localize(datetime(2025, 1, 1))
    last_day = policy.valid_to.astimezone(shop_tz)
    assert last_day.date() == date(2025, 12, 31)
    assert last_day.hour == 23 and last_day.minute == 59


def test_naive_datetimes_become_utc(make_policy):
    policy = make_policy(valid_from=datetime(2025, 3, 1, 9, 30))
    assert policy.valid_from.tzinfo is not None
    assert policy.valid_from.utcoffset().total_seconds() == 0


def test_amounts_are_decimal(policy):
    assert policy.value == Decimal(5000)
    assert isinstance(policy.min_amount, Decimal)


@pytest.mark.parametrize("field", ["value", "min_amount", "max_amount"])
def test_negative_amounts_rejected(make_policy, field):
    with pytest.raises(ValidationError):
        make_policy(**{field: -1})


def test_policy_is_frozen(policy):
    with pytest.raises(ValidationError):
        policy.value = Decimal(1)


def test_calculation_input_rejects_negative_total():
    with pytest.raises(ValidationError):
        DiscountCalculationInput(total_amount=-1)


def test_rejected_result():
    result = AppliedDiscount.rejected(Decimal(1000), "nope", RejectionReason.NOT_FOUND)
    assert isinstance(result, AppliedDiscount)
    assert result.discount_amount == 0
    assert result.final_amount == 1000
    assert result.is_applicable is False
    assert result.policy is None
