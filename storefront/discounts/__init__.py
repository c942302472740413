# storefront/discounts/__init__.py
"""Discount rules and the factory that builds them"""
from .exceptions import (
    DiscountError,
    DiscountStorageError,
    UnrecognizedDiscountKindError,
    UnsupportedDiscountKindError,
)
from .rules import DiscountRule, check_eligibility, fixed_amount_discount
from .factory import create_rule, is_kind_supported, supported_kinds

__all__ = [
    'DiscountError',
    'DiscountStorageError',
    'UnrecognizedDiscountKindError',
    'UnsupportedDiscountKindError',
    'DiscountRule',
    'check_eligibility',
    'fixed_amount_discount',
    'create_rule',
    'is_kind_supported',
    'supported_kinds',
]
