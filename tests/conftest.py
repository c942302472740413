"""Shared fixtures for discount tests."""
from datetime import date, datetime
from typing import List, Optional

import pytest
import pytz

from storefront.discounts.exceptions import DiscountStorageError
from storefront.models.discount import DiscountPolicy

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=pytz.utc)


def build_policy(**overrides) -> DiscountPolicy:
    data = {
        "id": "fixed-5000",
        "name": "New member 5,000 off",
        "description": "Fixed discount for new members",
        "kind": "FIXED_AMOUNT",
        "value": 5000,
        "min_amount": 20000,
        "max_amount": None,
        "is_active": True,
        "valid_from": date(2025, 1, 1),
        "valid_to": date(2025, 12, 31),
        "created_at": datetime(2024, 12, 1, tzinfo=pytz.utc),
    }
    data.update(overrides)
    return DiscountPolicy(**data)


class FakePolicyStore:
    """In-memory stand-in for DiscountPolicyStore."""

    def __init__(self, policies: Optional[List[DiscountPolicy]] = None, fail: bool = False):
        self.policies = list(policies or [])
        self.fail = fail
        self.list_calls = []

    async def find_policy_by_id(self, policy_id):
        if self.fail:
            raise DiscountStorageError("database unavailable")
        for policy in self.policies:
            if policy.id == policy_id:
                return policy
        return None

    async def list_policies(self, is_active=True, valid_at=None):
        if self.fail:
            raise DiscountStorageError("database unavailable")
        self.list_calls.append((is_active, valid_at))
        result = [
            p for p in self.policies
            if (is_active is None or p.is_active == is_active)
            and (valid_at is None or p.valid_from <= valid_at <= p.valid_to)
        ]
        return sorted(result, key=lambda p: p.created_at, reverse=True)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def policy():
    return build_policy()


@pytest.fixture
def make_policy():
    return build_policy


@pytest.fixture
def make_store():
    return FakePolicyStore
