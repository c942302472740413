# storefront/database/seed.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List
import pytz
from ..models.discount import DiscountKind

logger = logging.getLogger(__name__)

_SEASON_START = datetime(2025, 1, 1, tzinfo=pytz.utc)
_SEASON_END = datetime(2026, 12, 31, 23, 59, 59, tzinfo=pytz.utc)

# Stock offers the shop opens with
SEED_POLICIES: List[Dict[str, Any]] = [
    {
        'name': "First order 5,000 off",
        'description': "Instant discount on a customer's first order",
        'kind': DiscountKind.FIXED_AMOUNT,
        'value': Decimal(5000),
        'min_amount': Decimal(30000),
    },
    {
        'name': "New member 10,000 off",
        'description': "Welcome discount for newly registered members",
        'kind': DiscountKind.FIXED_AMOUNT,
        'value': Decimal(10000),
        'min_amount': Decimal(50000),
    },
    {
        'name': "VIP 15,000 off",
        'description': "Members-only discount for VIP customers",
        'kind': DiscountKind.FIXED_AMOUNT,
        'value': Decimal(15000),
        'min_amount': Decimal(80000),
    },
    {
        'name': "Premium 25,000 off",
        'description': "Largest discount, for premium members",
        'kind': DiscountKind.FIXED_AMOUNT,
        'value': Decimal(25000),
        'min_amount': Decimal(100000),
    },
]

async def seed_discount_policies(store) -> List[str]:
    """Insert the stock offers and return their ids"""
    policy_ids = []
    for policy in SEED_POLICIES:
        policy_ids.append(await store.create_policy({
            **policy,
            'is_active': True,
            'valid_from': _SEASON_START,
            'valid_to': _SEASON_END,
        }))
    logger.info(f"Seeded {len(policy_ids)} discount policies")
    return policy_ids
