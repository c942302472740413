# storefront/database/discount_store.py
import asyncpg
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from ..discounts.exceptions import DiscountStorageError
from ..models.discount import DiscountPolicy

# Errors that mean the store itself failed rather than the query being empty
STORAGE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

class DiscountPolicyStore:
    """Read access to discount policies, plus inserts for seeding"""

    def __init__(self, db):
        self.db = db
        self.logger = logging.getLogger(__name__)

    async def find_policy_by_id(self, policy_id: str) -> Optional[DiscountPolicy]:
        """Fetch one policy"""
        try:
            async with self.db.pool.acquire() as conn:
                row = await conn.fetchrow("""
                    SELECT *
                    FROM discount_policies
                    WHERE id = $1
                """, policy_id)
        except STORAGE_ERRORS as e:
            raise DiscountStorageError(f"Failed to load discount policy {policy_id}: {e}") from e

        if not row:
            return None
        try:
            return DiscountPolicy.model_validate(dict(row))
        except ValidationError as e:
            raise DiscountStorageError(f"Malformed discount policy {policy_id}: {e}") from e

    async def list_policies(self, is_active: Optional[bool] = True,
                            valid_at: Optional[datetime] = None) -> List[DiscountPolicy]:
        """List policies newest first, optionally only those valid at a given instant"""
        conditions = []
        params: List[Any] = []

        if is_active is not None:
            params.append(is_active)
            conditions.append(f"is_active = ${len(params)}")
        if valid_at is not None:
            params.append(valid_at)
            conditions.append(f"valid_from <= ${len(params)} AND valid_to >= ${len(params)}")

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        query = f"""
            SELECT *
            FROM discount_policies
            {where}
            ORDER BY created_at DESC
        """

        try:
            async with self.db.pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except STORAGE_ERRORS as e:
            raise DiscountStorageError(f"Failed to list discount policies: {e}") from e

        policies = []
        for row in rows:
            try:
                policies.append(DiscountPolicy.model_validate(dict(row)))
            except ValidationError as e:
                self.logger.warning(f"Skipping malformed discount policy {row['id']}: {e}")
        return policies

    async def create_policy(self, policy_data: Dict[str, Any]) -> str:
        """Insert a policy and return its id"""
        policy_id = policy_data.get('id') or str(uuid.uuid4())
        kind = policy_data['kind']
        try:
            async with self.db.pool.acquire() as conn:
                await conn.execute("""
                    INSERT INTO discount_policies (
                        id, name, description, kind, value,
                        min_amount, max_amount, is_active,
                        valid_from, valid_to
                    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
                """,
                    policy_id,
                    policy_data['name'],
                    policy_data.get('description'),
                    getattr(kind, 'value', kind),
                    policy_data['value'],
                    policy_data.get('min_amount'),
                    policy_data.get('max_amount'),
                    policy_data.get('is_active', True),
                    policy_data['valid_from'],
                    policy_data['valid_to']
                )
        except STORAGE_ERRORS as e:
            raise DiscountStorageError(f"Failed to create discount policy: {e}") from e

        self.logger.info(f"Discount policy {policy_id} created")
        return policy_id
