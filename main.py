# main.py
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from storefront.config import setup_logging
from storefront.database.database import Database
from storefront.database.discount_store import DiscountPolicyStore
from storefront.database.seed import seed_discount_policies
from storefront.services.discount_service import DiscountService
from storefront.utils.formatters import format_datetime, format_money

async def main(argv):
    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)

    args = [arg for arg in argv if arg != "--seed"]
    try:
        total_amount = Decimal(args[0]) if args else Decimal(30000)
    except InvalidOperation:
        logger.error(f"Invalid order total: {args[0]}")
        return 2

    db = Database()
    try:
        await db.connect()
        store = DiscountPolicyStore(db)
        if "--seed" in argv:
            await seed_discount_policies(store)

        service = DiscountService(store)
        previews = await service.preview_all(total_amount)
        logger.info(f"{len(previews)} discounts available for {format_money(total_amount)}")
        for preview in previews:
            mark = "+" if preview.can_apply else "-"
            print(f"[{mark}] {preview.policy.name}: {preview.message} "
                  f"(final {format_money(preview.final_amount)}, "
                  f"until {format_datetime(preview.policy.valid_to)})")
    except Exception as e:
        logger.error(f"Error previewing discounts: {e}", exc_info=True)
        raise
    finally:
        await db.close()
    return 0

if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
