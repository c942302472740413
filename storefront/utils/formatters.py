# storefront/utils/formatters.py
from datetime import datetime
import pytz
from decimal import Decimal
from ..config import Config
from .timeutils import ensure_aware

def format_amount(amount: Decimal) -> str:
    """Format a money amount with thousands separators"""
    amount = Decimal(amount)
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"

def format_money(amount: Decimal) -> str:
    """Format a money amount followed by the shop currency"""
    return f"{format_amount(amount)} {Config.CURRENCY}"

def format_datetime(dt: datetime) -> str:
    """Format a datetime in the shop's timezone"""
    shop_tz = pytz.timezone(Config.TIMEZONE)
    return ensure_aware(dt).astimezone(shop_tz).strftime("%Y-%m-%d %H:%M:%S")
