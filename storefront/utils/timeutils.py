# storefront/utils/timeutils.py
from datetime import datetime
import pytz
from ..config import Config

def current_time() -> datetime:
    """Timezone-aware now in the shop's timezone"""
    return datetime.now(pytz.timezone(Config.TIMEZONE))

def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC"""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt
