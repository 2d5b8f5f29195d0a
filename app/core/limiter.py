"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (e.g. auth) can use
the same instance without circular imports. Limits are fixed windows per
client address; the strings come from settings and are resolved per request.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings


def _global_limit() -> str:
    return get_settings().global_rate_limit


def _auth_limit() -> str:
    return get_settings().auth_rate_limit


def _payment_limit() -> str:
    return get_settings().payment_rate_limit


limiter = Limiter(key_func=get_remote_address, default_limits=[_global_limit])

limit_auth = limiter.limit(_auth_limit)
limit_payment = limiter.limit(_payment_limit)
