"""
Rate limiter shared by the public, unauthenticated endpoints, keyed by client IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fixora.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
