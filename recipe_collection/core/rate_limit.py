import os

from slowapi import Limiter
from slowapi.util import get_remote_address

# Rate limiter keyed on client IP address.
# Disabled during testing (when DATABASE_URL contains 'test')
_is_testing = "test" in os.environ.get("DATABASE_URL", "").lower()
limiter = Limiter(key_func=get_remote_address, enabled=not _is_testing)
