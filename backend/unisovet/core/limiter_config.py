import os

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Global Limiter instance to be imported by controllers
# Note: enabled=True here; create_app() turns it off when RATE_LIMIT_ENABLED=0
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["600 per hour", "120 per minute"],
    storage_uri=os.getenv("LIMITER_STORAGE_URI", "memory://"),
    enabled=True,
)

READ_LIMIT = "100 per minute"
WRITE_LIMIT = "30 per minute"
ASSISTANT_LIMIT = "10 per minute"
