import os
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Per-route limits only (login, order placement); the blanket per-path API
# limit lives in app.ratelimit
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("RATELIMIT_STORAGE_URL", "memory://"),
    strategy="fixed-window",
)
