from __future__ import annotations

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import get_settings


def _client_key(request: Request) -> str:
    """Rate-limit key: forwarded client address when behind a proxy, else the peer IP."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=_client_key, enabled=get_settings().rate_limit_enabled)
