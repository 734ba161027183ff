"""Per-client rate limiting for the auth endpoints (login, password change)."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from gym_backend.config import settings


def client_key(request: Request) -> str:
    """
    Key requests by client address.

    X-Forwarded-For is only honoured when TRUST_FORWARDED_FOR is set, since any
    client can send the header when the API is exposed directly.
    """
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("X-Forwarded-For", "")
        client = forwarded.split(",")[0].strip()
        if client:
            return client
    return get_remote_address(request)


limiter = Limiter(key_func=client_key)
