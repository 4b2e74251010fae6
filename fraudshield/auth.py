"""API key authentication via the x-api-key header."""

import hmac

from fastapi import Security, HTTPException, status
from fastapi.security import APIKeyHeader

from fraudshield import config

API_KEY_NAME = "x-api-key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


async def verify_api_key(api_key: str = Security(api_key_header)) -> str:
    """Validate x-api-key header. Returns 401 if missing or wrong."""
    if api_key is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Please provide the 'x-api-key' header.",
        )

    if not hmac.compare_digest(api_key.encode(), config.API_KEY.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
        )

    return api_key
