from __future__ import annotations
import httpx
from typing import Optional, Dict, Any, Tuple

async def http_get(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[int, str]:
    """
    Single async GET. Returns (status_code, text).

    No retries: every dispatch has to go through the caller's rate limiter.
    Transport errors (including httpx.TimeoutException) propagate. When no
    client is given a short-lived one is opened and closed here.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout)

    try:
        r = await client.get(url, params=params, headers=headers, timeout=timeout)
        return r.status_code, r.text
    finally:
        if owns_client:
            await client.aclose()
