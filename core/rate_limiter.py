# core/rate_limiter.py

from typing import Dict, List, Optional, Tuple
from collections import defaultdict
from fastapi import HTTPException, Request
import time


# In-memory sliding window, per process. Login throttling only.
_attempts: Dict[str, List[float]] = defaultdict(list)


def reset_rate_limits():
    _attempts.clear()


def check_rate_limit(identifier: str, max_requests: int, window_seconds: int) -> Tuple[bool, int]:
    """
    Record one hit for `identifier`.
    Returns (allowed, remaining) for the current window.
    """
    now = time.time()
    recent = [ts for ts in _attempts[identifier] if ts > now - window_seconds]

    if len(recent) >= max_requests:
        _attempts[identifier] = recent
        return False, 0

    recent.append(now)
    _attempts[identifier] = recent
    return True, max_requests - len(recent)


def client_ip(request: Request) -> str:
    # First hop of X-Forwarded-For is the original client behind the proxy
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def require_rate_limit(
    request: Request,
    scope: str,
    max_requests: int,
    window_seconds: int,
    identifier: Optional[str] = None,
) -> int:
    """
    Raises 429 once `identifier` (default: client IP) exceeds the limit for `scope`.
    """
    key = f"{scope}:{identifier or client_ip(request)}"
    allowed, remaining = check_rate_limit(key, max_requests, window_seconds)

    if not allowed:
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds.",
            headers={"Retry-After": str(window_seconds)},
        )

    return remaining
