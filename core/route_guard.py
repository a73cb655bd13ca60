# core/route_guard.py

"""
Request interception for page routes.

Staff pages and portal pages use different sessions, so they are guarded by
separate branches. Whatever identity is resolved is left on request.state
for the handlers; nothing is re-fetched further down.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging_config import logger
from core.portal_auth import PORTAL_DASHBOARD_PATH, PORTAL_LOGIN_PATH, get_player_session
from dependencies.auth import STAFF_LOGIN_PATH, extract_staff_token, resolve_staff_user


STAFF_DASHBOARD_PATH = "/dashboard"
STAFF_PROTECTED_PREFIXES = ("/dashboard", "/manager", "/matches", "/areas", "/player")
STAFF_ENTRY_PATHS = ("/", STAFF_LOGIN_PATH)

PORTAL_PREFIX = "/portal"
PORTAL_PUBLIC_PATHS = (PORTAL_LOGIN_PATH, "/portal/logout")


def matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_staff_protected(path: str) -> bool:
    # Plain prefix match: "/players" and "/dashboard-v2" are staff pages too
    return path.startswith(STAFF_PROTECTED_PREFIXES)


# ============================================================
# Redirect decisions (pure)
# ============================================================
def staff_redirect(path: str, authenticated: bool) -> Optional[str]:
    if not authenticated and is_staff_protected(path):
        return STAFF_LOGIN_PATH
    if authenticated and path in STAFF_ENTRY_PATHS:
        return STAFF_DASHBOARD_PATH
    return None


def portal_redirect(path: str, method: str, authenticated: bool) -> Optional[str]:
    if path in PORTAL_PUBLIC_PATHS:
        if authenticated and path == PORTAL_LOGIN_PATH and method == "GET":
            return PORTAL_DASHBOARD_PATH
        return None
    if not authenticated:
        return PORTAL_LOGIN_PATH
    return None


# ============================================================
# Middleware
# ============================================================
class RouteGuardMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if matches_prefix(path, PORTAL_PREFIX):
            session = get_player_session(request)
            request.state.player_session = session
            target = portal_redirect(path, request.method, session is not None)

        elif path in STAFF_ENTRY_PATHS or is_staff_protected(path):
            user = await self._resolve_staff(request)
            target = staff_redirect(path, user is not None)

        else:
            target = None

        if target:
            return RedirectResponse(target)

        return await call_next(request)

    async def _resolve_staff(self, request: Request):
        try:
            user = await run_in_threadpool(resolve_staff_user, extract_staff_token(request))
        except Exception:
            # Fail closed: a flaky provider means "not logged in" for this request
            logger.exception(f"Route guard identity lookup failed for {request.url.path}")
            user = None

        request.state.staff_user = user
        request.state.staff_resolved = True
        return user
