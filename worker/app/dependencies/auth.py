# worker/app/dependencies/auth.py
import logging

from fastapi import HTTPException, Request

from ..config import settings

log = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail={"ok": False, "error": "unauthorized"})


def require_auth(request: Request) -> bool:
    """
    Dependency guarding POST /sample.
    If WORKER_AUTH_TOKEN is not set, authentication is disabled.
    """
    token = (settings.WORKER_AUTH_TOKEN or "").strip()
    if not token:
        return True

    auth_header = request.headers.get("Authorization")
    if not auth_header:
        log.debug("[auth] missing Authorization header")
        raise _unauthorized()

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0] != "Bearer" or parts[1] != token:
        log.debug("[auth] rejected bearer token")
        raise _unauthorized()

    return True
