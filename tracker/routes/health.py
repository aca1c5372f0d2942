from collections.abc import Callable

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from tracker.config import settings
from tracker.db import db_ping
from tracker.redis_client import redis_ping

router = APIRouter(tags=["health"])

def _probe(fn: Callable[[], bool]) -> tuple[bool, str | None]:
    try:
        return bool(fn()), None
    except Exception as e:
        msg = str(e).strip()
        return False, f"{e.__class__.__name__}{(': ' + msg) if msg else ''}"

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# readiness probe: 200 only when db + redis answer, 503 with details otherwise
@router.get("/ready")
def ready():
    checks: dict[str, bool] = {}
    errors: dict[str, str] = {}

    for name, fn in (("db", db_ping), ("redis", redis_ping)):
        checks[name], err = _probe(fn)
        if err:
            errors[name] = err

    ok = all(checks.values())
    body: dict = {"status": "ok" if ok else "unready", "env": settings.app_env, "checks": checks}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=200 if ok else 503, content=body)
