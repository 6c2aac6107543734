"""Liveness endpoint for PaperDesk backend."""

from fastapi import APIRouter, Depends

from paperdesk.context import AppContext, get_context

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(ctx: AppContext = Depends(get_context)):
    """Lightweight liveness check (no provider calls)."""
    return {"status": "ok", "identity": ctx.identity_enabled}
