from __future__ import annotations
from contextvars import ContextVar

# set per request by RequestContextMiddleware
run_id_var: ContextVar[str] = ContextVar("run_id", default="unknown")


def current_run_id() -> str:
    return run_id_var.get()
