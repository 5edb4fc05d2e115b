"""
Request context helpers.

We keep a small context (request_id, object_key, actor) in ContextVars.
The HTTP middleware and the upload service set these values so every log
line of one upload is correlatable.

No external dependencies.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_object_key: ContextVar[Optional[str]] = ContextVar("object_key", default=None)
_actor: ContextVar[Optional[str]] = ContextVar("actor", default=None)


def set_context(
    *,
    request_id: Optional[str] = None,
    object_key: Optional[str] = None,
    actor: Optional[str] = None,
) -> None:
    if request_id is not None:
        _request_id.set(request_id)
    if object_key is not None:
        _object_key.set(object_key)
    if actor is not None:
        _actor.set(actor)


def clear_context() -> None:
    _request_id.set(None)
    _object_key.set(None)
    _actor.set(None)


def get_context() -> Dict[str, Any]:
    ctx: Dict[str, Any] = {}
    rid = _request_id.get()
    key = _object_key.get()
    actor = _actor.get()

    if rid:
        ctx["request_id"] = rid
    if key:
        ctx["object_key"] = key
    if actor:
        ctx["actor"] = actor
    return ctx
