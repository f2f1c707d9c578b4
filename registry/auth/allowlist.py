"""Access gate: only allow-listed addresses may call gated endpoints."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Coroutine, Optional

from fastapi import Depends, Request

from registry.api.deps import get_allowlist
from registry.cache.allowlist import AllowlistCache
from registry.core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)

FALLBACK_FIELDS = ("creator", "participant", "sender", "from", "address")

INVITE_ONLY = "Invite-only. Tag @owockibot on X to request access."


def extract_address(payload: Any, address_field: str = "address") -> Optional[str]:
    """Return the first non-empty candidate address in ``payload``.

    ``address_field`` is checked first, then the fallback fields in order.
    """

    if not isinstance(payload, dict):
        return None
    for field in (address_field, *FALLBACK_FIELDS):
        value = payload.get(field)
        if isinstance(value, str) and value:
            return value
    return None


async def _read_json(request: Request) -> Any:
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def require_allowlisted(
    address_field: str = "address",
) -> Callable[..., Coroutine[Any, Any, str]]:
    """Build a dependency that rejects callers missing from the allow-list.

    Resolves to the lowercased address that passed the gate; the request
    itself is left untouched.
    """

    async def dependency(
        request: Request,
        allowlist: AllowlistCache = Depends(get_allowlist),
    ) -> str:
        candidate = extract_address(await _read_json(request), address_field)
        if not candidate:
            raise ValidationError("Address required")

        address = candidate.lower()
        if address not in await allowlist.get():
            logger.info(f"Rejected non-allow-listed address {address}")
            raise AuthorizationError(INVITE_ONLY)
        return address

    return dependency
