"""
proxy.py — Client address resolution under a trust-proxy policy
================================================================
Behind a reverse proxy the transport peer is the proxy itself and the real
client only appears in X-Forwarded-For. That header is client-controlled,
so it is honoured only when the deployment says a proxy is in front:
production environments, or an explicit SECURE_API_TRUST_PROXY override.

Settings are re-read on every call unless passed in, so the policy follows
the environment at runtime.
"""
from __future__ import annotations

from typing import Optional

from starlette.requests import Request

from .config import Settings, load_settings
from .schemas import RequestAddressInfo


def is_proxy_trusted(settings: Optional[Settings] = None) -> bool:
    cfg = settings if settings is not None else load_settings()
    return cfg.is_production or cfg.trust_proxy


def resolve_client_address(
    info: RequestAddressInfo, settings: Optional[Settings] = None,
) -> str:
    """
    Pick the address that represents the client.

    The claimed address is returned verbatim when the proxy is trusted;
    format validation is left to whoever consumes the address.
    """
    if is_proxy_trusted(settings):
        return info.claimed_address
    return info.transport_address or ""


def address_info_from_request(request: Request) -> RequestAddressInfo:
    transport = request.client.host if request.client else None
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # client, proxy1, proxy2, ...
        claimed = forwarded.split(",")[0].strip()
    else:
        claimed = transport or ""
    return RequestAddressInfo(claimed_address=claimed, transport_address=transport)


def get_client_address(request: Request, settings: Optional[Settings] = None) -> str:
    return resolve_client_address(address_info_from_request(request), settings)
