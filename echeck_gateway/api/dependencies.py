"""Dependency injection for FastAPI endpoints"""

from typing import Optional
from fastapi import Header, HTTPException, Request
from echeck_gateway.infrastructure.clients.stripe import StripePayoutClient
from echeck_gateway.infrastructure.clients.memo import MemoAssistantClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Issuer identity, set by the upstream auth gateway"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-ID header")
    return x_user_id


def get_display_name(x_user_name: Optional[str] = Header(None)) -> Optional[str]:
    """Issuer display name printed as the check payer, if the gateway sends one"""
    return x_user_name or None


def get_stripe_client() -> StripePayoutClient:
    """Provide Stripe payout client instance"""
    return StripePayoutClient()


def get_memo_client() -> MemoAssistantClient:
    """Provide memo assistant client instance"""
    return MemoAssistantClient()
