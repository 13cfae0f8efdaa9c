"""Stripe Payouts HTTP client for live ACH transfers"""

import logging
import httpx
from typing import Dict
from echeck_gateway.domain.models import PayoutRequest, PayoutResult
from echeck_gateway.config import settings
from echeck_gateway.infrastructure.observability.metrics import stripe_latency_histogram, stripe_failure_counter

logger = logging.getLogger(__name__)

STATEMENT_DESCRIPTOR_MAX = 22
DEFAULT_STATEMENT_DESCRIPTOR = "E-CHECK PAYOUT"


def mask_account_number(account_number: str) -> str:
    """Keep only the last four digits: "123456789" → "****6789" """
    return f"****{account_number[-4:]}"


def build_payout_form(request: PayoutRequest) -> Dict[str, str]:
    """Form-encoded body for POST /v1/payouts"""
    descriptor = request.description[:STATEMENT_DESCRIPTOR_MAX].upper() or DEFAULT_STATEMENT_DESCRIPTOR
    return {
        "amount": str(request.amount_cents),
        "currency": request.currency.lower(),
        "statement_descriptor": descriptor,
        "method": "standard",
        "metadata[recipient_name]": request.recipient_name,
        "metadata[recipient_routing]": request.recipient_routing,
        "metadata[recipient_account]": mask_account_number(request.recipient_account),
        "metadata[payer_routing]": request.payer_routing,
        "metadata[payer_account]": mask_account_number(request.payer_account),
        "metadata[memo]": request.description,
    }


class StripePayoutClient:
    """Client for the Stripe Payouts API"""

    def __init__(
        self,
        secret_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.secret_key = settings.stripe_secret_key if secret_key is None else secret_key
        self.base_url = base_url or settings.stripe_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def create_payout(self, request: PayoutRequest) -> PayoutResult:
        """
        Initiate an ACH payout from the Stripe balance.

        Never raises: every failure comes back as PayoutResult(success=False)
        with a human-readable error. No retries, no idempotency key.
        """
        if not self.secret_key:
            return PayoutResult(
                success=False,
                error="Stripe secret key is missing. Set STRIPE_SECRET_KEY in the environment.",
            )

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with stripe_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/v1/payouts",
                        data=build_payout_form(request),
                        headers={"Authorization": f"Bearer {self.secret_key}"},
                    )
                response.raise_for_status()
                payout = response.json()

                return PayoutResult(
                    success=True,
                    id=payout["id"],
                    status=payout.get("status"),
                    message="ACH payout authorized from business source.",
                )

            except httpx.TimeoutException:
                error = f"Stripe API timeout after {self.timeout}s"
            except httpx.HTTPStatusError as e:
                error = _stripe_error_message(e.response)
            except httpx.RequestError as e:
                error = f"Stripe API unreachable: {e}"
            except (KeyError, ValueError, TypeError) as e:
                error = f"Invalid payout response from Stripe: {e}"

        stripe_failure_counter.inc()
        logger.error("Stripe payout failed", extra={"error": error})
        return PayoutResult(success=False, error=error)


def _stripe_error_message(response: httpx.Response) -> str:
    """Prefer Stripe's own error message over the bare status code"""
    try:
        message = response.json()["error"]["message"]
    except (KeyError, ValueError, TypeError):
        message = None
    return message or (
        f"Stripe API error: {response.status_code}. "
        "The payout could not be authorized; check balance and API permissions."
    )
