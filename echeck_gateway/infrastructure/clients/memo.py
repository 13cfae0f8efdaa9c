"""AI memo assistant - suggests short payment memos for e-checks"""

from openai import AsyncOpenAI, APIError
from echeck_gateway.config import settings
from echeck_gateway.domain.exceptions import MemoAssistantError

SYSTEM_PROMPT = (
    "You are an AI assistant specialized in generating clear and concise payment memos "
    "for e-check transactions. Your goal is to create a memo that accurately reflects the "
    "transaction's purpose in a brief and professional manner. Do not include the amount in "
    "the memo unless it's integral to the description (e.g., \"Partial payment for $500 "
    "invoice\"). Keep the memo under 50 characters if possible. Reply with the memo text only."
)

USER_PROMPT = (
    "Based on the following transaction details, suggest a suitable payment memo:\n\n"
    "Recipient: {recipient_name}\n"
    "Amount: {amount}\n"
    "Purpose: {purpose}"
)


def build_openai_client(*, api_key: str, base_url: str | None, timeout: float) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)


class MemoAssistantClient:
    """Client for an OpenAI-compatible chat completion endpoint"""

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None):
        self.client = client or build_openai_client(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.http_timeout_seconds,
        )
        self.model = model or settings.memo_model
        self.max_length = settings.memo_max_length

    async def suggest_memo(self, recipient_name: str, amount: str, purpose: str) -> str:
        """
        Suggest a memo for a payment.

        Args:
            recipient_name: Payee name
            amount: Display amount, e.g. "$100.00"
            purpose: Free-text reason for the payment

        Raises:
            MemoAssistantError: Provider failure or empty suggestion
        """
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": USER_PROMPT.format(
                            recipient_name=recipient_name, amount=amount, purpose=purpose
                        ),
                    },
                ],
                temperature=0.3,
            )
        except APIError as e:
            raise MemoAssistantError(f"Memo assistant unavailable: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        memo = (content or "").strip().strip('"').strip()
        if not memo:
            raise MemoAssistantError("Memo assistant returned an empty suggestion")

        # Memo line on the check face is short; cut at a word boundary
        if len(memo) > self.max_length:
            memo = memo[: self.max_length].rsplit(" ", 1)[0].rstrip(" ,.;:-")

        return memo
