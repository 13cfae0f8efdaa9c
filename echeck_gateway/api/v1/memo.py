"""POST /v1/memo/suggest - AI-suggested check memo"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from echeck_gateway.api.v1.schemas import MemoSuggestRequest, MemoSuggestResponse
from echeck_gateway.api.dependencies import get_current_user_id, get_memo_client, get_request_id
from echeck_gateway.infrastructure.clients.memo import MemoAssistantClient
from echeck_gateway.domain.exceptions import MemoAssistantError
from echeck_gateway.infrastructure.observability.metrics import memo_failure_counter

router = APIRouter()


@router.post("/memo/suggest", response_model=MemoSuggestResponse)
async def suggest_memo(
    request_body: MemoSuggestRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    memo_client: MemoAssistantClient = Depends(get_memo_client),
):
    request_id = get_request_id(request)

    try:
        memo = await memo_client.suggest_memo(
            recipient_name=request_body.recipient_name,
            amount=f"${request_body.amount:,.2f}",
            purpose=request_body.purpose,
        )
    except MemoAssistantError as e:
        memo_failure_counter.inc()
        logging.error(f"Memo assistant error: {e}", extra={"request_id": request_id, "user_id": user_id})
        raise HTTPException(status_code=503, detail="Memo assistant unavailable")

    return MemoSuggestResponse(suggested_memo=memo)
