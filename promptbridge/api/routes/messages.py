"""Anthropic-compatible Messages translation endpoint."""

import json
import logging
import time
import uuid
from typing import Any, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from ...core.exceptions import InvalidRequestError
from ...core.registry import get_config
from ...messages import messages_to_chat_completions, resolve_trigger_signal

logger = logging.getLogger("promptbridge")

TRIGGER_SIGNAL_HEADER = "X-Trigger-Signal"


def _anthropic_error_response(
    message: str,
    *,
    error_type: str = "invalid_request_error",
    status_code: int = 400,
    error_code: Optional[str] = None,
    param: Optional[str] = None,
) -> JSONResponse:
    error: dict[str, Any] = {"type": error_type, "message": message}
    if error_code:
        error["code"] = error_code
    if param:
        error["param"] = param
    payload = {"type": "error", "error": error}
    return JSONResponse(payload, status_code=status_code)


async def translate_messages(request: Request) -> Response:
    """POST /v1/messages/translate - return the upstream request for a Messages body."""
    req_id = uuid.uuid4().hex[:8]
    start_time = time.perf_counter()
    client_host = request.client.host if request.client else "unknown"

    logger.info(f"[{req_id}] Translate request from {client_host}")

    try:
        body = await request.body()
        payload = json.loads(body or b"{}")
    except ClientDisconnect:
        logger.warning(f"[{req_id}] ClientDisconnect while reading body")
        return Response(status_code=499)  # Client Closed Request
    except json.JSONDecodeError as exc:
        logger.warning(f"[{req_id}] Invalid JSON payload: {exc}")
        return _anthropic_error_response(
            "Invalid JSON payload",
            error_code="invalid_json",
        )

    if not isinstance(payload, dict):
        logger.warning(f"[{req_id}] Payload is not a JSON object")
        return _anthropic_error_response(
            "Request body must be a JSON object",
            error_code="invalid_json_shape",
        )

    config = get_config()
    trigger_signal = resolve_trigger_signal(config)

    try:
        upstream_request = messages_to_chat_completions(
            payload, config, trigger_signal=trigger_signal
        )
    except InvalidRequestError as exc:
        logger.warning(f"[{req_id}] Rejected request: {exc.message}")
        return _anthropic_error_response(
            exc.message,
            error_code=exc.code,
            param=exc.param,
        )

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"[{req_id}] Translated to model={upstream_request['model']} "
        f"in {elapsed * 1000:.1f}ms"
    )
    return JSONResponse(
        upstream_request,
        headers={TRIGGER_SIGNAL_HEADER: trigger_signal},
    )
