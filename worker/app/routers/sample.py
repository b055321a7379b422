# worker/app/routers/sample.py
from __future__ import annotations

import logging
import time
import uuid

from fastapi import APIRouter, Depends, HTTPException

from worker.app.config import settings
from worker.app.dependencies.auth import require_auth
from worker.app.models import Notice, SampleRequest, SampleResponse
from worker.app.services.display import cap_lines
from worker.app.services.transform import (
    ParseError,
    ValidationError,
    ensure_not_blank,
    position_to_line_col,
    sample_text,
)
from worker.app.telemetry import telemetry

log = logging.getLogger(__name__)
router = APIRouter(tags=["sample"])


def _fail(request_id: str, counter: str, status_code: int, detail: dict) -> HTTPException:
    telemetry.increment("sample_failed")
    telemetry.increment(counter)
    telemetry.set_error(detail["notice"]["message"])
    telemetry.log_json(
        "sample_failure",
        level="warning" if status_code < 500 else "error",
        request_id=request_id,
        status="error",
        error=detail["error"],
    )
    return HTTPException(status_code=status_code, detail=detail)


@router.post("/sample", response_model=SampleResponse)
def sample(req: SampleRequest, _: bool = Depends(require_auth)) -> SampleResponse:
    """
    Sample a pasted JSON document.

    Returns the full pretty-printed result plus a display copy capped at
    MAX_DISPLAY_LINES. Blank input and invalid JSON come back as 400 with a
    notice triple {message, severity, source}; parse errors also carry the
    offending position, line and column.
    """
    request_id = str(uuid.uuid4())
    start = time.time()

    size = len(req.json_text.encode("utf-8", "surrogatepass"))
    if size > settings.MAX_INPUT_BYTES:
        raise HTTPException(
            status_code=413,
            detail={"ok": False, "error": "too_large", "bytes": size},
        )

    try:
        raw = ensure_not_blank(req.json_text)
    except ValidationError as e:
        notice = Notice(message=str(e), severity="warning", source="form")
        raise _fail(
            request_id,
            "validation_failed",
            400,
            {"ok": False, "error": "validation_error", "notice": notice.model_dump()},
        )

    config = req.to_config()
    try:
        result = sample_text(raw, config)
    except ParseError as e:
        line, column = position_to_line_col(e.doc, e.pos)
        notice = Notice(
            message=f"JSON parse error: {e.msg} (line {line}, column {column})",
            severity="error",
            source="json",
        )
        raise _fail(
            request_id,
            "parse_failed",
            400,
            {
                "ok": False,
                "error": "parse_error",
                "position": e.pos,
                "line": line,
                "column": column,
                "notice": notice.model_dump(),
            },
        )

    shown = cap_lines(result)
    duration_ms = int((time.time() - start) * 1000)
    telemetry.increment("sample_total")
    telemetry.log_json(
        "sample_success",
        request_id=request_id,
        status="success",
        duration_ms=duration_ms,
        list_length=config.max_array_length,
        apply_limit=config.apply_limit,
        decode_escapes=config.decode_escapes,
        line_count=shown.total_lines,
    )
    if shown.truncated:
        log.info(
            f"[sample] display capped at {shown.shown_lines}/{shown.total_lines} lines"
        )
    return SampleResponse(
        result=result,
        display=shown.text,
        line_count=shown.total_lines,
        display_lines=shown.shown_lines,
        truncated=shown.truncated,
    )
