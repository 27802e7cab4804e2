"""Statement extraction endpoint."""

import logging

from fastapi import APIRouter, status

from statement_extractor.config import settings
from statement_extractor.core.exceptions import InputTooLargeError
from statement_extractor.parsers.factory import get_orchestrator
from statement_extractor.schemas.extraction import ExtractRequest, ExtractResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extraction"])


@router.post(
    "/extract",
    response_model=ExtractResponse,
    status_code=status.HTTP_200_OK,
    responses={
        413: {"description": "Statement text too large"},
        422: {"description": "Unsupported statement provider"},
    },
)
def extract(payload: ExtractRequest) -> ExtractResponse:
    """Extract card and billing fields from statement text.

    Runs in the threadpool; extraction is CPU-bound and synchronous.
    """
    if len(payload.text) > settings.max_text_chars:
        raise InputTooLargeError(len(payload.text), settings.max_text_chars)

    include_diagnostics = (
        payload.include_diagnostics
        if payload.include_diagnostics is not None
        else settings.include_diagnostics_default
    )
    result = get_orchestrator().run(payload.text, include_diagnostics=include_diagnostics)

    missing = result.record.missing_fields()
    logger.info(
        "Statement extracted",
        extra={"provider": result.provider.value, "missing_fields": len(missing)},
    )
    return ExtractResponse(result=result, missing_fields=missing)
