"""Request/response schemas for the extraction endpoint."""

from pydantic import BaseModel, Field

from statement_extractor.schemas.internal import ExtractionResult


class ExtractRequest(BaseModel):
    """Plain statement text, already converted from PDF by the caller."""

    text: str = Field(..., min_length=1, description="Statement text")
    include_diagnostics: bool | None = Field(
        None, description="Return rule/candidate diagnostics (default from settings)"
    )


class ExtractResponse(BaseModel):
    """Successful extraction."""

    message: str = "Statement parsed successfully"
    result: ExtractionResult
    missing_fields: list[str] = Field(
        default_factory=list, description="Fields that are not available in this statement"
    )
