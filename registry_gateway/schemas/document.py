"""Pydantic schemas for registry documents and gateway responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    """Document metadata forwarded to the registry as-is.

    Serialized with the registry's camelCase field names; either the
    camelCase or the snake_case name is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    description: str = Field(..., description="Free-form document description.")
    participant_inn: str = Field(..., description="Taxpayer id of the submitting participant.")
    doc_id: str = Field(..., description="Caller-assigned document identifier.")
    doc_status: str = Field(..., description="Document status, e.g. NEW.")
    doc_type: str = Field(..., description="Registry document type, e.g. LP_INTRODUCE_GOODS.")
    import_request: bool = Field(False, description="Whether the goods are imported.")
    production_date: str = Field(..., description="Production date (YYYY-MM-DD).")
    production_type: str = Field(..., description="Production type, e.g. OWN_PRODUCTION.")


class SignedSubmission(BaseModel):
    """Request body sent to the registry: a document plus its signature."""

    model_config = ConfigDict(frozen=True)

    document: Document
    signature: str = Field(..., description="Caller-supplied signature of the document.")

    def to_json(self) -> str:
        """Canonical wire body (camelCase document fields, compact JSON)."""
        return self.model_dump_json(by_alias=True)


class CreateDocumentResponse(BaseModel):
    """Gateway response for a successful submission."""

    result: str = Field(..., description="Registry response body, verbatim.")


class RateLimitStatsResponse(BaseModel):
    """Gateway view of the shared limiter's accounting."""

    limit: int
    window_seconds: float
    in_window: int
    available: int
    admitted_total: int
    evicted_total: int
    waiting: int
    closed: bool
