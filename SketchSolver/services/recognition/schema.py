"""Wire schema for the recognition service.

Request:  {"image": "data:image/png;base64,...", "dict_of_vars": {symbol: value}}
Response: {"message": ..., "status": ..., "data": [{"expr", "result", "assign"}, ...]}

Responses are validated in full before anything is applied, so a body that
fails validation never mutates session state.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from SketchSolver.core.errors import MalformedResponse, ServiceFailure
from SketchSolver.core.models import RecognitionResult

SUCCESS_STATUSES = ("success", "ok")


class RecognitionRequest(BaseModel):
    image: str
    dict_of_vars: Dict[str, str] = Field(default_factory=dict)


class RecognitionItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    expr: str
    result: str
    assign: StrictBool

    @field_validator("expr", "result", mode="before")
    @classmethod
    def _numbers_as_text(cls, v: Any) -> Any:
        # The service may evaluate to a bare number; keep it as text.
        if isinstance(v, bool):
            return v  # rejected by the str field
        if isinstance(v, (int, float)):
            return str(v)
        return v

    def to_result(self) -> RecognitionResult:
        return RecognitionResult(expression=self.expr, value=self.result, is_assignment=self.assign)


class RecognitionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: List[RecognitionItem]
    status: Optional[str] = None
    message: Optional[str] = None


def parse_response(body: Any) -> List[RecognitionResult]:
    """Validate a decoded JSON body and return results in service order.

    Raises:
        MalformedResponse: the body does not match the schema.
        ServiceFailure: the body is well-formed but reports a failed status.
    """
    try:
        resp = RecognitionResponse.model_validate(body)
    except ValidationError as e:
        raise MalformedResponse(f"Malformed recognition response: {e.error_count()} validation error(s)") from e
    if resp.status is not None and resp.status.strip().lower() not in SUCCESS_STATUSES:
        raise ServiceFailure(f"Recognition service reported status {resp.status!r}: {resp.message or 'no message'}")
    return [item.to_result() for item in resp.data]
