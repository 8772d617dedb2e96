"""
Response envelope for the HTTP gateway.

Every body has the shape {code, message, data, error}. `code` is a
BusinessCode, so HTTP clients see the same codes gRPC clients get in the
x-biz-code trailer.
"""
from typing import Any, Optional, Generic, TypeVar
from pydantic import BaseModel, Field, field_serializer
from datetime import datetime, timezone
from shared.codes import BusinessCode
from shared.timefmt import iso_utc


T = TypeVar("T")


class ErrorDetail(BaseModel):
    type: str
    # ErrorCategory value, e.g. "ALREADY_EXISTS"
    category: Optional[str] = None
    retryable: bool = False
    details: Optional[dict] = None
    field: Optional[str] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("timestamp")
    def _serialize_timestamp(self, timestamp: datetime) -> str:
        return iso_utc(timestamp)


class Response(BaseModel, Generic[T]):
    code: int
    message: str
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None


def success_response(data: Any = None, message: str = "ok") -> Response:
    return Response(code=BusinessCode.SUCCESS, message=message, data=data)


def error_response(
    code: int,
    message: str,
    error_type: str = "BusinessError",
    *,
    category: Optional[str] = None,
    retryable: bool = False,
    details: Optional[dict] = None,
    field: Optional[str] = None,
    request_id: Optional[str] = None,
) -> Response:
    detail = ErrorDetail(
        type=error_type,
        category=category,
        retryable=retryable,
        details=details,
        field=field,
        request_id=request_id,
    )
    return Response(code=code, message=message, error=detail)
