from __future__ import annotations

from typing import Callable, Awaitable
import contextvars

import grpc

from application.error_mapper import ErrorCategory, error_mapper
from core.logging_config import get_logger
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id


logger = get_logger(__name__)

# Mark that the current request has been mapped to a gRPC status
_mapped_error: contextvars.ContextVar[bool] = contextvars.ContextVar("grpc_mapped_error", default=False)


def set_mapped_error() -> None:
    _mapped_error.set(True)


def is_mapped_error() -> bool:
    return bool(_mapped_error.get())


_STATUS_BY_CATEGORY = {
    ErrorCategory.INVALID_ARGUMENT: grpc.StatusCode.INVALID_ARGUMENT,
    ErrorCategory.ALREADY_EXISTS: grpc.StatusCode.ALREADY_EXISTS,
    ErrorCategory.UNAVAILABLE: grpc.StatusCode.UNAVAILABLE,
    ErrorCategory.NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    ErrorCategory.INTERNAL: grpc.StatusCode.INTERNAL,
}


def category_to_grpc_status(category: ErrorCategory) -> grpc.StatusCode:
    return _STATUS_BY_CATEGORY.get(category, grpc.StatusCode.INTERNAL)


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None:
            return handler

        method = handler_call_details.method

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except Exception as exc:
                # Explicit context.abort() raises AbortError, a BaseException, and is not caught here
                error = error_mapper.to_service_error(exc)
                status = category_to_grpc_status(error.category)
                request_id = get_request_id()
                trailing = [
                    ("x-biz-code", str(int(error.code))),
                    ("x-error-type", error.error_type or "BusinessError"),
                    ("x-retryable", "true" if error.retryable else "false"),
                ]
                if request_id:
                    trailing.append((REQUEST_ID_META_KEY, request_id))
                context.set_trailing_metadata(tuple(trailing))
                set_mapped_error()
                if error.category is ErrorCategory.INTERNAL and error is not exc:
                    # Unexpected exception -> keep the stack
                    logger.error(
                        "grpc_unhandled_error",
                        method=method,
                        error=str(exc),
                        exc_info=True,
                        request_id=request_id,
                    )
                else:
                    # Concise business error log (no stack)
                    logger.warning(
                        "grpc_mapped_error",
                        method=method,
                        code=str(int(error.code)),
                        status=status.name,
                        message=error.message,
                        request_id=request_id,
                    )
                await context.abort(status, error.message)

        if handler.unary_unary:
            return grpc.unary_unary_rpc_method_handler(
                _unary_unary,
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        return handler
