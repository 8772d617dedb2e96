from __future__ import annotations

from typing import Optional, Sequence
import grpc
from grpc_health.v1 import health, health_pb2_grpc, health_pb2

from application.factory import get_payment_processor
from application.services.payment_processor import PaymentProcessor
from core.config import settings
from core.logging_config import get_logger
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.generated.payments.v1 import payments_pb2, payments_pb2_grpc
from grpc_app.services.payment_service import PaymentService


logger = get_logger(__name__)

SERVICE_NAME = payments_pb2.DESCRIPTOR.services_by_name["PaymentService"].full_name


def default_interceptors() -> Sequence[grpc.aio.ServerInterceptor]:
    return (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
    )


async def create_server(
    processor: Optional[PaymentProcessor] = None,
    *,
    bind: bool = True,
) -> grpc.aio.Server:
    """Build the gRPC server.

    With `bind=False` no port is added, so callers (tests) can bind their own
    address, e.g. `server.add_insecure_port("127.0.0.1:0")`.
    """
    options = [
        ("grpc.max_concurrent_streams", max(1, settings.grpc.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=default_interceptors(), options=options)

    # Register services
    payments_pb2_grpc.add_PaymentServiceServicer_to_server(PaymentService(processor or get_payment_processor()), server)

    # Health service
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    await health_svc.set(SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING)

    if not bind:
        return server

    address = f"{settings.grpc.host}:{settings.grpc.port}"

    if settings.grpc.tls.enabled:
        if not (settings.grpc.tls.cert and settings.grpc.tls.key):
            raise RuntimeError("GRPC TLS enabled but cert/key not provided")
        with open(settings.grpc.tls.cert, "rb") as f:
            cert_chain = f.read()
        with open(settings.grpc.tls.key, "rb") as f:
            private_key = f.read()
        root_certificates = None
        if settings.grpc.tls.ca:
            with open(settings.grpc.tls.ca, "rb") as f:
                root_certificates = f.read()
        creds = grpc.ssl_server_credentials(
            [(private_key, cert_chain)],
            root_certificates=root_certificates,
            require_client_auth=bool(root_certificates),
        )
        server.add_secure_port(address, creds)
    else:
        server.add_insecure_port(address)

    logger.info("grpc_server_created", address=address, tls=settings.grpc.tls.enabled)
    return server
