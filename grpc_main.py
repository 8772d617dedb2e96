"""Run the payments gRPC server: `python grpc_main.py`."""
import asyncio
import signal

from application.factory import get_payment_processor
from core.config import settings
from core.logging_config import get_logger
from grpc_app.server import create_server


logger = get_logger(__name__)


async def serve() -> None:
    if not settings.grpc.enabled:
        logger.warning("grpc_disabled", hint="set GRPC__ENABLED=true to serve")
        return

    server = await create_server(get_payment_processor())
    await server.start()
    logger.info("grpc_started", address=f"{settings.grpc.host}:{settings.grpc.port}")

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers
            pass

    waiter = asyncio.create_task(server.wait_for_termination())
    await asyncio.wait({waiter, asyncio.create_task(stop.wait())}, return_when=asyncio.FIRST_COMPLETED)

    # In-flight requests get the grace period; anything cut off stays IN_PROGRESS
    logger.info("grpc_stopping", grace_seconds=settings.grpc.shutdown_grace_seconds)
    await server.stop(grace=settings.grpc.shutdown_grace_seconds)
    logger.info("grpc_stopped")


if __name__ == "__main__":
    asyncio.run(serve())
