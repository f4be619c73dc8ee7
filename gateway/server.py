# =============================================================================
# gateway/server.py - Process Runner
# =============================================================================
# Runs the gateway under uvicorn and wires process-level error reporting.
#
# Shutdown: the first SIGTERM/SIGINT closes the listener and waits for
# in-flight requests (up to SHUTDOWN_TIMEOUT seconds); the process then
# exits 0. Any further SIGTERM/SIGINT during the drain logs "Forced shutdown"
# at error level, abandons the drain and exits 1.
# =============================================================================

import logging
import signal
import sys
from typing import Any

import uvicorn
from fastapi import FastAPI

from gateway.config import Settings

logger = logging.getLogger(__name__)

EXIT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def excepthook(exc_type, exc, tb) -> None:
    """
    Log uncaught synchronous exceptions. The interpreter then exits with 1.
    """
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.error("Uncaught exception", exc_info=(exc_type, exc, tb))


def loop_exception_handler(loop, context: dict[str, Any]) -> None:
    """
    Log errors from tasks nobody awaited. The process keeps running.
    """
    exc = context.get("exception")
    message = context.get("message", "Unhandled error in event loop")
    if exc is not None:
        logger.error("Unhandled rejection", exc_info=(type(exc), exc, exc.__traceback__))
    else:
        logger.error("Unhandled rejection", extra={"context": {"error": message}})


class GatewayServer(uvicorn.Server):
    """
    uvicorn server where a repeated SIGTERM or SIGINT forces the exit.

    uvicorn itself only forces on a second SIGINT.
    """

    def handle_exit(self, sig: int, frame) -> None:
        repeated = self.should_exit
        super().handle_exit(sig, frame)
        if repeated and sig in EXIT_SIGNALS:
            self.force_exit = True
            logger.error(
                "Forced shutdown",
                extra={"context": {"signal": signal.Signals(sig).name}},
            )

    @property
    def exit_code(self) -> int:
        return 1 if self.force_exit else 0


def install_exit_handlers(server: GatewayServer) -> None:
    """
    Make termination signals exit the process with the server's exit code.

    uvicorn re-raises the signal it caught once the drain is over, with the
    previous handler restored; that handler is this one.
    """
    def _exit(sig, frame):
        sys.exit(server.exit_code)

    for sig in EXIT_SIGNALS:
        signal.signal(sig, _exit)


def build_server_config(app: FastAPI, settings: Settings) -> uvicorn.Config:
    """
    Build the uvicorn config for an app.

    uvicorn's own logging config is disabled so its records go through the
    JSON handlers; the access log is off because the middleware logs requests.
    """
    return uvicorn.Config(
        app,
        host=settings.HOSTNAME,
        port=settings.PORT,
        log_config=None,
        access_log=False,
        timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT,
    )


def run(settings: Settings | None = None) -> None:
    """
    Create the app and serve it until a termination signal arrives.
    """
    # Imported here: main imports loop_exception_handler from this module
    from gateway.config import get_settings
    from gateway.main import create_app

    if settings is None:
        settings = get_settings()

    sys.excepthook = excepthook
    app = create_app(settings)
    server = GatewayServer(build_server_config(app, settings))
    install_exit_handlers(server)
    server.run()
    sys.exit(server.exit_code)
