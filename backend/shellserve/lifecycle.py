"""
Process lifecycle: serve in the background, wait for Ctrl+C, drain, exit.

    STARTING -> LISTENING -> SHUTTING_DOWN -> STOPPED

The uvicorn server runs on a daemon thread so the main thread is free to
wait for SIGINT. Only SIGINT is intercepted; SIGTERM and SIGQUIT keep
their default behavior and end the process immediately.
"""

import enum
import logging
import signal
import sys
import threading
import time
from typing import Callable, Optional

import uvicorn
from starlette.types import ASGIApp

from .core.config import Settings
from .core.errors import ListenerError

logger = logging.getLogger("shellserve.lifecycle")

POLL_INTERVAL_SECONDS = 0.05


class Phase(str, enum.Enum):
    STARTING = "starting"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class LifecycleController:
    """Owns the listening server for the lifetime of the process."""

    def __init__(
        self,
        app: ASGIApp,
        settings: Settings,
        exit_process: Callable[[int], None] = sys.exit,
    ):
        self.app = app
        self.settings = settings
        self._exit_process = exit_process
        self._phase = Phase.STARTING
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None
        self._interrupted = False
        self._previous_sigint = None
        self._sigint_installed = False
        self._listener_error: Optional[ListenerError] = None

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def listener_error(self) -> Optional[ListenerError]:
        return self._listener_error

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually bound by the listener (differs from PORT when PORT is 0)."""
        if self._server is None:
            return None
        for server in getattr(self._server, "servers", []):
            for sock in server.sockets:
                return sock.getsockname()[1]
        return None

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            self.app,
            host=self.settings.HOST,
            port=self.settings.PORT,
            log_config=None,
            log_level="warning",
            access_log=False,  # The request pipeline logs every request itself
        )
        # No graceful-shutdown timeout: in-flight handlers are never cancelled,
        # the deadline is enforced by the bounded join in shutdown().
        return uvicorn.Server(config)

    def _serve(self) -> None:
        try:
            self._server.run()
        except SystemExit as exc:
            # uvicorn exits this way when it cannot bind
            self._listener_error = ListenerError(f"listener exited with code {exc.code}")
            logger.error("| %s", self._listener_error)
        except Exception as exc:
            self._listener_error = ListenerError(str(exc))
            logger.error("| Listener failed: %s", exc, exc_info=True)

    def start(self) -> bool:
        """Start serving on a background thread; True once the socket is accepting."""
        # Ctrl+C during the startup wait must already mean graceful shutdown
        self._install_interrupt_handler()
        self._server = self._build_server()
        logger.info("| Listening at port :%d", self.settings.PORT)

        self._thread = threading.Thread(target=self._serve, name="http-listener", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + self.settings.STARTUP_TIMEOUT_SECONDS
        while not self._server.started:
            if not self._thread.is_alive():
                break
            if time.monotonic() > deadline:
                logger.error(
                    "| Listener did not start within %.1fs",
                    self.settings.STARTUP_TIMEOUT_SECONDS,
                )
                break
            time.sleep(POLL_INTERVAL_SECONDS)

        self._phase = Phase.LISTENING
        return self._server.started

    def _on_interrupt(self, signum, frame) -> None:
        self._interrupted = True

    def request_shutdown(self) -> None:
        """Same effect as delivering SIGINT; safe to call from any thread."""
        self._interrupted = True

    def _install_interrupt_handler(self) -> None:
        if self._sigint_installed:
            return
        if threading.current_thread() is not threading.main_thread():
            return
        self._previous_sigint = signal.signal(signal.SIGINT, self._on_interrupt)
        self._sigint_installed = True

    def _restore_interrupt_handler(self) -> None:
        if not self._sigint_installed:
            return
        previous = self._previous_sigint
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)
        self._previous_sigint = None
        self._sigint_installed = False

    def wait_for_interrupt(self) -> None:
        """Block until SIGINT arrives or request_shutdown() is called."""
        self._install_interrupt_handler()
        while not self._interrupted:
            time.sleep(POLL_INTERVAL_SECONDS)

    def shutdown(self) -> bool:
        """
        Stop accepting connections and wait for in-flight requests.

        Waits at most SHUTDOWN_TIMEOUT_SECONDS; whatever is still running
        after that is abandoned. Returns True if the listener drained in time.
        """
        self._phase = Phase.SHUTTING_DOWN
        timeout = self.settings.SHUTDOWN_TIMEOUT_SECONDS

        if self._server is not None:
            self._server.should_exit = True

        drained = True
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            drained = not self._thread.is_alive()
            if not drained:
                logger.warning(
                    "| Shutdown deadline of %.1fs passed, abandoning in-flight requests",
                    timeout,
                )

        logger.info("| Shutting down")
        self._phase = Phase.STOPPED
        self._restore_interrupt_handler()
        return drained

    def run(self) -> None:
        try:
            self.start()
            self.wait_for_interrupt()
            self.shutdown()
        finally:
            self._restore_interrupt_handler()
        self._exit_process(0)
