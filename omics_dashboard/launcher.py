"""Start the omics dashboard from a notebook.

    >>> from omics_dashboard import launch_gui
    >>> server = launch_gui(stage_delay=0.2)
    >>> server.stop()

The server runs on a background thread so the notebook stays usable. Inside
JupyterHub the single-user proxy path is printed next to the localhost URL.
"""

import logging
import os
import socket
import time
from typing import Callable

import panel as pn
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PORT_RANGE = (5006, 5100)
STARTUP_WAIT_SECONDS = 1.0
BANNER_WIDTH = 62


def _port_is_free(port: int, host: str = "localhost") -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def _find_available_port(start: int = PORT_RANGE[0], end: int = PORT_RANGE[1]) -> int:
    """First port in ``[start, end)`` that can be bound on localhost."""
    port = next((p for p in range(start, end) if _port_is_free(p)), None)
    if port is None:
        raise RuntimeError(f"Ports {start}-{end - 1} are all in use")
    return port


def _build_proxy_url(port: int) -> str | None:
    """JupyterHub proxy path for ``port``, or None outside JupyterHub.

    ``JUPYTERHUB_SERVICE_PREFIX`` (e.g. ``/user/alice/``) takes precedence.
    Without it the path is derived from ``JUPYTERHUB_USER``.
    """
    prefix = os.environ.get("JUPYTERHUB_SERVICE_PREFIX")
    if not prefix:
        user = os.environ.get("JUPYTERHUB_USER")
        if not user:
            return None
        prefix = f"/user/{user}/"
    if not prefix.endswith("/"):
        prefix += "/"
    return f"{prefix}proxy/{port}/"


class GUIServer:
    """A dashboard server running on a background thread.

    ``app_factory`` is called once per browser session and must return a
    Panel viewable.
    """

    def __init__(self, app_factory: Callable, port: int):
        self.port = port
        self.direct_url = f"http://localhost:{port}"
        self.proxy_url = _build_proxy_url(port)
        self._app_factory = app_factory
        self._thread = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None

    def start(self) -> "GUIServer":
        """Serve the app and return self once the server had time to bind."""
        if self.is_running:
            logger.warning(f"Server on port {self.port} is already running.")
            return self

        # threaded=True hands back a StoppableThread
        self._thread = pn.serve(
            {"/": self._app_factory},
            port=self.port,
            show=False,
            websocket_origin="*",
            threaded=True,
        )
        time.sleep(STARTUP_WAIT_SECONDS)
        logger.info(f"Serving omics dashboard at {self.direct_url}")
        return self

    def stop(self) -> None:
        if not self.is_running:
            logger.info("Server is not running.")
            return
        thread, self._thread = self._thread, None
        thread.stop()
        logger.info(f"Server on port {self.port} stopped.")

    def __repr__(self) -> str:
        return f"GUIServer(port={self.port}, status={'running' if self.is_running else 'stopped'})"


def launch_banner(server: GUIServer) -> str:
    """Text printed after a notebook launch."""
    rule = "=" * BANNER_WIDTH
    body = [f"  Omics dashboard on port {server.port}", ""]
    if server.proxy_url:
        body.append(f"  JupyterHub URL: {server.proxy_url}")
    body += [f"  Direct URL:     {server.direct_url}", "", "  Stop with server.stop()"]
    return "\n".join([rule, *body, rule])


def launch_gui(port: int | None = None, stage_delay: float | None = None) -> GUIServer:
    """Start the dashboard on a background thread and print where to find it.

    Parameters
    ----------
    port : int, optional
        Port to bind. The first free port in ``PORT_RANGE`` when omitted.
    stage_delay : float, optional
        Seconds between simulated pipeline stages (app default if omitted)

    Returns
    -------
    GUIServer
        The running server; call ``stop()`` to shut it down
    """
    # Deferred so importing the package does not build the app module
    from .app import create_app

    # GEMINI_API_KEY may live in a local .env
    load_dotenv()

    app_kwargs = {} if stage_delay is None else {"stage_delay": stage_delay}

    def app_factory():
        return create_app(**app_kwargs).view()

    server = GUIServer(app_factory, port if port is not None else _find_available_port())
    server.start()
    print(launch_banner(server))
    return server
