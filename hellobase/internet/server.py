"""A TCP server socket bound to a port, listening for new incoming connections."""

from __future__ import annotations

import errno
import logging
import socket
from typing import Optional, Tuple, Union

from pydantic import ValidationError

from .. import config
from ..errors import IOFailureError
from ..logging import create_logger
from ..state import Close
from .port import Port

logger = logging.getLogger(__name__)


def _listening_socket(host: str, number: int) -> socket.socket:
    """Bind and listen on ``number``, taking IPv4 and IPv6 together when ``host`` is all interfaces."""
    settings = config.settings
    dual = host == "" and socket.has_dualstack_ipv6()
    channel = socket.socket(socket.AF_INET6 if dual else socket.AF_INET, socket.SOCK_STREAM)
    try:
        if settings.reuse_address:
            channel.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if dual:
            channel.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
            channel.bind(("::", number))
        else:
            channel.bind((host, number))
        channel.listen(settings.listen_backlog)
    except OSError:
        channel.close()
        raise
    return channel


class Server(Close):
    """Owner of one listening socket bound to ``port`` on all local interfaces.

    Args:
        port: Port to bind, as a ``Port`` or an int. ``0`` binds a free port
            the OS picks; read it back from ``address``.

    Raises:
        IOFailureError: If the port is invalid, already taken, or can't be
            bound, or if the event log can't be opened.

    The socket is released by ``close()``, which is safe to call any number of
    times from any thread and never raises. Events go to a structured log
    named after the bound port, like ``server_port-6346.jsonl``.
    """

    def __init__(self, port: Union[Port, int]) -> None:
        super().__init__()
        try:
            self.port = Port.of(port)
        except ValidationError as exc:
            raise IOFailureError(errno.EINVAL, f"invalid port: {port!r}") from exc

        try:
            channel = _listening_socket(config.settings.listen_host, self.port.number)
        except OSError as exc:
            logger.debug("bind failed for port %s: %s", self.port, exc)
            raise IOFailureError(
                exc.errno, f"cannot bind port {self.port}: {exc.strerror or exc}"
            ) from exc
        self.channel: socket.socket = channel

        bound = self.address[1]
        try:
            self.logger = create_logger(component="server", session_id=f"port-{bound}")
        except OSError as exc:
            channel.close()
            raise IOFailureError(
                exc.errno, f"cannot open server log: {exc.strerror or exc}"
            ) from exc
        self.logger.info("listening", port=self.port.number, bound=bound)

    @property
    def address(self) -> Tuple[str, int]:
        """The (host, port) the OS bound, which differs from ``port`` when it was 0."""
        host, bound = self.channel.getsockname()[:2]
        return host, bound

    def close(self) -> None:
        """Stop listening on port."""
        if self.already():
            return
        try:
            self.channel.close()
        except OSError as exc:
            self.logger.warning("close failed", port=self.port.number, error=str(exc))
        else:
            self.logger.info("closed", port=self.port.number)
        self.logger.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "listening"
        return f"Server(port={self.port.number}, {state})"


__all__ = ["Server"]
