from __future__ import annotations

import logging
import socket
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class TransportError(OSError):
    """Socket setup failed or a datagram was not sent in full."""


class UdpSink:
    """IPv4 UDP socket with broadcast enabled, bound to one destination."""

    def __init__(self, host: str, port: int, sock: Optional[socket.socket] = None):
        port = int(port)
        if not 0 <= port <= 0xFFFF:
            raise TransportError(f"Invalid port {port}: must be 0-65535")
        try:
            socket.inet_aton(host)
        except OSError as exc:
            raise TransportError(f"Invalid broadcast address {host!r}") from exc
        self.address: Tuple[str, int] = (host, port)
        if sock is None:
            try:
                sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
            except OSError as exc:
                raise TransportError(f"Cannot open socket: {exc}") from exc
            try:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            except OSError as exc:
                sock.close()
                raise TransportError(f"Enabling broadcast failed: {exc}") from exc
        self._sock: Optional[socket.socket] = sock

    def send(self, payload: bytes) -> int:
        if self._sock is None:
            raise TransportError("sink is closed")
        try:
            sent = self._sock.sendto(payload, self.address)
        except OSError as exc:
            raise TransportError(f"sendto {self.address[0]}:{self.address[1]} failed: {exc}") from exc
        if sent != len(payload):
            raise TransportError(
                f"sendto() sent {sent} bytes, expected {len(payload)}"
            )
        return sent

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "UdpSink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class DryRunSink:
    """Keeps payloads in memory instead of sending them."""

    def __init__(self):
        self.sent: List[bytes] = []

    def send(self, payload: bytes) -> int:
        self.sent.append(bytes(payload))
        logger.info("dry-run %3d bytes: %s", len(payload), bytes(payload).hex(" "))
        return len(payload)

    def close(self) -> None:
        pass

    def __enter__(self) -> "DryRunSink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
