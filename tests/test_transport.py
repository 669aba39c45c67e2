import socket

import pytest

from ft8rbn.transport import DryRunSink, TransportError, UdpSink


class _ShortSocket:
    def __init__(self):
        self.closed = False

    def sendto(self, payload, address):
        return len(payload) - 1

    def close(self):
        self.closed = True


def test_udp_sink_delivers_datagram_on_loopback():
    rx = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    rx.bind(("127.0.0.1", 0))
    rx.settimeout(2.0)
    try:
        port = rx.getsockname()[1]
        with UdpSink("127.0.0.1", port) as sink:
            assert sink.send(b"\xad\xbc\xcb\xda") == 4
        data, _ = rx.recvfrom(2048)
        assert data == b"\xad\xbc\xcb\xda"
    finally:
        rx.close()


def test_short_write_is_fatal():
    fake = _ShortSocket()
    sink = UdpSink("127.0.0.1", 2237, sock=fake)
    with pytest.raises(TransportError):
        sink.send(b"abcd")
    sink.close()
    assert fake.closed


def test_send_after_close_raises():
    sink = UdpSink("127.0.0.1", 2237, sock=_ShortSocket())
    sink.close()
    sink.close()
    with pytest.raises(TransportError):
        sink.send(b"x")


def test_dry_run_sink_records_payloads():
    with DryRunSink() as sink:
        assert sink.send(b"abc") == 3
        sink.send(bytearray(b"de"))
    assert sink.sent == [b"abc", b"de"]


@pytest.mark.parametrize("host, port", [("127.0.0.1", 70000), ("127.0.0.1", -1), ("not-an-ip", 2237)])
def test_bad_destination_fails_at_setup(host, port):
    with pytest.raises(TransportError):
        UdpSink(host, port, sock=_ShortSocket())
