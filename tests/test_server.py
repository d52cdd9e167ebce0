import multiprocessing
import socket
import time

from restgate.server import serve
from tests.helpers import items_dispatcher


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(('127.0.0.1', 0))
        return sock.getsockname()[1]


def connect(port: int, deadline: float = 10.0) -> socket.socket:
    start = time.monotonic()
    while True:
        try:
            return socket.create_connection(('127.0.0.1', port), timeout=5)
        except OSError:
            if time.monotonic() - start > deadline:
                raise
            time.sleep(0.05)


def read_all(sock: socket.socket) -> bytes:
    data = bytearray()
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            return bytes(data)
        data.extend(chunk)


def test_serve_answers_and_stops_on_sigterm():
    port = free_port()
    process = multiprocessing.Process(
        target=serve, args=(items_dispatcher, '127.0.0.1', port),
        kwargs=dict(request_timeout=5), daemon=True)
    process.start()
    try:
        with connect(port) as sock:
            sock.sendall(b'POST /items HTTP/1.1\r\nHost: x\r\n'
                         b'Content-Length: 0\r\n\r\n')
            data = read_all(sock)
    finally:
        process.terminate()
        process.join(10)

    assert data.startswith(b'HTTP/1.1 201 Created\r\n')
    assert data.endswith(b'\r\n\r\n{"id":42}')
    assert process.exitcode == 0
