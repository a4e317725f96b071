"""Datagram helpers and a tiny request/reply client and server built on them."""

from __future__ import annotations

import argparse
import socket

BUFFER_SIZE = 1000
SERVER_PORT = 10000
CLIENT_PORT = 20000

Address = tuple[str, int]


def udp_open(port: int) -> socket.socket:
    """Create a datagram socket bound to ``port`` on every local interface."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", port))
    except OSError:
        sock.close()
        raise
    return sock


def fill_sock_addr(hostname: str | None, port: int) -> Address:
    """Resolve ``hostname`` to an IPv4 address; no host gives the cleared address."""
    if hostname is None:
        return ("0.0.0.0", 0)
    return (socket.gethostbyname(hostname), port)


def udp_write(sock: socket.socket, addr: Address, data: bytes) -> int:
    """Send one datagram to ``addr``; return the number of bytes sent."""
    return sock.sendto(data, addr)


def udp_read(sock: socket.socket, size: int = BUFFER_SIZE) -> tuple[bytes, Address]:
    """Receive one datagram of at most ``size`` bytes with its sender."""
    return sock.recvfrom(size)


def _pack(text: str) -> bytes:
    encoded = text.encode()
    if len(encoded) >= BUFFER_SIZE:
        raise ValueError(f"message longer than {BUFFER_SIZE - 1} bytes")
    return encoded.ljust(BUFFER_SIZE, b"\0")


def _unpack(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode(errors="replace")


def run_client(
    server_host: str = "localhost",
    server_port: int = SERVER_PORT,
    client_port: int = CLIENT_PORT,
) -> str:
    """Send a greeting to the server and return its reply."""
    with udp_open(client_port) as sock:
        addr = fill_sock_addr(server_host, server_port)
        message = "hello world"
        print(f"client:: send message [{message}]", flush=True)
        try:
            udp_write(sock, addr, _pack(message))
        except OSError:
            print("client:: failed to send", flush=True)
            raise
        print("client:: wait for reply...", flush=True)
        data, _ = udp_read(sock, BUFFER_SIZE)
        reply = _unpack(data)
        print(f"client:: got reply [size:{len(data)} contents:({reply})", flush=True)
        return reply


def serve_once(sock: socket.socket) -> str:
    """Handle one request: read it, answer non-empty ones, return its text."""
    print("server:: waiting...", flush=True)
    data, addr = udp_read(sock, BUFFER_SIZE)
    message = _unpack(data)
    print(f"server:: read message [size:{len(data)} contents:({message})]", flush=True)
    if data:
        udp_write(sock, addr, _pack("goodbye world"))
        print("server:: reply", flush=True)
    return message


def client_main(argv: list[str] | None = None) -> int:
    """Run the client once against a server."""
    parser = argparse.ArgumentParser(prog="client", description="UDP greeting client")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--client-port", type=int, default=CLIENT_PORT)
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port, args.client_port)
    except OSError as exc:
        print(f"client: {exc}", flush=True)
        raise SystemExit(1)
    return 0


def server_main(argv: list[str] | None = None) -> int:
    """Answer greetings forever."""
    parser = argparse.ArgumentParser(prog="server", description="UDP greeting server")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    args = parser.parse_args(argv)
    with udp_open(args.port) as sock:
        while True:
            serve_once(sock)