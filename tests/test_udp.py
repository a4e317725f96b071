import socket
import threading

import pytest

from ostep_demos.udp import (
    BUFFER_SIZE,
    client_main,
    fill_sock_addr,
    run_client,
    serve_once,
    udp_open,
    udp_read,
    udp_write,
)


@pytest.fixture
def server():
    sock = udp_open(0)
    sock.settimeout(5)
    yield sock
    sock.close()


def _port(sock):
    return sock.getsockname()[1]


def test_fill_sock_addr_keeps_numeric_address():
    assert fill_sock_addr("127.0.0.1", 10000) == ("127.0.0.1", 10000)


def test_fill_sock_addr_resolves_localhost_to_loopback():
    host, port = fill_sock_addr("localhost", 10000)
    assert host.startswith("127.")
    assert port == 10000


def test_fill_sock_addr_without_host_is_cleared():
    assert fill_sock_addr(None, 10000) == ("0.0.0.0", 0)


def test_open_on_busy_port_raises():
    with udp_open(0) as first:
        with pytest.raises(OSError):
            udp_open(_port(first))


def test_client_server_exchange(server, capsys):
    received = []
    thread = threading.Thread(target=lambda: received.append(serve_once(server)))
    thread.start()
    reply = run_client("127.0.0.1", _port(server), 0)
    thread.join(5)
    assert reply == "goodbye world"
    assert received == ["hello world"]
    out = capsys.readouterr().out
    assert f"server:: read message [size:{BUFFER_SIZE} contents:(hello world)]" in out
    assert f"client:: got reply [size:{BUFFER_SIZE} contents:(goodbye world)" in out
    assert "server:: reply" in out


def test_empty_datagram_gets_no_reply(server):
    with udp_open(0) as client:
        client.settimeout(0.3)
        udp_write(client, ("127.0.0.1", _port(server)), b"")
        assert serve_once(server) == ""
        with pytest.raises(socket.timeout):
            udp_read(client, BUFFER_SIZE)


def test_client_main_reports_exchange(server, capsys):
    thread = threading.Thread(target=serve_once, args=(server,))
    thread.start()
    code = client_main(["--host", "127.0.0.1", "--port", str(_port(server)),
                        "--client-port", "0"])
    thread.join(5)
    assert code == 0
    assert "client:: send message [hello world]" in capsys.readouterr().out