import io
import json
from pathlib import Path

import pytest

from envscout.jsonrpc import (
    HandlersKeyedByMethodName,
    get_content_length,
    send_error,
    send_message,
    send_reply,
    start_server,
)


def parse_frames(text):
    frames = []
    rest = text.encode("utf-8")
    while rest:
        head, _, rest = rest.partition(b"\r\n\r\n")
        headers = dict(
            line.split(": ", 1) for line in head.decode("utf-8").split("\r\n")
        )
        length = int(headers["Content-Length"])
        frames.append((headers, json.loads(rest[:length].decode("utf-8"))))
        rest = rest[length:]
    return frames


def frame(payload):
    body = json.dumps(payload).encode("utf-8")
    return b"Content-Length: %d\r\n\r\n" % len(body) + body


def test_send_message_framing():
    out = io.StringIO()
    send_message("environment", {"executable": "/usr/bin/python3"}, out)
    [(headers, body)] = parse_frames(out.getvalue())
    assert headers["Content-Type"] == "application/vscode-jsonrpc; charset=utf-8"
    assert body == {
        "jsonrpc": "2.0",
        "method": "environment",
        "params": {"executable": "/usr/bin/python3"},
    }


def test_send_message_length_counts_bytes():
    out = io.StringIO()
    send_message("log", {"message": "héllo ✓"}, out)
    text = out.getvalue()
    header, _, body = text.partition("\r\n\r\n")
    length = get_content_length(header.split("\r\n")[0])
    assert length == len(body.encode("utf-8"))
    assert length > len(body)


def test_send_message_without_params_and_with_paths():
    out = io.StringIO()
    send_message("done", None, out)
    send_message("path", {"p": Path("/opt/bin")}, out)
    frames = parse_frames(out.getvalue())
    assert frames[0][1]["params"] is None
    assert frames[1][1]["params"] == {"p": str(Path("/opt/bin"))}


def test_send_reply_and_error():
    out = io.StringIO()
    send_reply(7, {"ok": True}, out)
    send_error(None, -2, "nope", out)
    frames = parse_frames(out.getvalue())
    assert frames[0][1] == {"jsonrpc": "2.0", "result": {"ok": True}, "id": 7}
    assert frames[1][1] == {
        "jsonrpc": "2.0",
        "error": {"code": -2, "message": "nope"},
        "id": None,
    }


def test_get_content_length_parses_header():
    assert get_content_length("Content-Length: 42\r\n") == 42


@pytest.mark.parametrize("line", ["Content-Length: abc", "Content-Length: -1", "Content-Length:  5"])
def test_get_content_length_bad_value(line):
    with pytest.raises(ValueError):
        get_content_length(line)


def test_get_content_length_missing_header():
    with pytest.raises(ValueError, match="not found"):
        get_content_length("Content-Type: text/plain")


def make_handlers(out):
    calls = []
    handlers = HandlersKeyedByMethodName("ctx", out)
    handlers.add_request_handler("refresh", lambda c, i, p: calls.append(("req", c, i, p)))
    handlers.add_notification_handler("exit", lambda c, p: calls.append(("note", c, p)))
    return handlers, calls


def test_handle_request_dispatches():
    out = io.StringIO()
    handlers, calls = make_handlers(out)
    handlers.handle_request({"jsonrpc": "2.0", "id": 3, "method": "refresh", "params": [1]})
    handlers.handle_request({"jsonrpc": "2.0", "method": "exit"})
    assert calls == [("req", "ctx", 3, [1]), ("note", "ctx", None)]
    assert out.getvalue() == ""


def test_unknown_request_gets_error():
    out = io.StringIO()
    handlers, calls = make_handlers(out)
    handlers.handle_request({"id": 5, "method": "missing"})
    [(_, body)] = parse_frames(out.getvalue())
    assert calls == []
    assert body["id"] == 5
    assert body["error"] == {"code": -1, "message": "Failed to find handler for request missing"}


def test_unknown_notification_gets_error():
    out = io.StringIO()
    handlers, _ = make_handlers(out)
    handlers.handle_request({"method": "missing"})
    [(_, body)] = parse_frames(out.getvalue())
    assert body["error"]["code"] == -2
    assert body["id"] is None


def test_message_without_method_gets_error():
    out = io.StringIO()
    handlers, _ = make_handlers(out)
    handlers.handle_request({"id": 1})
    [(_, body)] = parse_frames(out.getvalue())
    assert body["error"]["code"] == -3


def test_start_server_dispatches_until_eof():
    out = io.StringIO()
    handlers, calls = make_handlers(out)
    stream = io.BytesIO(
        frame({"jsonrpc": "2.0", "id": 1, "method": "refresh", "params": {"a": 1}})
        + b"Content-Length: 3\r\n\r\n{x}"
        + frame({"jsonrpc": "2.0", "method": "exit", "params": None})
    )
    start_server(handlers, stream)
    assert calls == [("req", "ctx", 1, {"a": 1}), ("note", "ctx", None)]


def test_start_server_skips_bad_header():
    out = io.StringIO()
    handlers, calls = make_handlers(out)
    stream = io.BytesIO(b"garbage\r\n" + frame({"id": 2, "method": "refresh"}))
    start_server(handlers, stream)
    assert calls == [("req", "ctx", 2, None)]