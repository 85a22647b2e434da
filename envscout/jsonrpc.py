"""JSON-RPC messages framed with Content-Length headers, over stdio."""

from __future__ import annotations

import json
import logging
import re
import sys
from os import PathLike, fspath
from typing import Any, BinaryIO, Callable, Generic, TextIO, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")

_CONTENT_LENGTH = "Content-Length: "
_CONTENT_TYPE = "application/vscode-jsonrpc; charset=utf-8"
_LENGTH_DIGITS = re.compile(r"\+?[0-9]+")

RequestHandler = Callable[[Any, int, Any], None]
NotificationHandler = Callable[[Any, Any], None]


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, PathLike):
        return fspath(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _write(payload: dict[str, Any], stream: TextIO | None, sort_keys: bool) -> None:
    message = json.dumps(
        payload,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_encode,
        sort_keys=sort_keys,
    )
    out = sys.stdout if stream is None else stream
    out.write(
        f"Content-Length: {len(message.encode('utf-8'))}\r\n"
        f"Content-Type: {_CONTENT_TYPE}\r\n\r\n{message}"
    )
    out.flush()


def send_message(method: str, params: Any = None, stream: TextIO | None = None) -> None:
    """Write a notification for ``method`` with its params."""
    _write({"jsonrpc": "2.0", "method": method, "params": params}, stream, sort_keys=False)


def send_reply(id: int, payload: Any = None, stream: TextIO | None = None) -> None:
    """Write the result of the request ``id``."""
    _write({"jsonrpc": "2.0", "result": payload, "id": id}, stream, sort_keys=True)


def send_error(
    id: int | None, code: int, message: str, stream: TextIO | None = None
) -> None:
    """Write an error response; ``id`` is None for notifications."""
    _write(
        {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": id},
        stream,
        sort_keys=True,
    )


def _request_id(message: dict[str, Any]) -> int | None:
    value = message.get("id")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value & 0xFFFFFFFF


class HandlersKeyedByMethodName(Generic[C]):
    """Dispatches incoming messages to handlers registered by method name."""

    def __init__(self, context: C, stream: TextIO | None = None) -> None:
        self.context = context
        self._stream = stream
        self._requests: dict[str, RequestHandler] = {}
        self._notifications: dict[str, NotificationHandler] = {}

    def add_request_handler(self, method: str, handler: RequestHandler) -> None:
        """Register ``handler(context, id, params)`` for requests to ``method``."""
        self._requests[method] = handler

    def add_notification_handler(self, method: str, handler: NotificationHandler) -> None:
        """Register ``handler(context, params)`` for notifications of ``method``."""
        self._notifications[method] = handler

    def handle_request(self, message: Any) -> None:
        """Dispatch one decoded message; unknown methods get an error reply."""
        method = message.get("method") if isinstance(message, dict) else None
        if not isinstance(method, str):
            logger.error("Failed to get method from message: %s", message)
            send_error(
                None,
                -3,
                "Failed to extract method from JSONRPC payload "
                + json.dumps(message, ensure_ascii=False, default=str),
                self._stream,
            )
            return

        params = message.get("params")
        request_id = _request_id(message)
        if request_id is not None:
            handler = self._requests.get(method)
            if handler is None:
                logger.error("Failed to find handler for method: %s", method)
                send_error(
                    request_id,
                    -1,
                    f"Failed to find handler for request {method}",
                    self._stream,
                )
                return
            handler(self.context, request_id, params)
        else:
            notify = self._notifications.get(method)
            if notify is None:
                logger.error("Failed to find handler for method: %s", method)
                send_error(
                    None,
                    -2,
                    f"Failed to find handler for notification {method}",
                    self._stream,
                )
                return
            notify(self.context, params)


def get_content_length(line: str) -> int:
    """Return the length given by a ``Content-Length`` header line.

    Raises ValueError if the header is missing or its value is not a number.
    """
    line = line.strip()
    index = line.find(_CONTENT_LENGTH)
    if index < 0:
        raise ValueError(f"String 'Content-Length' not found in input => {line}")
    rest = line[index + len(_CONTENT_LENGTH):]
    if not _LENGTH_DIGITS.fullmatch(rest):
        raise ValueError(f"Failed to parse content length from {rest} for {line}")
    return int(rest)


def start_server(
    handlers: HandlersKeyedByMethodName[Any], stdin: BinaryIO | None = None
) -> None:
    """Read framed messages from ``stdin`` and dispatch them until the
    input is exhausted."""
    source = sys.stdin.buffer if stdin is None else stdin
    while True:
        try:
            raw = source.readline()
        except OSError as err:
            logger.error("Error in reading a line from stdin: %s", err)
            continue
        if not raw:
            return
        header = raw.decode("utf-8", errors="replace")
        try:
            length = get_content_length(header)
        except ValueError as err:
            logger.error("Failed to get content length from %s, %s", header, err)
            continue
        source.readline()
        body = source.read(length)
        if body is None or len(body) < length:
            logger.error("Failed to read exactly %d bytes", length)
            continue
        text = body.decode("utf-8", errors="replace")
        try:
            request = json.loads(text)
        except json.JSONDecodeError as err:
            logger.error("Failed to parse LINE: %s, %s", text, err)
            continue
        handlers.handle_request(request)