from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, TextIO

from .codec import JsonRpcCodecError, decode_request, encode_error, encode_response
from .models import JsonRpcRequest, JsonRpcResponse


logger = logging.getLogger(__name__)

RequestHandler = Callable[[JsonRpcRequest], JsonRpcResponse]


@dataclass
class StdioTransport:
    """Line-framed JSON-RPC over a pair of text streams.

    Only response frames are written to `stdout`; anything diagnostic goes
    through logging, which is configured to stderr.
    """

    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)

    def serve_requests(self, handler: RequestHandler) -> None:
        """Serve until stdin reaches EOF. Notifications get no reply; blank lines are skipped."""
        for raw in self.stdin:
            frame = raw.strip()
            if frame:
                self._serve_one(frame, handler)
        logger.debug("stdin closed")

    def _serve_one(self, frame: str, handler: RequestHandler) -> None:
        try:
            req = decode_request(frame)
        except JsonRpcCodecError as e:
            logger.warning("rejected frame (%s): %s", e.code, e.message)
            self._send(encode_error(e.req_id, e.code, e.message, e.data))
            return

        resp = handler(req)
        if not req.is_notification:
            self._send(encode_response(resp))

    def _send(self, line: str) -> None:
        self.stdout.write(f"{line}\n")
        self.stdout.flush()
