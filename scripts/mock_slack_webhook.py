#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

WEBHOOK_PATH = "/services/T000/B000/XXXX"


class MockSlackHandler(BaseHTTPRequestHandler):
    server_version = "MockSlack/1.0"
    fail_status: int | None = None
    received: list[str] = []

    def do_GET(self) -> None:  # noqa: N802 - stdlib handler signature
        if self.path == "/healthz":
            self._write(HTTPStatus.OK, "ok")
            return
        if self.path == "/messages":
            raw = json.dumps({"messages": self.received}).encode("utf-8")
            self._write_raw(HTTPStatus.OK, raw, "application/json")
            return
        self._write(HTTPStatus.NOT_FOUND, "not found")

    def do_POST(self) -> None:  # noqa: N802 - stdlib handler signature
        if self.path != WEBHOOK_PATH:
            self._write(HTTPStatus.NOT_FOUND, "no_service")
            return

        length = int(self.headers.get("Content-Length", "0"))
        try:
            payload = json.loads(self.rfile.read(length) or b"null")
        except ValueError:
            self._write(HTTPStatus.BAD_REQUEST, "invalid_payload")
            return
        if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
            self._write(HTTPStatus.BAD_REQUEST, "no_text")
            return

        if self.fail_status is not None:
            self._write(HTTPStatus(self.fail_status), "mock_failure")
            return

        self.received.append(payload["text"])
        print("mock-slack received:", payload["text"].replace("\n", " | "), flush=True)
        self._write(HTTPStatus.OK, "ok")

    def log_message(self, _: str, *args: object) -> None:
        # Keep logs terse for test runs.
        if args:
            print("mock-slack:", *args)

    def _write(self, status: HTTPStatus, text: str) -> None:
        self._write_raw(status, text.encode("utf-8"), "text/plain")

    def _write_raw(self, status: HTTPStatus, raw: bytes, content_type: str) -> None:
        self.send_response(status.value)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(raw)))
        self.end_headers()
        self.wfile.write(raw)


def main() -> None:
    parser = argparse.ArgumentParser(description="Mock Slack incoming webhook for local sourcing notifications.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=54330)
    parser.add_argument("--fail-status", type=int, default=None, help="Reject every delivery with this HTTP status.")
    args = parser.parse_args()

    MockSlackHandler.fail_status = args.fail_status
    server = ThreadingHTTPServer((args.host, args.port), MockSlackHandler)
    print(f"mock-slack listening on http://{args.host}:{args.port}{WEBHOOK_PATH}", flush=True)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
