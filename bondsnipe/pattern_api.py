"""HTTP endpoint that receives mint/buy pattern statistics and caches them in memory."""

from __future__ import annotations

import json
import logging
import re
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable, Mapping, Sequence
from urllib.parse import urlsplit

U8_MAX = 2**8 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

_LOGGER = logging.getLogger(__name__)

MintPattern = tuple[int, int]
BuyPattern = tuple[tuple[int, int], int]


class PatternFormatError(ValueError):
    """Raised when a pattern payload or one of its fields is malformed."""


def _parse_uint(text: str, maximum: int, what: str) -> int:
    if not text:
        raise PatternFormatError(f"{what}: cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise PatternFormatError(f"{what}: invalid digit found in {text!r}")
    value = int(text)
    if value > maximum:
        raise PatternFormatError(f"{what}: number too large to fit in target type")
    return value


def _strip_parens(text: str, what: str) -> str:
    trimmed = text.strip()
    if not (trimmed.startswith("(") and trimmed.endswith(")")) or len(trimmed) < 2:
        raise PatternFormatError(f"invalid {what} format: {text}")
    return trimmed[1:-1]


def parse_mint_pattern(text: str) -> MintPattern:
    """Parse ``"(cu_limit, cu_price)"``."""
    inner = _strip_parens(text, "mint_pattern")
    parts = inner.split(",")
    if len(parts) != 2:
        raise PatternFormatError(f"mint_pattern expects 2 values, got {len(parts)}: {text}")
    return (
        _parse_uint(parts[0].strip(), U32_MAX, "mint_pattern.0"),
        _parse_uint(parts[1].strip(), U64_MAX, "mint_pattern.1"),
    )


def parse_buy_pattern(text: str) -> BuyPattern:
    """Parse ``"((cu_limit, cu_price), count)"``."""
    inner = _strip_parens(text, "buy_pattern")
    open_at = inner.find("(")
    if open_at < 0:
        raise PatternFormatError(f"missing inner tuple in buy_pattern: {text}")
    close_at = inner.find(")")
    if close_at < 0:
        raise PatternFormatError(f"missing closing paren in buy_pattern: {text}")
    if close_at < open_at:
        raise PatternFormatError(f"closing paren before inner tuple in buy_pattern: {text}")

    parts = inner[open_at + 1:close_at].split(",")
    if len(parts) != 2:
        raise PatternFormatError(f"buy_pattern inner tuple expects 2 values: {text}")
    cu_limit = _parse_uint(parts[0].strip(), U32_MAX, "buy_pattern.0.0")
    cu_price = _parse_uint(parts[1].strip(), U64_MAX, "buy_pattern.0.1")

    tail = inner[close_at + 1:].strip().lstrip(",").strip()
    count = _parse_uint(tail, U8_MAX, "buy_pattern.1")
    return (cu_limit, cu_price), count


# ── Field type checks for incoming JSON ──


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _list_of(check: Callable[[Any], bool]) -> Callable[[Any], bool]:
    return lambda value: isinstance(value, list) and all(check(item) for item in value)


_FILTER_SPEC: dict[str, Callable[[Any], bool]] = {
    "mint_pattern": _is_str,
    "buy_pattern": _list_of(_is_str),
    "tp_threshold": _list_of(_is_number),
    "net_profit": _is_number,
    "token_count": _is_uint,
    "avg_profit": _is_number,
    "sell_amounts": _list_of(_is_number),
    "win_rate_low": _is_bool,
    "win_count": _is_uint,
    "loss_count": _is_uint,
    "win_rate": _is_number,
}

_PAYLOAD_SPEC: dict[str, Callable[[Any], bool]] = {
    "results": lambda value: isinstance(value, list),
    "total_profit": _is_number,
    "total_token_count": _is_uint,
    "total_win_count": _is_uint,
    "total_loss_count": _is_uint,
    "total_win_rate": _is_number,
    "lookback": _is_uint,
    "fetch_interval": _is_uint,
    "timestamp": _is_uint,
}


def _check_fields(obj: Any, spec: Mapping[str, Callable[[Any], bool]], where: str = "") -> None:
    if not isinstance(obj, Mapping):
        raise PatternFormatError(f"{where}expected a JSON object")
    for name, check in spec.items():
        if name not in obj:
            raise PatternFormatError(f"{where}missing field `{name}`")
        if not check(obj[name]):
            raise PatternFormatError(f"{where}invalid type for field `{name}`")


@dataclass(frozen=True)
class TokenFilter:
    """A statistically selected mint pattern with its take-profit plan."""

    mint_pattern: MintPattern
    buy_pattern: tuple[BuyPattern, ...]
    tp_threshold: tuple[float, ...]
    net_profit: float
    token_count: int
    avg_profit: float
    sell_amounts: tuple[float, ...]
    win_rate_low: bool
    win_count: int
    loss_count: int
    win_rate: float

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "TokenFilter":
        """Validate and parse one entry of the posted ``results`` list."""
        _check_fields(raw, _FILTER_SPEC)
        tp_threshold = raw["tp_threshold"]
        sell_amounts = raw["sell_amounts"]
        if not tp_threshold:
            raise PatternFormatError("tp_threshold must contain at least one value")
        if not sell_amounts:
            raise PatternFormatError("sell_amounts must contain at least one value")
        if len(tp_threshold) != len(sell_amounts):
            raise PatternFormatError(
                "tp_threshold and sell_amounts must have same length "
                f"(got {len(tp_threshold)} vs {len(sell_amounts)})"
            )
        return cls(
            mint_pattern=parse_mint_pattern(raw["mint_pattern"]),
            buy_pattern=tuple(parse_buy_pattern(item) for item in raw["buy_pattern"]),
            tp_threshold=tuple(float(v) for v in tp_threshold),
            net_profit=float(raw["net_profit"]),
            token_count=raw["token_count"],
            avg_profit=float(raw["avg_profit"]),
            sell_amounts=tuple(float(v) for v in sell_amounts),
            win_rate_low=raw["win_rate_low"],
            win_count=raw["win_count"],
            loss_count=raw["loss_count"],
            win_rate=float(raw["win_rate"]),
        )

    def primary_tp_threshold(self) -> float:
        return self.tp_threshold[0]


class PatternCache:
    """Thread-safe holder of the latest filter list; readers get an immutable snapshot."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._filters: tuple[TokenFilter, ...] = ()

    def get(self) -> tuple[TokenFilter, ...]:
        with self._lock:
            return self._filters

    def replace(self, filters: Sequence[TokenFilter]) -> None:
        snapshot = tuple(filters)
        with self._lock:
            self._filters = snapshot


PATTERN_CACHE = PatternCache()


def handle_post_patterns(cache: PatternCache, payload: Any) -> tuple[int, dict[str, Any]]:
    """Validate a posted payload and store its filters; returns (HTTP status, JSON body)."""
    try:
        _check_fields(payload, _PAYLOAD_SPEC)
        for index, raw in enumerate(payload["results"]):
            _check_fields(raw, _FILTER_SPEC, f"results[{index}]: ")
    except PatternFormatError as exc:
        return 422, {"status": "error", "message": str(exc)}

    parsed: list[TokenFilter] = []
    for index, raw in enumerate(payload["results"]):
        try:
            parsed.append(TokenFilter.from_raw(raw))
        except PatternFormatError as exc:
            return 400, {"status": "error", "message": f"filter[{index}]: {exc}"}

    cache.replace(parsed)
    count = len(parsed)
    print(
        f"📦 Received {count} pattern(s) | profit: {payload['total_profit']:.2f} | "
        f"tokens: {payload['total_token_count']} | "
        f"W/L: {payload['total_win_count']}/{payload['total_loss_count']} | "
        f"win_rate: {payload['total_win_rate']:.1f}% | lookback: {payload['lookback']}s | "
        f"interval: {payload['fetch_interval']}s | ts: {payload['timestamp']}"
    )
    return 200, {"status": "ok", "patterns_saved": count}


def make_server(port: int, cache: PatternCache | None = None) -> ThreadingHTTPServer:
    """Build (but do not start) the pattern API server on all interfaces."""
    store = PATTERN_CACHE if cache is None else cache

    class _Handler(BaseHTTPRequestHandler):
        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            _LOGGER.debug("%s - %s", self.address_string(), format % args)

        def _send(self, status: int, body: bytes, content_type: str) -> None:
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def _text(self, status: int, text: str) -> None:
            self._send(status, text.encode("utf-8"), "text/plain; charset=utf-8")

        def do_GET(self) -> None:
            path = urlsplit(self.path).path
            if path == "/health":
                self._text(200, "ok")
            elif path == "/patterns":
                self._text(405, "Method Not Allowed")
            else:
                self._text(404, "Not Found")

        def do_POST(self) -> None:
            path = urlsplit(self.path).path
            if path == "/health":
                self._text(405, "Method Not Allowed")
                return
            if path != "/patterns":
                self._text(404, "Not Found")
                return
            content_type = self.headers.get("Content-Type", "")
            if content_type.split(";")[0].strip().lower() != "application/json":
                self._text(415, "Expected request with `Content-Type: application/json`")
                return
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length)
            try:
                payload = json.loads(body)
            except ValueError as exc:
                self._text(400, f"Failed to parse the request body as JSON: {exc}")
                return
            status, reply = handle_post_patterns(store, payload)
            self._send(status, json.dumps(reply).encode("utf-8"), "application/json")

    return ThreadingHTTPServer(("0.0.0.0", port), _Handler)


def run_pattern_server(port: int) -> None:
    """Serve the pattern API until interrupted."""
    server = make_server(port)
    host, bound_port = server.server_address[:2]
    print(f"🚀 Pattern API server listening on {host}:{bound_port}")
    with server:
        server.serve_forever()