import json
import threading
import urllib.error
import urllib.request

import pytest

from bondsnipe.pattern_api import (
    PatternCache,
    PatternFormatError,
    TokenFilter,
    handle_post_patterns,
    make_server,
    parse_buy_pattern,
    parse_mint_pattern,
)


def _raw(**overrides):
    raw = {
        "mint_pattern": "(1, 200000)",
        "buy_pattern": ["((1, 200000), 3)"],
        "tp_threshold": [150.0, 300.0],
        "net_profit": 1.5,
        "token_count": 10,
        "avg_profit": 0.15,
        "sell_amounts": [50.0, 50.0],
        "win_rate_low": False,
        "win_count": 6,
        "loss_count": 4,
        "win_rate": 60.0,
    }
    raw.update(overrides)
    return raw


def _payload(results):
    return {
        "results": results,
        "total_profit": 1.5,
        "total_token_count": 10,
        "total_win_count": 6,
        "total_loss_count": 4,
        "total_win_rate": 60.0,
        "lookback": 3600,
        "fetch_interval": 60,
        "timestamp": 1700000000,
    }


def test_parse_mint_pattern():
    assert parse_mint_pattern(" (1, 200000) ") == (1, 200000)


@pytest.mark.parametrize(
    "text",
    ["1, 200000", "(1, 2, 3)", "(4294967296, 1)", "(-1, 5)", "(a, 5)", "(1, )"],
)
def test_parse_mint_pattern_errors(text):
    with pytest.raises(PatternFormatError):
        parse_mint_pattern(text)


def test_parse_buy_pattern():
    assert parse_buy_pattern("((1, 200000), 3)") == ((1, 200000), 3)
    assert parse_buy_pattern("((7,8),,,9)") == ((7, 8), 9)


@pytest.mark.parametrize(
    "text",
    ["(1, 2), 3", "(1, 2, 3)", "((1,2,3)", "((1,2),256)", "()a(b)", "((1),2)"],
)
def test_parse_buy_pattern_errors(text):
    with pytest.raises(PatternFormatError):
        parse_buy_pattern(text)


def test_token_filter_from_raw():
    token_filter = TokenFilter.from_raw(_raw())
    assert token_filter.mint_pattern == (1, 200000)
    assert token_filter.buy_pattern == (((1, 200000), 3),)
    assert token_filter.tp_threshold == (150.0, 300.0)
    assert token_filter.sell_amounts == (50.0, 50.0)
    assert token_filter.win_count == 6
    assert token_filter.primary_tp_threshold() == 150.0


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"tp_threshold": []}, "tp_threshold must contain"),
        ({"sell_amounts": []}, "sell_amounts must contain"),
        ({"sell_amounts": [100.0]}, "same length"),
        ({"token_count": -1}, "token_count"),
        ({"mint_pattern": "nope"}, "mint_pattern"),
    ],
)
def test_token_filter_from_raw_errors(overrides, message):
    with pytest.raises(PatternFormatError, match=message):
        TokenFilter.from_raw(_raw(**overrides))


def test_token_filter_missing_field():
    raw = _raw()
    del raw["win_rate"]
    with pytest.raises(PatternFormatError, match="win_rate"):
        TokenFilter.from_raw(raw)


def test_pattern_cache_replace_and_get():
    cache = PatternCache()
    assert cache.get() == ()
    token_filter = TokenFilter.from_raw(_raw())
    cache.replace([token_filter])
    assert cache.get() == (token_filter,)


def test_handle_post_patterns_success(capsys):
    cache = PatternCache()
    status, body = handle_post_patterns(cache, _payload([_raw(), _raw(mint_pattern="(2, 5)")]))
    assert status == 200
    assert body == {"status": "ok", "patterns_saved": 2}
    assert [f.mint_pattern for f in cache.get()] == [(1, 200000), (2, 5)]
    assert "Received 2 pattern(s)" in capsys.readouterr().out


def test_handle_post_patterns_bad_filter_keeps_cache():
    cache = PatternCache()
    previous = TokenFilter.from_raw(_raw())
    cache.replace([previous])
    status, body = handle_post_patterns(cache, _payload([_raw(), _raw(tp_threshold=[])]))
    assert status == 400
    assert body["status"] == "error"
    assert body["message"].startswith("filter[1]:")
    assert cache.get() == (previous,)


def test_handle_post_patterns_type_error_is_unprocessable():
    cache = PatternCache()
    status, body = handle_post_patterns(cache, _payload([_raw(win_rate_low="yes")]))
    assert status == 422
    assert "win_rate_low" in body["message"]
    assert cache.get() == ()
    status, _ = handle_post_patterns(cache, {"results": []})
    assert status == 422


@pytest.fixture
def server_url():
    cache = PatternCache()
    server = make_server(0, cache)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}", cache
    finally:
        server.shutdown()
        server.server_close()


def test_server_health(server_url):
    base, _ = server_url
    with urllib.request.urlopen(f"{base}/health", timeout=5) as resp:
        assert resp.status == 200
        assert resp.read() == b"ok"


def test_server_post_patterns(server_url):
    base, cache = server_url
    request = urllib.request.Request(
        f"{base}/patterns",
        data=json.dumps(_payload([_raw()])).encode(),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with urllib.request.urlopen(request, timeout=5) as resp:
        assert resp.status == 200
        assert json.loads(resp.read()) == {"status": "ok", "patterns_saved": 1}
    assert cache.get()[0].mint_pattern == (1, 200000)


def test_server_rejects_invalid_json(server_url):
    base, cache = server_url
    request = urllib.request.Request(
        f"{base}/patterns",
        data=b"{not json",
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with pytest.raises(urllib.error.HTTPError) as excinfo:
        urllib.request.urlopen(request, timeout=5)
    assert excinfo.value.code == 400
    assert cache.get() == ()


def test_server_unknown_path(server_url):
    base, _ = server_url
    with pytest.raises(urllib.error.HTTPError) as excinfo:
        urllib.request.urlopen(f"{base}/missing", timeout=5)
    assert excinfo.value.code == 404