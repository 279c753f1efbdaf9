import itertools
import json

import pytest
import requests

from urlsentry.app import threat_intel
from urlsentry.app.threat_intel import (
    LocalBlacklist,
    MembershipSource,
    RemoteBlacklist,
    blacklist_hits,
    check_local,
    check_remote,
    fetch_remote,
)

FEED_URL = "https://feed.test/all.json"


def make_response(body, status=200):
    resp = requests.Response()
    resp.status_code = status
    resp.url = FEED_URL
    resp._content = body if isinstance(body, bytes) else json.dumps(body).encode()
    resp._content_consumed = True
    return resp


@pytest.fixture
def serve_feed(monkeypatch):
    calls = []

    def _serve(outcome):
        def fake_get(url, timeout, stream):
            calls.append((url, timeout, stream))
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        monkeypatch.setattr(threat_intel.requests, "get", fake_get)
        return calls

    return _serve


def test_check_local_exact_match(tmp_path):
    path = tmp_path / "caught.json"
    path.write_text(json.dumps({"flagged_sites": ["https://evil.test/"]}))
    assert check_local("https://evil.test/", str(path))
    assert not check_local("https://evil.test/x", str(path))


def test_local_reads_fresh_each_time(tmp_path):
    path = tmp_path / "caught.json"
    path.write_text(json.dumps({"flagged_sites": []}))
    source = LocalBlacklist(str(path))
    assert not source.contains("https://evil.test/")
    path.write_text(json.dumps({"flagged_sites": ["https://evil.test/"]}))
    assert source.contains("https://evil.test/")


@pytest.mark.parametrize("content", [
    "not json",
    json.dumps(["a"]),
    json.dumps({"other": []}),
    "[" * 200000,
])
def test_local_fails_open_on_bad_document(tmp_path, caplog, content):
    path = tmp_path / "caught.json"
    path.write_text(content)
    assert not LocalBlacklist(str(path)).contains("https://evil.test/")
    assert "Local blacklist unavailable" in caplog.text


def test_local_fails_open_on_missing_file(tmp_path):
    assert not check_local("https://evil.test/", str(tmp_path / "missing.json"))


def test_check_remote_substring_case_insensitive():
    snapshot = RemoteBlacklist(["evil"])
    assert check_remote("https://notevil-but-contains-evil.test", snapshot)
    assert check_remote("https://EVIL.test", snapshot)
    assert not check_remote("https://example.com", snapshot)


def test_failed_snapshot_never_matches():
    snapshot = RemoteBlacklist(["evil"], error="timeout")
    assert not snapshot.available
    assert not check_remote("https://evil.test", snapshot)


def test_fetch_remote_success(serve_feed):
    calls = serve_feed(make_response({"allow": ["good.test"], "deny": ["Evil.test", 3]}))
    snapshot = fetch_remote(FEED_URL)
    assert snapshot.available
    assert snapshot.entries == ("evil.test",)
    assert calls == [(FEED_URL, threat_intel.REMOTE_TIMEOUT_SECONDS, True)]


@pytest.mark.parametrize("outcome", [
    requests.ConnectionError("unreachable"),
    requests.Timeout("timed out"),
    make_response({}, status=503),
    make_response(b"not json"),
    make_response(b""),
    make_response({"allow": []}),
    make_response(b"[" * 200000),
])
def test_fetch_remote_failure_is_captured(serve_feed, outcome):
    serve_feed(outcome)
    snapshot = fetch_remote(FEED_URL)
    assert not snapshot.available
    assert snapshot.error
    assert not snapshot.contains("https://anything.test")


def test_fetch_remote_gives_up_after_overall_deadline(serve_feed, monkeypatch):
    serve_feed(make_response({"deny": ["evil"]}))
    # every clock reading jumps 11 seconds, past the 10 second budget
    clock = itertools.count(0, 11)
    monkeypatch.setattr(threat_intel.time, "monotonic", lambda: next(clock))
    snapshot = fetch_remote(FEED_URL)
    assert not snapshot.available
    assert "longer than" in snapshot.error


def test_blacklist_hits_asks_every_source(tmp_path):
    path = tmp_path / "caught.json"
    path.write_text(json.dumps({"flagged_sites": ["https://evil.test/"]}))
    hits = blacklist_hits("https://evil.test/", [LocalBlacklist(str(path)), RemoteBlacklist(["evil"])])
    assert hits == {"local": True, "remote": True}


def test_membership_source_is_abstract():
    with pytest.raises(TypeError):
        MembershipSource()
