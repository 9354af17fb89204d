import asyncio
import time

import requests

from archive_zero import probes
from archive_zero.probes import probe_resources, resource_exists


class _Resp:
    def __init__(self, ok):
        self.ok = ok


def test_local_file_existence(tmp_path):
    page = tmp_path / "z-001.html"
    page.write_text("<html></html>", encoding="utf-8")
    assert resource_exists(str(page)) is True
    assert resource_exists(str(tmp_path / "z-002.html")) is False
    assert resource_exists(str(tmp_path)) is False


def test_http_existence_uses_head(monkeypatch):
    calls = []

    def fake_head(url, timeout, allow_redirects):
        calls.append((url, timeout))
        return _Resp(url.endswith("z-001.html"))

    monkeypatch.setattr(probes.requests, "head", fake_head)
    assert resource_exists("https://example.org/z-001.html", timeout=1.5) is True
    assert resource_exists("https://example.org/z-002.html") is False
    assert calls[0] == ("https://example.org/z-001.html", 1.5)


def test_http_errors_count_as_missing(monkeypatch):
    def boom(url, timeout, allow_redirects):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(probes.requests, "head", boom)
    assert resource_exists("http://example.org/z-001.html") is False


def test_probe_resources_waits_for_all_and_keeps_order():
    def slow_check(loc):
        time.sleep(0.05 if loc == "a" else 0.0)
        return loc in ("a", "c")

    assert asyncio.run(probe_resources(["a", "b", "c"], check=slow_check)) == ["a", "c"]


def test_probe_resources_treats_check_errors_as_missing():
    def flaky(loc):
        if loc == "b":
            raise OSError("unreadable")
        return True

    assert asyncio.run(probe_resources(["a", "b"], check=flaky)) == ["a"]
