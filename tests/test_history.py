"""
Scan history ring buffer tests
"""

import threading

from fraudscan.core.url_analyzer import analyze_url
from fraudscan.services.history import ScanHistory, truncate_content


def test_truncate_content():
    assert truncate_content("short", 50) == "short"
    assert truncate_content("x" * 50, 50) == "x" * 50
    assert truncate_content("x" * 51, 50) == "x" * 50 + "..."
    assert truncate_content(None, 10) == ""


def test_add_returns_entry(rules):
    history = ScanHistory(max_entries=10, preview_length=50)
    result = analyze_url("example.com", rules)

    entry = history.add("url", "example.com", result)

    assert entry.type == "url"
    assert entry.truncated_content == "example.com"
    assert entry.result is result
    assert len(entry.id) == 32
    assert entry.created_at
    assert len(history) == 1


def test_newest_first_and_bounded(rules):
    history = ScanHistory(max_entries=10)
    result = analyze_url("example.com", rules)

    for i in range(12):
        history.add("url", f"site{i}.com", result)

    entries = history.list()
    assert len(history) == 10
    assert [e.truncated_content for e in entries[:2]] == ["site11.com", "site10.com"]
    assert entries[-1].truncated_content == "site2.com"


def test_list_limit(rules):
    history = ScanHistory(max_entries=5)
    result = analyze_url("example.com", rules)
    for i in range(4):
        history.add("url", f"site{i}.com", result)

    assert [e.truncated_content for e in history.list(limit=2)] == ["site3.com", "site2.com"]


def test_long_content_is_truncated(rules):
    history = ScanHistory(max_entries=3, preview_length=10)
    entry = history.add("email", "a" * 40, analyze_url("example.com", rules))
    assert entry.truncated_content == "a" * 10 + "..."


def test_explicit_zero_capacity_is_respected(rules):
    history = ScanHistory(max_entries=0)
    history.add("url", "example.com", analyze_url("example.com", rules))

    assert history.max_entries == 0
    assert len(history) == 0


def test_defaults_come_from_settings():
    history = ScanHistory()
    assert history.max_entries == 10
    assert history.preview_length == 50


def test_clear():
    history = ScanHistory(max_entries=3)
    assert history.clear() == 0


def test_concurrent_adds_stay_bounded(rules):
    history = ScanHistory(max_entries=10)
    result = analyze_url("example.com", rules)

    def worker():
        for _ in range(50):
            history.add("url", "example.com", result)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(history) == 10
    assert history.clear() == 10
    assert history.list() == []
