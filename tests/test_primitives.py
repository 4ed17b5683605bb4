# File: tests/test_primitives.py
"""Unit tests for the synchronization building blocks of the crawler."""
from __future__ import annotations

import threading
import time

import pytest

from webcrawler.crawler.admission import HostAdmissionController
from webcrawler.crawler.state import ConcurrentSet, CrawlState
from webcrawler.crawler.synchronizer import LevelSynchronizer


# --------------------------------------------------------------------------- #
#                              LevelSynchronizer                              #
# --------------------------------------------------------------------------- #


def test_synchronizer_starts_at_baseline():
    sync = LevelSynchronizer()
    assert sync.outstanding == 0
    assert sync.await_advance(timeout=0.1)
    assert sync.phase == 1


def test_synchronizer_counts_registrations():
    sync = LevelSynchronizer()
    sync.register()
    sync.register()
    assert sync.outstanding == 2
    assert not sync.await_advance(timeout=0.05)
    assert sync.phase == 0
    sync.arrive_and_deregister()
    sync.arrive_and_deregister()
    assert sync.await_advance(timeout=0.05)


def test_deregister_without_registration_raises():
    sync = LevelSynchronizer()
    with pytest.raises(RuntimeError):
        sync.arrive_and_deregister()


def test_waiter_wakes_when_spawned_work_finishes():
    sync = LevelSynchronizer()
    sync.register()
    released = threading.Event()

    def parent():
        time.sleep(0.05)
        sync.register()  # child registered before the parent leaves
        threading.Thread(target=child).start()
        sync.arrive_and_deregister()

    def child():
        time.sleep(0.05)
        released.set()
        sync.arrive_and_deregister()

    threading.Thread(target=parent).start()
    assert sync.await_advance(timeout=5)
    assert released.is_set()
    assert sync.outstanding == 0


# --------------------------------------------------------------------------- #
#                           HostAdmissionController                           #
# --------------------------------------------------------------------------- #


def test_admission_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        HostAdmissionController(0)


def test_release_without_acquire_raises():
    controller = HostAdmissionController(1)
    with pytest.raises(ValueError):
        controller.release("http://a.test")


def test_saturated_host_blocks_while_others_proceed():
    controller = HostAdmissionController(1)
    controller.acquire("http://a.test")
    entered = threading.Event()

    def contender():
        with controller.admit("http://a.test"):
            entered.set()

    thread = threading.Thread(target=contender)
    thread.start()
    assert not entered.wait(0.1)

    with controller.admit("http://b.test"):
        pass

    controller.release("http://a.test")
    assert entered.wait(5)
    thread.join(5)
    assert sorted(controller.hosts) == ["http://a.test", "http://b.test"]


def test_admit_releases_on_error():
    controller = HostAdmissionController(1)
    with pytest.raises(KeyError):
        with controller.admit("http://a.test"):
            raise KeyError("x")
    controller.acquire("http://a.test")
    controller.release("http://a.test")


# --------------------------------------------------------------------------- #
#                                 Shared state                                #
# --------------------------------------------------------------------------- #


def test_concurrent_set_inserts_each_item_once():
    items = ConcurrentSet()
    wins = []
    lock = threading.Lock()

    def worker():
        mine = sum(items.add(i) for i in range(500))
        with lock:
            wins.append(mine)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sum(wins) == 500
    assert len(items) == 500


def test_concurrent_set_drain_empties():
    items = ConcurrentSet(["a", "b"])
    assert items.drain() == ["a", "b"]
    assert len(items) == 0
    assert "a" not in items


def test_crawl_state_discovery_and_errors():
    state = CrawlState(depth=2, excludes=frozenset({"skip"}))
    state.visited.add("http://a.test/")
    assert not state.discover("http://a.test/")
    assert not state.discover("http://a.test/skip")
    assert state.discover("http://b.test/")
    assert not state.discover("http://b.test/")
    assert state.next_frontier() == ["http://b.test/"]
    assert state.next_frontier() == []

    first, second = OSError("first"), OSError("second")
    state.record_error("http://c.test/", first)
    state.record_error("http://c.test/", second)
    state.record_download("http://b.test/")
    result = state.result()
    assert result.errors["http://c.test/"] is first
    assert result.downloaded == ("http://b.test/",)
