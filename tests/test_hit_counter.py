"""Tests for HitCounter."""

import threading

from chirpy.api.metrics import HitCounter, render_metrics_page


class TestHitCounter:
    """Test HitCounter increments, reset and overflow."""

    def test_starts_at_zero(self):
        assert HitCounter().value == 0

    def test_increment_returns_new_value(self):
        counter = HitCounter()

        assert counter.increment() == 1
        assert counter.increment() == 2
        assert counter.value == 2

    def test_reset(self):
        counter = HitCounter()
        counter.increment()

        counter.reset()

        assert counter.value == 0

    def test_wraps_like_int32(self):
        counter = HitCounter()
        counter._hits = 2 ** 31 - 1

        assert counter.increment() == -(2 ** 31)

    def test_concurrent_increments_are_not_lost(self):
        counter = HitCounter()

        def hammer():
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=hammer) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter.value == 8000


def test_render_metrics_page():
    page = render_metrics_page(42)

    assert "<h1>Welcome, Chirpy Admin</h1>" in page
    assert "<p>Chirpy has been visited 42 times!</p>" in page
