import pytest

from studiosync.middleware.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(limit=3, window_seconds=60, clock=clock)


def test_counts_down_remaining(limiter):
    results = [limiter.check("1.2.3.4") for _ in range(3)]
    assert [r.allowed for r in results] == [True, True, True]
    assert [r.remaining for r in results] == [2, 1, 0]
    assert all(r.reset_at == 1_060 for r in results)


def test_rejects_when_exhausted(limiter, clock):
    for _ in range(3):
        limiter.check("1.2.3.4")
    clock.now += 20.5
    result = limiter.check("1.2.3.4")
    assert not result.allowed
    assert result.remaining == 0
    assert result.retry_after == 40


def test_rejections_do_not_extend_window(limiter, clock):
    for _ in range(5):
        limiter.check("1.2.3.4")
    clock.now += 60
    assert limiter.check("1.2.3.4").allowed


def test_window_resets(limiter, clock):
    for _ in range(3):
        limiter.check("1.2.3.4")
    clock.now += 61
    result = limiter.check("1.2.3.4")
    assert result.allowed
    assert result.remaining == 2
    assert result.reset_at == 1_121


def test_identifiers_are_independent(limiter):
    for _ in range(3):
        limiter.check("1.2.3.4")
    assert limiter.check("5.6.7.8").allowed


def test_retry_after_is_at_least_one_second(limiter, clock):
    for _ in range(3):
        limiter.check("1.2.3.4")
    clock.now += 59.99
    assert limiter.check("1.2.3.4").retry_after == 1


def test_reset(limiter):
    for _ in range(3):
        limiter.check("a")
        limiter.check("b")
    limiter.reset("a")
    assert limiter.check("a").allowed
    assert not limiter.check("b").allowed
    limiter.reset()
    assert limiter.check("b").allowed


def test_defaults_come_from_settings():
    from studiosync.core.config import settings

    limiter = RateLimiter()
    assert limiter.limit == settings.rate_limit_max_requests
    assert limiter.window_seconds == settings.rate_limit_window_seconds
