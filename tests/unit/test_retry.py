import pytest

from gigfeed.retry import retry


def test_retry_until_success():
    delays = []
    calls = {"n": 0}

    @retry(max_attempts=3, base_delay=1.0, jitter=False, sleep=delays.append)
    def flaky():
        calls["n"] += 1
        if calls["n"] < 3:
            raise OSError("nope")
        return "ok"

    assert flaky() == "ok"
    assert delays == [1.0, 2.0]


def test_retry_gives_up():
    delays = []

    @retry(max_attempts=2, base_delay=0.5, jitter=False, sleep=delays.append)
    def always_fails():
        raise OSError("down")

    with pytest.raises(OSError):
        always_fails()
    assert delays == [0.5]


def test_non_retryable_propagates_immediately():
    delays = []

    @retry(max_attempts=3, retryable=(OSError,), sleep=delays.append)
    def bad():
        raise KeyError("x")

    with pytest.raises(KeyError):
        bad()
    assert delays == []


def test_delay_is_capped():
    delays = []

    @retry(max_attempts=4, base_delay=10, max_delay=15, jitter=False, sleep=delays.append)
    def fails():
        raise OSError

    with pytest.raises(OSError):
        fails()
    assert delays == [10, 15, 15]
