import pytest

from courtside.chat.errors import (
    FAILED_MESSAGE,
    OVERWHELMED_MESSAGE,
    describe_failure,
    error_kind,
    is_transient,
)
from courtside.chat.retry import with_retry

from conftest import RecordingSleep, StatusError


class Flaky:
    def __init__(self, failures: list[BaseException], value="ok") -> None:
        self.failures = list(failures)
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.value


async def test_two_rate_limits_then_success():
    sleep = RecordingSleep()
    op = Flaky([StatusError(429), StatusError(429)], value="parlay")

    result = await with_retry(op, sleep=sleep)

    assert result == "parlay"
    assert op.calls == 3
    assert sleep.delays == [2.0, 4.0]


async def test_non_transient_error_fails_fast():
    sleep = RecordingSleep()
    error = ValueError("schema mismatch")
    op = Flaky([error])

    with pytest.raises(ValueError) as excinfo:
        await with_retry(op, sleep=sleep)

    assert excinfo.value is error
    assert op.calls == 1
    assert sleep.delays == []


async def test_exhausted_retries_raise_last_error_unchanged():
    sleep = RecordingSleep()
    errors = [StatusError(503) for _ in range(4)]
    op = Flaky(list(errors))

    with pytest.raises(StatusError) as excinfo:
        await with_retry(op, max_retries=3, sleep=sleep)

    assert excinfo.value is errors[-1]
    assert op.calls == 4
    assert sleep.delays == [2.0, 4.0, 8.0]


async def test_status_detected_from_message_text():
    sleep = RecordingSleep()
    op = Flaky([RuntimeError("429 RESOURCE_EXHAUSTED")])

    assert await with_retry(op, initial_delay=0.5, sleep=sleep) == "ok"
    assert sleep.delays == [0.5]


async def test_zero_retries_means_single_attempt():
    op = Flaky([StatusError(429)])

    with pytest.raises(StatusError):
        await with_retry(op, max_retries=0, sleep=RecordingSleep())

    assert op.calls == 1


def test_classification():
    assert is_transient(StatusError(503))
    assert not is_transient(StatusError(401))
    assert not is_transient(ConnectionError("connection reset"))
    assert error_kind(StatusError(429)) == "overwhelmed"
    assert error_kind(ValueError("bad")) == "failed"
    assert describe_failure(StatusError(429)) == OVERWHELMED_MESSAGE
    assert describe_failure(ConnectionError("down")) == FAILED_MESSAGE
