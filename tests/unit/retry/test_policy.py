r"""Unit tests for the retry policy."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from appkit.backoff import ConstantBackoff, ExponentialBackoff
from appkit.retry import Outcome, RetryPolicy
from appkit.retry.policy import DEFAULT_MAX_RETRIES, DEFAULT_MAX_WAIT_TIME, is_transient_status

NETWORK_FAILURE = Outcome(error=httpx.ConnectError("connection refused"))


def response_outcome(status_code: int, **kwargs) -> Outcome:
    return Outcome(response=httpx.Response(status_code, **kwargs))


#############################
#     Tests for Outcome     #
#############################


def test_outcome_network_failure() -> None:
    assert NETWORK_FAILURE.is_network_failure
    assert NETWORK_FAILURE.status_code is None


def test_outcome_response() -> None:
    outcome = response_outcome(503)
    assert not outcome.is_network_failure
    assert outcome.status_code == 503


#########################################
#     Tests for is_transient_status     #
#########################################


@pytest.mark.parametrize("status_code", [429, *range(500, 600)])
def test_is_transient_status_true(status_code: int) -> None:
    assert is_transient_status(status_code)


@pytest.mark.parametrize("status_code", [code for code in range(400, 500) if code != 429])
def test_is_transient_status_false(status_code: int) -> None:
    assert not is_transient_status(status_code)


#################################
#     Tests for RetryPolicy     #
#################################


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()
    assert policy.max_retries == DEFAULT_MAX_RETRIES == 3
    assert isinstance(policy.backoff, ExponentialBackoff)
    assert policy.jitter_factor == 0.0
    assert policy.respect_retry_after
    assert policy.max_wait_time == DEFAULT_MAX_WAIT_TIME == 30.0


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"max_retries": -1}, r"max_retries must be >= 0"),
        ({"jitter_factor": -0.1}, r"jitter_factor must be >= 0"),
        ({"max_wait_time": 0}, r"max_wait_time must be > 0"),
    ],
)
def test_retry_policy_invalid_params(kwargs: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        RetryPolicy(**kwargs)


def test_retry_policy_merge() -> None:
    policy = RetryPolicy(max_retries=2)
    merged = policy.merge(max_retries=5, jitter_factor=None)
    assert merged.max_retries == 5
    assert merged.jitter_factor == 0.0
    assert policy.max_retries == 2


@pytest.mark.parametrize("attempt", [0, 1, 2])
def test_should_retry_network_failure_within_budget(attempt: int) -> None:
    assert RetryPolicy(max_retries=3).should_retry(NETWORK_FAILURE, attempt)


@pytest.mark.parametrize("attempt", [3, 4, 10])
def test_should_retry_network_failure_budget_spent(attempt: int) -> None:
    assert not RetryPolicy(max_retries=3).should_retry(NETWORK_FAILURE, attempt)


@pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504, 599])
def test_should_retry_transient_status(status_code: int) -> None:
    policy = RetryPolicy(max_retries=3)
    assert policy.should_retry(response_outcome(status_code), attempt=0)
    assert policy.should_retry(response_outcome(status_code), attempt=2)
    assert not policy.should_retry(response_outcome(status_code), attempt=3)


@pytest.mark.parametrize("status_code", [400, 401, 403, 404, 409, 422, 499])
@pytest.mark.parametrize("attempt", [0, 1, 3])
def test_should_retry_client_error_never(status_code: int, attempt: int) -> None:
    assert not RetryPolicy(max_retries=3).should_retry(response_outcome(status_code), attempt)


@pytest.mark.parametrize("status_code", [200, 204, 304])
def test_should_retry_non_error_status(status_code: int) -> None:
    assert not RetryPolicy().should_retry(response_outcome(status_code), attempt=0)


def test_should_retry_zero_retries() -> None:
    assert not RetryPolicy(max_retries=0).should_retry(NETWORK_FAILURE, attempt=0)


def test_should_retry_is_pure() -> None:
    policy = RetryPolicy()
    outcome = response_outcome(503)
    assert [policy.should_retry(outcome, 1) for _ in range(3)] == [True, True, True]


def test_is_transient_ignores_budget() -> None:
    policy = RetryPolicy(max_retries=0)
    assert policy.is_transient(NETWORK_FAILURE)
    assert policy.is_transient(response_outcome(429))
    assert not policy.is_transient(response_outcome(404))


def test_next_delay_default_exponential() -> None:
    policy = RetryPolicy()
    assert [policy.next_delay(attempt) for attempt in range(4)] == [0.1, 0.2, 0.4, 0.8]


def test_next_delay_custom_strategy() -> None:
    assert RetryPolicy(backoff=ConstantBackoff(delay=2.0)).next_delay(7) == 2.0


def test_next_delay_plain_function() -> None:
    policy = RetryPolicy(backoff=lambda attempt: attempt + 0.5)
    assert policy.next_delay(0) == 0.5
    assert policy.next_delay(2) == 2.5


def test_next_delay_retry_after_header() -> None:
    policy = RetryPolicy()
    outcome = response_outcome(429, headers={"Retry-After": "7"})
    assert policy.next_delay(0, outcome) == 7.0


def test_next_delay_retry_after_ignored() -> None:
    policy = RetryPolicy(respect_retry_after=False)
    outcome = response_outcome(429, headers={"Retry-After": "7"})
    assert policy.next_delay(0, outcome) == 0.1


def test_next_delay_invalid_retry_after_falls_back_to_backoff() -> None:
    outcome = response_outcome(503, headers={"Retry-After": "later"})
    assert RetryPolicy().next_delay(1, outcome) == 0.2


def test_next_delay_max_wait_time() -> None:
    policy = RetryPolicy(max_wait_time=1.0)
    assert policy.next_delay(0, response_outcome(429, headers={"Retry-After": "60"})) == 1.0
    assert policy.next_delay(0) == 0.1


def test_next_delay_default_cap_on_retry_after() -> None:
    outcome = response_outcome(503, headers={"Retry-After": "86400"})
    assert RetryPolicy().next_delay(0, outcome) == DEFAULT_MAX_WAIT_TIME


def test_next_delay_default_cap_on_future_http_date() -> None:
    outcome = response_outcome(429, headers={"Retry-After": "Fri, 31 Dec 9999 23:59:59 GMT"})
    assert RetryPolicy().next_delay(0, outcome) == DEFAULT_MAX_WAIT_TIME


def test_next_delay_without_cap() -> None:
    outcome = response_outcome(503, headers={"Retry-After": "86400"})
    assert RetryPolicy(max_wait_time=None).next_delay(0, outcome) == 86400.0


def test_next_delay_jitter() -> None:
    policy = RetryPolicy(backoff=ConstantBackoff(delay=1.0), jitter_factor=0.5)
    with patch("appkit.retry.policy.random.uniform", return_value=0.25) as mock_uniform:
        assert policy.next_delay(0) == 1.25
    mock_uniform.assert_called_once_with(0, 0.5)
