r"""Unit tests for the exception classes."""

from __future__ import annotations

import pickle

import httpx
import pytest

from appkit.exceptions import (
    AppkitError,
    ClientError,
    HttpRequestError,
    HttpStatusError,
    NetworkError,
    RateLimitedError,
    ResponseValidationError,
    RetryExhaustedError,
    ServerError,
    status_error_from_response,
)
from appkit.retry.policy import is_transient_status

TEST_URL = "https://api.example.com/data"

######################################
#     Tests for HttpRequestError     #
######################################


def test_http_request_error_attributes() -> None:
    cause = httpx.ConnectError("refused")
    error = NetworkError(method="GET", url=TEST_URL, message="boom", cause=cause)
    assert str(error) == "boom"
    assert error.method == "GET"
    assert error.url == TEST_URL
    assert error.status_code is None
    assert error.response is None
    assert error.cause is cause
    assert isinstance(error, HttpRequestError)
    assert isinstance(error, AppkitError)


def test_http_request_error_pickle() -> None:
    error = HttpRequestError(method="GET", url=TEST_URL, message="boom", status_code=500)
    restored = pickle.loads(pickle.dumps(error))
    assert str(restored) == "boom"
    assert restored.status_code == 500


def test_http_status_error_body() -> None:
    response = httpx.Response(400, text="bad payload")
    error = status_error_from_response("POST", TEST_URL, response)
    assert error.body == "bad payload"


def test_http_status_error_body_without_response() -> None:
    assert HttpStatusError(method="GET", url=TEST_URL, message="boom").body is None


################################################
#     Tests for status_error_from_response     #
################################################


@pytest.mark.parametrize(
    ("status_code", "error_cls"),
    [
        (400, ClientError),
        (401, ClientError),
        (404, ClientError),
        (429, RateLimitedError),
        (500, ServerError),
        (503, ServerError),
        (599, ServerError),
        (600, ClientError),
        (999, ClientError),
    ],
)
def test_status_error_from_response(status_code: int, error_cls: type) -> None:
    response = httpx.Response(status_code)
    error = status_error_from_response("GET", TEST_URL, response)
    assert type(error) is error_cls
    assert error.status_code == status_code
    assert error.response is response
    assert str(error) == f"GET request to {TEST_URL} failed with status {status_code}"


@pytest.mark.parametrize("status_code", [400, 404, 429, 499, 500, 503, 599, 600, 701])
def test_status_error_matches_retry_decision(status_code: int) -> None:
    error = status_error_from_response("GET", TEST_URL, httpx.Response(status_code))
    assert isinstance(error, (RateLimitedError, ServerError)) == is_transient_status(status_code)


#########################################
#     Tests for RetryExhaustedError     #
#########################################


def test_retry_exhausted_error_copies_last_error() -> None:
    response = httpx.Response(503)
    last_error = status_error_from_response("GET", TEST_URL, response)
    error = RetryExhaustedError(last_error, attempts=4)
    assert error.last_error is last_error
    assert error.attempts == 4
    assert error.method == "GET"
    assert error.url == TEST_URL
    assert error.status_code == 503
    assert error.response is response
    assert str(error).endswith("(gave up after 4 attempts)")


#############################################
#     Tests for ResponseValidationError     #
#############################################


def test_response_validation_error_defaults() -> None:
    error = ResponseValidationError("invalid")
    assert error.errors == []
    assert error.body is None
    assert not isinstance(error, HttpRequestError)
