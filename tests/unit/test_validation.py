r"""Unit tests for parameter validation."""

from __future__ import annotations

import httpx
import pytest

from appkit.validation import validate_method, validate_retry_params, validate_timeout

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0.1, 5, 30.0, httpx.Timeout(1.0)])
def test_validate_timeout_valid(timeout: float | httpx.Timeout) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, -1, -0.5])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


###########################################
#     Tests for validate_retry_params     #
###########################################


def test_validate_retry_params_valid() -> None:
    validate_retry_params(max_retries=0)
    validate_retry_params(max_retries=3, jitter_factor=0.1, max_wait_time=5.0)


def test_validate_retry_params_invalid_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        validate_retry_params(max_retries=-1)


def test_validate_retry_params_invalid_jitter_factor() -> None:
    with pytest.raises(ValueError, match=r"jitter_factor must be >= 0"):
        validate_retry_params(max_retries=3, jitter_factor=-1.0)


def test_validate_retry_params_invalid_max_wait_time() -> None:
    with pytest.raises(ValueError, match=r"max_wait_time must be > 0"):
        validate_retry_params(max_retries=3, max_wait_time=0)


#####################################
#     Tests for validate_method     #
#####################################


@pytest.mark.parametrize("method", ["GET", "post", "Put", "PATCH", "delete"])
def test_validate_method_valid(method: str) -> None:
    assert validate_method(method) == method.upper()


def test_validate_method_invalid() -> None:
    with pytest.raises(ValueError, match=r"method must be one of"):
        validate_method("TRACE")
