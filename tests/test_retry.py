"""Tests for the retry helpers."""

from unittest.mock import MagicMock, patch

import pytest

from subcue.utils.retry import retry_request, retry_with_backoff


@patch("subcue.utils.retry.time.sleep")
def test_retries_until_success(mock_sleep):
    func = MagicMock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
    func.__name__ = "func"

    wrapped = retry_with_backoff(max_retries=3, base_delay=1.0, backoff_factor=2.0)(func)
    assert wrapped() == "ok"
    assert func.call_count == 3
    assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]


@patch("subcue.utils.retry.time.sleep")
def test_reraises_after_exhaustion(mock_sleep):
    func = MagicMock(side_effect=ConnectionError("down"))
    func.__name__ = "func"

    with pytest.raises(ConnectionError, match="down"):
        retry_with_backoff(max_retries=2)(func)()
    assert func.call_count == 3


@patch("subcue.utils.retry.time.sleep")
def test_delay_is_capped(mock_sleep):
    func = MagicMock(side_effect=[OSError()] * 4 + ["ok"])
    func.__name__ = "func"

    retry_with_backoff(max_retries=4, base_delay=5.0, max_delay=8.0)(func)()
    assert [c.args[0] for c in mock_sleep.call_args_list] == [5.0, 8.0, 8.0, 8.0]


@patch("subcue.utils.retry.time.sleep")
def test_unlisted_exceptions_propagate_immediately(mock_sleep):
    func = MagicMock(side_effect=KeyError("nope"))
    func.__name__ = "func"

    with pytest.raises(KeyError):
        retry_with_backoff(max_retries=3, exceptions=(ConnectionError,))(func)()
    assert func.call_count == 1
    mock_sleep.assert_not_called()


@patch("subcue.utils.retry.time.sleep")
def test_on_retry_callback(mock_sleep):
    seen = []
    func = MagicMock(side_effect=[TimeoutError("t"), "ok"])
    func.__name__ = "func"

    retry_with_backoff(max_retries=1, on_retry=lambda e, n: seen.append((str(e), n)))(func)()
    assert seen == [("t", 1)]


@patch("subcue.utils.retry.time.sleep")
def test_retry_request_passes_arguments(mock_sleep):
    func = MagicMock(side_effect=[ConnectionError(), "done"])
    func.__name__ = "func"

    assert retry_request(func, "a", key="b", max_retries=1) == "done"
    func.assert_called_with("a", key="b")
