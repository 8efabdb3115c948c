"""
Tests for the Context request layer.
"""
import logging
from typing import List
from unittest.mock import MagicMock

import pytest
import requests

from chain_sdk import (
    APIError, BadURLError, ClientConfig, ConnectivityError, Context,
    HTTPError, JSONError, SubmitResponse, Template
)
from tests.test_helpers import TEST_REMOTE_URL, TEST_URL, endpoint_url


def test_context_strips_trailing_slash():
    assert Context(TEST_URL + "/").url == TEST_URL


def test_https_remote_url_allowed():
    assert Context(TEST_REMOTE_URL).url == TEST_REMOTE_URL


@pytest.mark.parametrize("url", [
    "http://chain.example.com",
    "ftp://localhost:1999",
    "localhost:1999",
    "not a url",
])
def test_bad_urls_rejected(url):
    with pytest.raises(BadURLError):
        Context(url)


def test_insecure_remote_url_can_be_allowed():
    assert Context("http://10.0.0.5:1999", allow_insecure=True).url == "http://10.0.0.5:1999"


def test_from_config():
    config = ClientConfig(url=TEST_REMOTE_URL, timeout=5, retry_count=2, user_agent="tests/1.0")
    context = Context.from_config(config)
    assert context.url == TEST_REMOTE_URL
    assert context.timeout == 5
    assert context.user_agent == "tests/1.0"


def test_request_posts_json_with_headers(ctx, requests_mock):
    requests_mock.post(endpoint_url("echo"), json={"ok": True})

    result = ctx.request("echo", {"a": 1})

    assert result == {"ok": True}
    request = requests_mock.last_request
    assert request.json() == {"a": 1}
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"].startswith("chain-sdk-python/")


def test_request_decodes_list_type(ctx, requests_mock):
    requests_mock.post(endpoint_url("submit-transaction"), json=[{"id": "a"}, {"id": "b"}])

    responses = ctx.request("submit-transaction", {}, List[SubmitResponse])

    assert [r.id for r in responses] == ["a", "b"]


def test_api_error_from_error_status(ctx, requests_mock):
    requests_mock.post(
        endpoint_url("build-transaction"),
        status_code=400,
        json={
            "code": "CH003",
            "message": "Invalid request body",
            "detail": "field actions",
            "data": {"index": 0},
            "temporary": False,
        },
        headers={"Chain-Request-Id": "req-1"}
    )

    with pytest.raises(APIError) as exc_info:
        ctx.request("build-transaction", [])

    error = exc_info.value
    assert error.code == "CH003"
    assert error.detail == "field actions"
    assert error.data == {"index": 0}
    assert error.temporary is False
    assert error.request_id == "req-1"
    assert error.status_code == 400
    assert "Request-ID: req-1" in str(error)


def test_http_error_without_json_body(ctx, requests_mock):
    requests_mock.post(endpoint_url("list-transactions"), status_code=502, text="Bad Gateway")

    with pytest.raises(HTTPError) as exc_info:
        ctx.request("list-transactions", {})
    assert exc_info.value.status_code == 502


def test_connection_error(ctx, requests_mock):
    requests_mock.post(endpoint_url("list-transactions"), exc=requests.ConnectionError("refused"))

    with pytest.raises(ConnectivityError, match="refused"):
        ctx.request("list-transactions", {})


def test_timeout_is_connectivity_error(ctx, requests_mock):
    requests_mock.post(endpoint_url("list-transactions"), exc=requests.exceptions.ReadTimeout("slow"))

    with pytest.raises(ConnectivityError):
        ctx.request("list-transactions", {})


def test_other_request_exception_is_http_error(ctx, requests_mock):
    requests_mock.post(endpoint_url("list-transactions"), exc=requests.exceptions.TooManyRedirects("loop"))

    with pytest.raises(HTTPError):
        ctx.request("list-transactions", {})


def test_invalid_json_response(ctx, requests_mock):
    requests_mock.post(endpoint_url("list-transactions"), text="<html>", headers={"Chain-Request-Id": "req-2"})

    with pytest.raises(JSONError) as exc_info:
        ctx.request("list-transactions", {})
    assert exc_info.value.request_id == "req-2"


def test_wrong_response_shape(ctx, requests_mock):
    requests_mock.post(endpoint_url("build-transaction"), json={"unexpected": "object"})

    with pytest.raises(JSONError):
        ctx.request("build-transaction", [], List[Template])


def test_singleton_batch_request_unwraps(ctx, requests_mock):
    requests_mock.post(endpoint_url("build-transaction"), json=[{"raw_transaction": "07"}])

    template = ctx.singleton_batch_request("build-transaction", {"actions": []}, Template)

    assert template.raw_transaction == "07"
    assert requests_mock.last_request.json() == [{"actions": []}]


def test_singleton_batch_request_error_item(ctx, requests_mock):
    requests_mock.post(
        endpoint_url("build-transaction"),
        json=[{"code": "CH735", "message": "Insufficient funds", "temporary": True}]
    )

    with pytest.raises(APIError) as exc_info:
        ctx.singleton_batch_request("build-transaction", {}, Template)
    assert exc_info.value.temporary is True


def test_singleton_batch_request_wrong_length(ctx, requests_mock):
    requests_mock.post(endpoint_url("build-transaction"), json=[])

    with pytest.raises(JSONError):
        ctx.singleton_batch_request("build-transaction", {}, Template)


def test_failures_are_logged(ctx, requests_mock, caplog):
    requests_mock.post(endpoint_url("list-transactions"), exc=requests.ConnectionError("refused"))
    caplog.set_level(logging.ERROR)

    with pytest.raises(ConnectivityError):
        ctx.request("list-transactions", {})

    assert any("Could not reach Chain Core" in msg for msg in caplog.messages)


def test_injected_logger_and_session():
    logger = MagicMock()
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("down")
    context = Context(TEST_URL, session=session, logger=logger)

    with pytest.raises(ConnectivityError):
        context.request("list-transactions", {})

    session.post.assert_called_once()
    assert session.post.call_args.kwargs["timeout"] == context.timeout
    logger.error.assert_called()


def test_context_manager_closes_session():
    session = MagicMock()
    with Context(TEST_URL, session=session) as context:
        assert context.session is session
    session.close.assert_called_once()
