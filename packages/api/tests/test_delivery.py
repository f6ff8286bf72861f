# This project was developed with assistance from AI tools.
"""Tests for the LINE Messaging API client."""

import json

import httpx
import pytest

from loandesk.services.delivery import (
    DeliveryError,
    LineMessagingClient,
    compute_signature,
    verify_signature,
)


def _client(handler, *, access_token="token-abc", channel_secret="secret-xyz"):
    return LineMessagingClient(
        access_token,
        channel_secret,
        base_url="https://line.test",
        transport=httpx.MockTransport(handler),
    )


class _Recorder:
    """MockTransport handler that records requests and answers with a fixed response."""

    def __init__(self, status_code=200, **response_kwargs):
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._response_kwargs = response_kwargs or {"json": {}}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, **self._response_kwargs)


class TestReplyAndPush:
    async def test_reply_payload(self):
        recorder = _Recorder()
        client = _client(recorder)

        await client.reply("rt-1", "สวัสดี")
        await client.aclose()

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v2/bot/message/reply"
        assert request.headers["authorization"] == "Bearer token-abc"
        assert json.loads(request.content) == {
            "replyToken": "rt-1",
            "messages": [{"type": "text", "text": "สวัสดี"}],
        }

    async def test_push_payload(self):
        recorder = _Recorder()
        client = _client(recorder)

        await client.push("C-group", "อัปเดต")
        await client.aclose()

        request = recorder.requests[0]
        assert request.url.path == "/v2/bot/message/push"
        assert json.loads(request.content) == {
            "to": "C-group",
            "messages": [{"type": "text", "text": "อัปเดต"}],
        }

    async def test_rejection_carries_status_and_body(self):
        client = _client(_Recorder(400, json={"message": "Invalid reply token"}))

        with pytest.raises(DeliveryError) as exc_info:
            await client.reply("expired", "hi")
        await client.aclose()

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == {"message": "Invalid reply token"}

    async def test_non_json_error_body(self):
        client = _client(_Recorder(502, text="Bad Gateway"))

        with pytest.raises(DeliveryError) as exc_info:
            await client.push("U-1", "hi")
        await client.aclose()

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "Bad Gateway"

    async def test_transport_error_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)

        with pytest.raises(DeliveryError) as exc_info:
            await client.push("U-1", "hi")
        await client.aclose()

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestConfiguration:
    def test_configured_with_both_credentials(self):
        assert _client(_Recorder()).is_configured is True

    @pytest.mark.parametrize(
        "access_token,channel_secret",
        [("", "secret"), ("token", ""), ("", "")],
    )
    def test_unconfigured_without_either_credential(self, access_token, channel_secret):
        client = _client(_Recorder(), access_token=access_token, channel_secret=channel_secret)
        assert client.is_configured is False


class TestSignature:
    BODY = b'{"destination":"U0","events":[]}'

    def test_round_trip(self):
        signature = compute_signature("secret-xyz", self.BODY)
        assert verify_signature("secret-xyz", self.BODY, signature) is True

    def test_tampered_body(self):
        signature = compute_signature("secret-xyz", self.BODY)
        assert verify_signature("secret-xyz", self.BODY + b" ", signature) is False

    def test_wrong_secret(self):
        signature = compute_signature("other", self.BODY)
        assert verify_signature("secret-xyz", self.BODY, signature) is False

    def test_missing_header(self):
        assert verify_signature("secret-xyz", self.BODY, None) is False
