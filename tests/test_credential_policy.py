"""Tests for the credential policy base contract and anonymous access."""

from __future__ import annotations

import pytest

from blobauth.credentials import AnonymousCredential, Credential
from blobauth.policies import AnonymousCredentialPolicy, CredentialPolicy, RequestPolicyOptions
from blobauth.request import StorageRequest

from conftest import FakeResponse, RecordingSender


class TestCredentialPolicy:

    def test_default_sign_is_identity(self, list_request):
        before = list(list_request.headers.multi_items())
        policy = CredentialPolicy(RecordingSender(), RequestPolicyOptions())
        result = policy.sign_request(list_request)
        assert result is list_request
        assert list(result.headers.multi_items()) == before

    @pytest.mark.asyncio
    async def test_forwards_exactly_once(self, list_request):
        sender = RecordingSender(response=FakeResponse(201))
        policy = CredentialPolicy(sender, RequestPolicyOptions())

        response = await policy.send(list_request)

        assert response.status_code == 201
        assert sender.requests == [list_request]

    @pytest.mark.asyncio
    async def test_errors_pass_through_unchanged(self, list_request):
        error = TimeoutError("transport timed out")
        policy = CredentialPolicy(RecordingSender(error=error), RequestPolicyOptions())
        with pytest.raises(TimeoutError) as exc_info:
            await policy.send(list_request)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_subclass_sign_runs_before_forward(self, list_request):
        class StampPolicy(CredentialPolicy):
            def sign_request(self, request: StorageRequest) -> StorageRequest:
                request.headers["x-ms-stamp"] = "1"
                return request

        sender = RecordingSender()
        await StampPolicy(sender, RequestPolicyOptions()).send(list_request)
        assert sender.headers_seen[0]["x-ms-stamp"] == "1"

    def test_credential_is_abstract(self):
        with pytest.raises(TypeError):
            Credential()


class TestAnonymousCredential:

    @pytest.mark.asyncio
    async def test_no_authorization_added(self, list_request):
        sender = RecordingSender()
        policy = AnonymousCredential().create(sender, RequestPolicyOptions())

        assert isinstance(policy, AnonymousCredentialPolicy)
        await policy.send(list_request)
        assert "authorization" not in sender.headers_seen[0]
