"""HTTP transport and transaction submitter."""

import json

import httpx
import pytest

from conftest import ENDPOINT, FakeEndpoint
from metagraph_sessions.builder import build_extend_session
from metagraph_sessions.errors import SubmissionError, SubmissionKind
from metagraph_sessions.models.envelope import Proof
from metagraph_sessions.submitter import TransactionSubmitter
from metagraph_sessions.transport.http import HttpClient

PROOF = Proof(id="ab" * 64, signature="3045")
COMMAND = build_extend_session("abc123", "DAG_ADDR", 1500)


def _submitter(endpoint: FakeEndpoint) -> TransactionSubmitter:
    return TransactionSubmitter(HttpClient(ENDPOINT + "/", transport=endpoint.transport()))


@pytest.mark.asyncio
async def test_posts_envelope_to_data_path(endpoint):
    endpoint.responses["ExtendSession"] = (200, {"hash": "tx1"})
    response = await _submitter(endpoint).submit(COMMAND, PROOF)

    assert response == {"hash": "tx1"}
    request = endpoint.requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{ENDPOINT}/data"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {
        "value": {"ExtendSession": {"id": "abc123", "accessProvider": "DAG_ADDR", "endSnapshotOrdinal": 1500}},
        "proofs": [{"id": "ab" * 64, "signature": "3045"}],
    }
    assert b" " not in request.content


@pytest.mark.asyncio
async def test_rejected_keeps_server_detail(endpoint):
    endpoint.responses["ExtendSession"] = (404, {"error": "session not found"})
    with pytest.raises(SubmissionError) as exc:
        await _submitter(endpoint).submit(COMMAND, PROOF)

    err = exc.value
    assert err.kind is SubmissionKind.REJECTED
    assert err.detail == "session not found"
    assert err.status_code == 404
    assert err.body == {"error": "session not found"}
    assert len(endpoint.requests) == 1


@pytest.mark.asyncio
async def test_rejected_errors_list(endpoint):
    endpoint.responses["ExtendSession"] = (400, {"errors": [{"message": "bad ordinal"}, "stale"]})
    with pytest.raises(SubmissionError) as exc:
        await _submitter(endpoint).submit(COMMAND, PROOF)
    assert exc.value.detail == "bad ordinal; stale"


@pytest.mark.asyncio
async def test_rejected_plain_text():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="  upstream exploded \n"))
    with pytest.raises(SubmissionError) as exc:
        await TransactionSubmitter(HttpClient(ENDPOINT, transport=transport)).submit(COMMAND, PROOF)
    assert exc.value.detail == "upstream exploded"
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_empty_body_rejection():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    with pytest.raises(SubmissionError) as exc:
        await TransactionSubmitter(HttpClient(ENDPOINT, transport=transport)).submit(COMMAND, PROOF)
    assert exc.value.detail == "HTTP 503"


@pytest.mark.asyncio
async def test_unreachable(endpoint):
    endpoint.error = httpx.ConnectError("connection refused")
    with pytest.raises(SubmissionError) as exc:
        await _submitter(endpoint).submit(COMMAND, PROOF)
    assert exc.value.kind is SubmissionKind.UNREACHABLE
    assert exc.value.status_code is None
    assert "connection refused" in exc.value.detail
    assert len(endpoint.requests) == 1


@pytest.mark.asyncio
async def test_timeout_is_unreachable(endpoint):
    endpoint.error = httpx.ReadTimeout("timed out")
    with pytest.raises(SubmissionError) as exc:
        await _submitter(endpoint).submit(COMMAND, PROOF)
    assert exc.value.kind is SubmissionKind.UNREACHABLE


@pytest.mark.asyncio
async def test_empty_success_body(endpoint):
    transport = httpx.MockTransport(lambda request: httpx.Response(204))
    http = HttpClient(ENDPOINT, transport=transport)
    assert await TransactionSubmitter(http).submit(COMMAND, PROOF) is None
    await http.close()


@pytest.mark.asyncio
async def test_client_has_finite_timeout(endpoint):
    http = HttpClient(ENDPOINT, timeout=5, transport=endpoint.transport())
    timeout = http._client.timeout
    assert (timeout.connect, timeout.read, timeout.write, timeout.pool) == (5, 5, 5, 5)
    await http.close()


@pytest.mark.asyncio
async def test_settings_timeout_reaches_http_client(make_client):
    async with make_client(request_timeout_seconds=7.5) as client:
        assert client.http._client.timeout.read == 7.5
