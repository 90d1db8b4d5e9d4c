import random
import types

import httpx
import pytest
from http_client import HttpClient, RetryPolicy

class FakeResponse:
    def __init__(self, status_code: int, json_data=None):
        self.status_code = status_code
        self._json = json_data or {}
        self.text = ""
        self.request = types.SimpleNamespace()

    def json(self):
        return self._json

    def raise_for_status(self):
        raise httpx.HTTPStatusError(f"status {self.status_code}", request=self.request, response=self)

class FakeAsyncClient:
    """Returns a sequence of responses for each call to request()."""
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = 0

    async def request(self, method, path, **kwargs):
        self.calls += 1
        if not self._responses:
            raise RuntimeError("No more fake responses")
        return self._responses.pop(0)

    async def aclose(self):
        pass

def no_wait_client(monkeypatch, retries=3):
    hc = HttpClient(base_url="http://where_the_animals_at", connect_timeout=1, read_timeout=1, retries=retries)
    hc.policy = RetryPolicy(retries=retries, backoff_base=0.0, backoff_cap=0.0)
    monkeypatch.setattr(hc.policy, "sleep_seconds", lambda attempt: 0)
    return hc

@pytest.mark.asyncio
async def test_get_retries_then_succeeds(monkeypatch):
    hc = no_wait_client(monkeypatch)
    fake = FakeAsyncClient([
        FakeResponse(503),
        FakeResponse(200, {"animalId": 1}),
    ])
    async with hc:
        hc._client = fake
        resp = await hc.request("GET", "/api/v2/animals/1")
    assert resp.status_code == 200
    assert resp.json() == {"animalId": 1}
    assert fake.calls == 2

@pytest.mark.asyncio
async def test_post_is_not_replayed(monkeypatch):
    hc = no_wait_client(monkeypatch)
    fake = FakeAsyncClient([FakeResponse(500), FakeResponse(201)])
    async with hc:
        hc._client = fake
        with pytest.raises(httpx.HTTPStatusError):
            await hc.request("POST", "/api/v2/animals", json={"species": "cat"})
    assert fake.calls == 1

@pytest.mark.asyncio
async def test_client_errors_fail_fast(monkeypatch):
    hc = no_wait_client(monkeypatch)
    fake = FakeAsyncClient([FakeResponse(404), FakeResponse(200)])
    async with hc:
        hc._client = fake
        with pytest.raises(httpx.HTTPStatusError) as info:
            await hc.request("GET", "/api/v2/animals/9")
    assert info.value.response.status_code == 404
    assert fake.calls == 1

@pytest.mark.asyncio
async def test_gives_up_after_retries(monkeypatch):
    hc = no_wait_client(monkeypatch, retries=2)
    fake = FakeAsyncClient([FakeResponse(502), FakeResponse(502), FakeResponse(200)])
    async with hc:
        hc._client = fake
        with pytest.raises(httpx.HTTPStatusError):
            await hc.request("DELETE", "/api/v2/animals/1")
    assert fake.calls == 2

def test_policy_attempts_and_backoff_cap():
    policy = RetryPolicy(retries=5, backoff_base=1.0, backoff_cap=2.0, rng=random.Random(7))
    assert policy.attempts_for("get") == 5
    assert policy.attempts_for("POST") == 1
    assert 2.0 <= policy.sleep_seconds(10) <= 2.25
