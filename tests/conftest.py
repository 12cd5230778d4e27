from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from castnotes.api.app import create_app
from castnotes.core.config import Settings
from castnotes.services import fetcher, summarizer, transcriber

SAMPLE_SUMMARY: dict[str, Any] = {
    "keyPoints": ["Pricing drives churn", "Onboarding is too long", "Support is a moat", "Ship weekly"],
    "highlights": ["'We cut onboarding to five minutes'", "Churn halved", "NPS up 20", "Hiring support early"],
    "timestampedNotes": [
        {"timestamp": "00:45", "note": "Guest intro"},
        {"timestamp": "05:10", "note": "Pricing experiments"},
        {"timestamp": "12:30", "note": "Onboarding rewrite"},
        {"timestamp": "21:05", "note": "Support as product"},
    ],
    "tweetThread": ["1/ How one startup halved churn", "2/ Shorter onboarding", "3/ Better pricing", "4/ Listen now"],
    "promoCaptions": ["Churn, halved.", "Five-minute onboarding", "Support wins", "New episode out"],
    "seoTitles": ["How to Halve Churn", "Onboarding That Works", "Pricing Lessons", "Support as a Moat"],
}


class FakeProvider:
    """Stands in for AsyncOpenAI: records calls and replays canned answers."""

    def __init__(self) -> None:
        self.transcription: Any = SimpleNamespace(text="Welcome to the show.")
        self.completion_content: str | None = json.dumps(SAMPLE_SUMMARY)
        self.error: Exception | None = None
        self.transcription_calls: list[dict[str, Any]] = []
        self.completion_calls: list[dict[str, Any]] = []
        self.audio = SimpleNamespace(transcriptions=SimpleNamespace(create=self._transcribe))
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._complete))

    async def __aenter__(self) -> FakeProvider:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        return None

    async def _transcribe(self, **kwargs: Any) -> Any:
        self.transcription_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.transcription

    async def _complete(self, **kwargs: Any) -> Any:
        self.completion_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.completion_content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class AudioHost:
    """Serves remote audio through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda _request: httpx.Response(
            200,
            content=b"ID3-remote-audio",
            headers={"Content-Type": "audio/mp4"},
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture()
def sample_summary() -> dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_SUMMARY))


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, OPENAI_API_KEY="sk-test")


@pytest.fixture()
def provider(monkeypatch: pytest.MonkeyPatch) -> FakeProvider:
    fake = FakeProvider()
    monkeypatch.setattr(transcriber, "create_provider_client", lambda _api_key, _base_url=None: fake)
    monkeypatch.setattr(summarizer, "create_provider_client", lambda _api_key, _base_url=None: fake)
    return fake


@pytest.fixture()
def audio_host(monkeypatch: pytest.MonkeyPatch) -> AudioHost:
    host = AudioHost()

    def _create_http_client(timeout_seconds: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(host), timeout=timeout_seconds)

    monkeypatch.setattr(fetcher, "_create_http_client", _create_http_client)
    return host


@pytest.fixture()
def client(settings: Settings, provider: FakeProvider, audio_host: AudioHost) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as c:
        yield c
