from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from castnotes.client import PipelineClient, PipelineError


@pytest.fixture()
def pipeline(client) -> PipelineClient:
    return PipelineClient(client)


@pytest.fixture()
def episode(tmp_path):
    path = tmp_path / "episode.mp3"
    path.write_bytes(b"ID3-local-audio")
    return path


def test_process_runs_both_stages(pipeline, provider, episode, sample_summary) -> None:
    result = pipeline.process(file=episode)

    assert result.transcript == "Welcome to the show."
    assert result.raw_summary == sample_summary
    assert result.summary.key_points == sample_summary["keyPoints"]
    assert result.summary.timestamped_notes[1].timestamp == "05:10"
    assert provider.completion_calls[0]["messages"][1]["content"].count("Welcome to the show.") == 1


def test_process_with_url_only(pipeline, provider, audio_host) -> None:
    result = pipeline.process(url="  https://audio.example.com/42.mp3 ")

    assert result.transcript == "Welcome to the show."
    assert str(audio_host.requests[0].url) == "https://audio.example.com/42.mp3"


def test_process_requires_an_input(pipeline, provider) -> None:
    with pytest.raises(PipelineError) as excinfo:
        pipeline.process(url="   ")

    assert excinfo.value.message == "Please provide an audio file or a direct audio URL."
    assert provider.transcription_calls == []


def test_transcription_failure_halts_pipeline(pipeline, provider, audio_host) -> None:
    audio_host.handler = lambda _request: httpx.Response(403)

    with pytest.raises(PipelineError) as excinfo:
        pipeline.process(url="https://audio.example.com/private.mp3")

    assert excinfo.value.stage == "transcribe"
    assert excinfo.value.message == "Failed to fetch audio URL"
    assert excinfo.value.transcript is None
    assert provider.completion_calls == []


def test_summarization_failure_keeps_transcript(pipeline, provider, episode) -> None:
    async def _fail(**_kwargs):
        raise openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))

    provider.chat.completions.create = _fail

    with pytest.raises(PipelineError) as excinfo:
        pipeline.process(file=episode)

    assert excinfo.value.stage == "summarize"
    assert excinfo.value.message == "Connection error."
    assert excinfo.value.transcript == "Welcome to the show."


def test_silent_clip_still_succeeds(pipeline, provider, episode) -> None:
    provider.transcription = SimpleNamespace(text="")
    provider.completion_content = json.dumps({"keyPoints": [], "highlights": ["(silence)"]})

    result = pipeline.process(file=episode)

    assert result.transcript == ""
    assert result.summary.highlights == ["(silence)"]
    assert result.summary.seo_titles == []
    assert provider.completion_calls[0]["messages"][1]["content"].startswith("Transcript:\n\n\n\n")


def test_error_without_json_body_uses_fallback_message() -> None:
    transport = httpx.MockTransport(lambda _request: httpx.Response(502, text="Bad Gateway"))
    pipeline = PipelineClient(httpx.Client(transport=transport, base_url="http://castnotes.test"))

    with pytest.raises(PipelineError) as excinfo:
        pipeline.transcribe(url="https://audio.example.com/42.mp3")

    assert excinfo.value.message == "Transcription failed"


def test_malformed_section_does_not_discard_the_others(pipeline, provider, episode, sample_summary) -> None:
    document = {**sample_summary, "timestampedNotes": ["00:10 intro"]}
    provider.completion_content = json.dumps(document)

    result = pipeline.process(file=episode)

    assert result.raw_summary == document
    assert result.summary.timestamped_notes == []
    assert result.summary.key_points == sample_summary["keyPoints"]
    assert result.summary.tweet_thread == sample_summary["tweetThread"]
    assert result.summary.seo_titles == sample_summary["seoTitles"]
