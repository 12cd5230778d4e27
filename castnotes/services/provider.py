from __future__ import annotations

from openai import AsyncOpenAI


def create_provider_client(api_key: str | None, base_url: str | None = None) -> AsyncOpenAI:
    """
    Build a client for the speech-to-text and chat-completion provider.

    A missing key falls through to the SDK, which reads OPENAI_API_KEY itself
    and raises OpenAIError when neither is set.
    """
    return AsyncOpenAI(api_key=api_key, base_url=base_url)
