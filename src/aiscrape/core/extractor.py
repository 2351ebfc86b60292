from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol

import requests

from aiscrape.core.chunking import select_batch, split_text
from aiscrape.core.config import Settings
from aiscrape.core.errors import ChunkInvocationError, ExtractionCancelled, ModelAPIError
from aiscrape.core.schemas import ExtractionResult, GenerateResponse

log = logging.getLogger(__name__)

Generate = Callable[[str, str], GenerateResponse]
Progress = Callable[[int, int], None]


class ModelClient(Protocol):
    def generate(self, instruction: str, chunk: str) -> GenerateResponse: ...


class GeminiClient:
    """Thin wrapper over the Gemini generateContent REST endpoint."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        # Fails before a session or socket exists if the key is missing.
        self._api_key = settings.require_api_key()
        self.model = settings.model
        self.base_url = settings.base_url
        self.timeout = settings.request_timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/v1beta/models/{self.model}:generateContent"

    def generate(self, instruction: str, chunk: str) -> GenerateResponse:
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": instruction}, {"text": chunk}],
                }
            ]
        }

        log.debug("POST %s (%d chars)", self.url, len(chunk))
        r = self._session.post(
            self.url,
            json=payload,
            headers={"x-goog-api-key": self._api_key},
            timeout=self.timeout,
        )
        if not r.ok:
            log.debug("Gemini returned %s", r.status_code)
            raise ModelAPIError(r.status_code, r.text, url=self.url)

        return GenerateResponse.model_validate(r.json())

    def close(self) -> None:
        self._session.close()


def response_text(response: GenerateResponse) -> str:
    """Join the text parts of every candidate, in order. No text gives ''."""
    texts = []
    for cand in response.candidates:
        if cand.content is None:
            continue
        for part in cand.content.parts:
            if part.text is not None:
                texts.append(part.text)
    return "\n".join(texts)


def invoke_all(
    batch: list[str],
    instruction: str,
    *,
    generate: Generate,
    on_progress: Optional[Progress] = None,
    cancel_event: Optional[threading.Event] = None,
) -> list[str]:
    """
    Send each chunk with the instruction, one call at a time, in order.

    The first failure stops the batch and raises ChunkInvocationError with
    the 1-based chunk index; nothing collected so far is returned.
    """
    total = len(batch)
    results: list[str] = []

    for idx, chunk in enumerate(batch, start=1):
        if cancel_event is not None and cancel_event.is_set():
            raise ExtractionCancelled(idx)
        if on_progress is not None:
            on_progress(idx, total)

        try:
            response = generate(instruction, chunk)
        except Exception as e:
            raise ChunkInvocationError(idx, e) from e

        results.append(response_text(response))

    return results


def aggregate(results: list[str]) -> str:
    return "\n".join(results)


def extract_from_document(
    document: str,
    instruction: str,
    *,
    settings: Settings,
    client: Optional[ModelClient] = None,
    on_progress: Optional[Progress] = None,
    cancel_event: Optional[threading.Event] = None,
) -> ExtractionResult:
    own_client = client is None
    if client is None:
        client = GeminiClient(settings)

    try:
        chunks = split_text(document, settings.chunk_length)
        batch = select_batch(chunks, settings.max_chunks)

        results = invoke_all(
            batch,
            instruction,
            generate=client.generate,
            on_progress=on_progress,
            cancel_event=cancel_event,
        )
    finally:
        if own_client:
            client.close()

    return ExtractionResult(
        text=aggregate(results),
        total_chunks=len(chunks),
        processed_chunks=len(batch),
    )
