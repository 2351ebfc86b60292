"""
Shared fixtures for the aiscrape test suite.

Dependencies: pytest, aiscrape.core
System role: Fake model clients and settings so no test touches the network
"""

import pytest

from aiscrape.core.config import ENV_VARS, Settings
from aiscrape.core.schemas import GenerateResponse


def text_response(*texts: str) -> GenerateResponse:
    """Build a single-candidate response whose parts carry the given texts."""
    return GenerateResponse.model_validate(
        {"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]}
    )


class FakeModelClient:
    """Records every call and answers "OK-<n>" for the n-th call."""

    def __init__(self, fail_on: int | None = None, error: Exception | None = None):
        self.calls: list[tuple[str, str]] = []
        self.fail_on = fail_on
        self.error = error or RuntimeError("connection reset")

    def generate(self, instruction: str, chunk: str) -> GenerateResponse:
        self.calls.append((instruction, chunk))
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise self.error
        return text_response(f"OK-{len(self.calls)}")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test in an empty directory with none of our variables set."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    # keep a stray ./.env in the working directory out of the picture
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def fake_client():
    return FakeModelClient()
