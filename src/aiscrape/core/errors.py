from __future__ import annotations


class AiscrapeError(Exception):
    """Base class for every error the scraper reports to the user."""


class ConfigurationError(AiscrapeError):
    pass


class FetchError(AiscrapeError):
    pass


class ModelAPIError(AiscrapeError):
    def __init__(self, status_code: int, body: str, url: str = ""):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"Gemini error {status_code} for {url}\nResponse:\n{body}")


class ChunkInvocationError(AiscrapeError):
    """A chunk's model call failed; the rest of the batch was not sent."""

    def __init__(self, index: int, cause: BaseException):
        self.index = index
        self.cause = cause
        super().__init__(f"failed to generate content for chunk {index}: {cause}")


class ExtractionCancelled(AiscrapeError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"extraction cancelled before chunk {index}")
