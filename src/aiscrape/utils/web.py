from __future__ import annotations

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from aiscrape.core.errors import FetchError

log = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
}
TIMEOUT = 15


def normalize_url(url: str) -> str:
    url = url.strip()
    if "://" not in url:
        url = f"https://{url}"
    return url


def fetch_html(url: str, *, timeout: float = TIMEOUT, session: Optional[requests.Session] = None) -> str:
    """Download a page and return its HTML."""
    url = normalize_url(url)
    getter = session.get if session is not None else requests.get

    log.debug("GET %s", url)
    try:
        resp = getter(url, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"failed to scrape website: {e}") from e

    return resp.text


def extract_body_html(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    if soup.body is None:
        # html.parser does not synthesise a body; keep <head> text out of the document.
        for tag in soup(["head", "title", "meta", "link"]):
            tag.decompose()
        return str(soup)
    return soup.body.decode_contents()


def clean_body_content(body_html: str) -> str:
    """Strip <script> and <style> and return whatever text is left."""
    soup = BeautifulSoup(body_html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text()


def page_text(url: str, *, timeout: float = TIMEOUT, session: Optional[requests.Session] = None) -> str:
    html = fetch_html(url, timeout=timeout, session=session)
    return clean_body_content(extract_body_html(html))
