"""Landing page fetch: readable text plus a few headline hints for the prompt.

A failed fetch is never an error for the caller. It comes back as an empty
`LandingScrape` carrying the reason.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

MIN_CONTENT_CHARS = 50
MAX_H1 = 3
UNSUPPORTED_URL = "URL must start with http:// or https://"

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class LandingScrape:
    content: str = ""
    error: Optional[str] = None

    @property
    def scraped(self) -> bool:
        return bool(self.content)


def extract_landing_text(html: str, max_chars: int = 8000) -> str:
    """
    Visible page text (scripts and styles removed, whitespace collapsed,
    clipped to `max_chars`), prefixed with title / H1 / meta description hints
    when the page has any.
    """
    soup = BeautifulSoup(html, "html.parser")

    hints: list[str] = []
    if soup.title is not None and soup.title.string is not None:
        hints.append(f"Page Title: {soup.title.string.strip()}")
    h1_texts = [h.get_text(" ", strip=True) for h in soup.find_all("h1", limit=MAX_H1)]
    if h1_texts:
        hints.append(f"H1 Headlines: {' | '.join(h1_texts)}")
    meta_desc = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    if meta_desc is not None and meta_desc.get("content"):
        hints.append(f"Meta Description: {meta_desc['content'].strip()}")

    for tag in soup.find_all(["script", "style"]):
        tag.decompose()
    text = _WS_RE.sub(" ", soup.get_text(" ")).strip()[:max_chars]

    if hints:
        return "EXTRACTED ELEMENTS:\n" + "\n".join(hints) + f"\n\nPAGE CONTENT:\n{text}"
    return text


class LandingPageScraper:
    def __init__(
        self,
        timeout: float = 8.0,
        max_chars: int = 8000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.max_chars = max_chars
        self._transport = transport

    async def fetch_html(self, url: str) -> str:
        async with httpx.AsyncClient(
            headers=REQUEST_HEADERS,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

    async def scrape(self, url: str) -> LandingScrape:
        if not url.lower().startswith(("http://", "https://")):
            return LandingScrape(error=UNSUPPORTED_URL)
        try:
            html = await self.fetch_html(url)
        except httpx.TimeoutException:
            logger.warning("LANDING_TIMEOUT url=%s timeout=%.1fs", url, self.timeout)
            return LandingScrape(error=f"Timed out after {self.timeout:g}s")
        except httpx.HTTPStatusError as e:
            logger.warning("LANDING_HTTP_ERROR url=%s status=%s", url, e.response.status_code)
            return LandingScrape(error=f"HTTP {e.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("LANDING_FETCH_FAILED url=%s error=%s", url, e)
            return LandingScrape(error=str(e) or type(e).__name__)

        content = extract_landing_text(html, self.max_chars)
        if len(content.strip()) <= MIN_CONTENT_CHARS:
            return LandingScrape(error="Page returned empty or minimal content")
        return LandingScrape(content=content)
