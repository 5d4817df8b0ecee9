import logging
import re
import time
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup

from clarity_backend.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = 12_000
MAX_PAGE_BYTES = 2_000_000
CHUNK_BYTES = 16_384
URL_PATTERN = re.compile(r'^https?://', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')


@dataclass(frozen=True)
class PageContent:
    html: str = ""
    text: str = ""

    @property
    def empty(self) -> bool:
        return not self.html and not self.text


def is_fetchable(url) -> bool:
    return isinstance(url, str) and bool(URL_PATTERN.match(url))


def extract_text(html: str, max_chars: int = MAX_TEXT_CHARS) -> str:
    """Visible body text: scripts/styles dropped, whitespace collapsed, capped."""
    soup = BeautifulSoup(html, 'html.parser')
    for tag in soup(['script', 'style', 'noscript']):
        tag.decompose()

    root = soup.body or soup
    text = _WHITESPACE.sub(' ', root.get_text(' ')).strip()
    return text[:max_chars]


class PageService:
    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_bytes: int = MAX_PAGE_BYTES,
    ):
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.headers = {'User-Agent': user_agent}

    def fetch(self, url: str) -> PageContent:
        """
        Fetch a page and extract its text. Raises on network or HTTP errors.

        ``timeout`` bounds the whole download, not just each socket read;
        bodies past ``max_bytes`` are cut off.
        """
        deadline = time.monotonic() + self.timeout
        with requests.get(url, headers=self.headers, timeout=self.timeout,
                          allow_redirects=True, stream=True) as response:
            response.raise_for_status()
            raw = self._read_body(response, deadline)
            html = _decode(raw, response.encoding)
            logger.info("Fetched %s (%s, %d bytes)", response.url, response.status_code, len(raw))

        return PageContent(html=html, text=extract_text(html))

    def _read_body(self, response, deadline: float) -> bytes:
        chunks = []
        size = 0
        for chunk in response.iter_content(chunk_size=CHUNK_BYTES):
            chunks.append(chunk)
            size += len(chunk)
            if size >= self.max_bytes:
                logger.info("Page body truncated at %d bytes", self.max_bytes)
                break
            if time.monotonic() > deadline:
                raise requests.Timeout(f"page download exceeded {self.timeout}s")
        return b''.join(chunks)[:self.max_bytes]


def _decode(raw: bytes, encoding) -> str:
    try:
        return raw.decode(encoding or 'utf-8', errors='replace')
    except LookupError:
        return raw.decode('utf-8', errors='replace')
