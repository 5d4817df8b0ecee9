import json
from types import SimpleNamespace

import pytest
import requests

from clarity_backend.services.page_service import PageContent


class FakePageService:
    def __init__(self, html="", text="", error=None):
        self.page = PageContent(html=html, text=text)
        self.error = error
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.page


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=None)


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


FULL_LLM_CONTENT = json.dumps({
    "scores": {
        "user": {"offer": 4, "navigation": 5, "action": 2},
        "visual": {"consistency": 3, "tone": 4, "environment": 4},
        "story": {"purpose": 1, "emotion": 2, "identity": 5},
    },
    "reasons": {
        "user": {"offer": "Headline states the service.", "navigation": "Clear menu.", "action": "CTA buried."},
        "visual": {"consistency": "Mixed buttons.", "tone": "Professional.", "environment": "Calm layout."},
        "story": {"purpose": "No why.", "emotion": "Flat copy.", "identity": "Distinct voice."},
    },
})

SAMPLE_HTML = """
<html><head><title>Acme Studio</title><style>body {color: red}</style></head>
<body>
  <nav><a href="/services">Services</a><a href="/about">About</a><a href="/contact">Contact</a></nav>
  <h1>We design websites for small shops.</h1>
  <p>Our mission is simple. We believe good sites sell.</p>
  <button>Book a call</button>
  <script>console.log('tracking')</script>
</body></html>
"""


@pytest.fixture
def fake_page():
    return FakePageService(html=SAMPLE_HTML, text="We design websites for small shops. Our mission is simple.")


@pytest.fixture
def broken_page():
    return FakePageService(error=requests.ConnectionError("connection refused"))


class FakeResponse:
    """Streaming stand-in for ``requests.get(..., stream=True)``."""

    def __init__(self, chunks=(), status_code=200, encoding="utf-8", url="https://example.com/"):
        self.chunks = list(chunks)
        self.status_code = status_code
        self.encoding = encoding
        self.url = url
        self.read = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)

    def iter_content(self, chunk_size=1):
        for chunk in self.chunks:
            self.read += 1
            yield chunk


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get; set ``.response`` and read back ``.calls``."""
    fake = SimpleNamespace(calls=[], response=FakeResponse([SAMPLE_HTML.encode("utf-8")]))

    def _get(url, **kwargs):
        fake.calls.append((url, kwargs))
        return fake.response

    monkeypatch.setattr(requests, "get", _get)
    return fake
