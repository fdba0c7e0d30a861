import json
import sys
from pathlib import Path

import pytest
import requests

# Ensure repo root on sys.path for the flat module layout.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import llm_client  # noqa: E402


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.reason = "OK" if status_code < 400 else "Error"
        self.text = text if text is not None else json.dumps(payload)
        self.url = "https://example.test"

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} {self.reason}", response=self)


def gemini_envelope(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class FakeGemini:
    """Records outbound calls made through requests.post in llm_client."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(gemini_envelope(""))
        self.error = None

    def reply_text(self, text):
        self.response = FakeResponse(gemini_envelope(text))

    def reply(self, response):
        self.response = response

    def raise_error(self, error):
        self.error = error

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr(llm_client.requests, "post", fake)
    return fake


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def event_body():
    return {
        "gesture": "thumb_press",
        "selected_text": "const Vitals = () => null;",
        "command": "health_dashboard",
    }


@pytest.fixture
def valid_result():
    return {
        "action": "code_insert",
        "content": "const usePatients = async () => (await fetch('/api/patients')).json();",
        "haptic_feedback": "short_vibrate",
        "next_gesture": "Ring rotate to review vitals chart",
    }
