import pytest

from readshelf.processors.ai import create_ai_client
from readshelf.processors.ai.gemini import GeminiClient
from readshelf.processors.ai.ollama import OllamaClient


class _Resp:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")

    def json(self):
        return self._payload


def _capture_post(monkeypatch, module, response):
    calls = []

    def fake_post(url, json=None, timeout=None, **kwargs):
        calls.append({"url": url, "json": json, "timeout": timeout})
        return response

    monkeypatch.setattr(module.requests, "post", fake_post)
    return calls


def test_factory_defaults_to_gemini(monkeypatch):
    monkeypatch.delenv("PROCESSING_BACKEND", raising=False)
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    assert isinstance(create_ai_client(), GeminiClient)


def test_factory_selects_ollama_from_env(monkeypatch):
    monkeypatch.setenv("PROCESSING_BACKEND", "Ollama")
    assert isinstance(create_ai_client(), OllamaClient)


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_ai_client(backend="openai")


def test_gemini_requires_api_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(RuntimeError):
        GeminiClient()


def test_gemini_extract_article_info(monkeypatch):
    from readshelf.processors.ai import gemini

    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    text = '{"title": "T", "summary": "S", "imageUrl": "", "dataAiHint": "city"}'
    calls = _capture_post(
        monkeypatch,
        gemini,
        _Resp({"candidates": [{"content": {"parts": [{"text": text}]}}]}),
    )

    result = GeminiClient().extract_article_info("https://example.com/a", page_text="Body")

    assert result == {"title": "T", "summary": "S", "imageUrl": "", "dataAiHint": "city"}
    assert "gemini-test:generateContent" in calls[0]["url"]
    prompt = calls[0]["json"]["contents"][0]["parts"][0]["text"]
    assert "https://example.com/a" in prompt
    assert "Body" in prompt


def test_gemini_without_candidates_raises_value_error(monkeypatch):
    from readshelf.processors.ai import gemini

    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    _capture_post(monkeypatch, gemini, _Resp({"candidates": []}))
    with pytest.raises(ValueError):
        GeminiClient().predict_relevance("Article", "History")


def test_ollama_predict_relevance(monkeypatch):
    from readshelf.processors.ai import ollama

    monkeypatch.setenv("OLLAMA_HOST", "http://ollama.local:11434/")
    calls = _capture_post(
        monkeypatch,
        ollama,
        _Resp({"response": '{"relevanceScore": 0.3, "reasoning": "Loosely related."}'}),
    )

    result = OllamaClient().predict_relevance("Article", "History")

    assert result == {"relevanceScore": 0.3, "reasoning": "Loosely related."}
    assert calls[0]["url"] == "http://ollama.local:11434/api/generate"
    assert calls[0]["json"]["format"] == "json"
    assert "History" in calls[0]["json"]["prompt"]
