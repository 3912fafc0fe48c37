import pytest

from play2win.errors import APIError, LLMError
from play2win.gemini_client import GeminiClient, classify_generation_error


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    def __init__(self, name, outcome, calls):
        self.name = name
        self._outcome = outcome
        self._calls = calls

    def generate_content(self, prompt, request_options=None):
        self._calls.append((self.name, prompt, request_options))
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return FakeResponse(self._outcome)


def make_client(outcomes, models=("m1", "m2", "m3"), timeout=12):
    calls = []

    def factory(name):
        return FakeModel(name, outcomes[name], calls)

    return GeminiClient(api_key="k", models=models, timeout=timeout, model_factory=factory), calls


def test_first_model_answers():
    client, calls = make_client({"m1": "hello", "m2": "unused", "m3": "unused"})
    result = client.generate("prompt")
    assert (result.model, result.text) == ("m1", "hello")
    assert calls == [("m1", "prompt", {"timeout": 12})]


def test_unavailable_models_fall_through():
    client, calls = make_client(
        {
            "m1": Exception("404 models/m1 is not found for API version v1beta"),
            "m2": Exception("Model is overloaded"),
            "m3": "answer",
        }
    )
    result = client.generate("p")
    assert result.model == "m3"
    assert [c[0] for c in calls] == ["m1", "m2", "m3"]


def test_other_errors_propagate_immediately():
    client, calls = make_client({"m1": Exception("API key not valid"), "m2": "x", "m3": "x"})
    with pytest.raises(Exception, match="API key not valid"):
        client.generate("p")
    assert len(calls) == 1


def test_empty_text_tries_next_model():
    client, _ = make_client({"m1": "   ", "m2": "ok", "m3": "x"})
    assert client.generate("p").model == "m2"


def test_exhausted_list_raises_last_error():
    client, _ = make_client({"m1": Exception("not found"), "m2": Exception("404"), "m3": Exception("model gone")})
    with pytest.raises(Exception, match="model gone"):
        client.generate("p")


def test_no_models_raises_llm_error():
    client = GeminiClient(api_key="k", models=[], model_factory=lambda name: None)
    with pytest.raises(LLMError):
        client.generate("p")


def test_missing_key_is_not_configured():
    client = GeminiClient(api_key="", models=["m1"])
    assert client.configured is False
    with pytest.raises(APIError) as excinfo:
        client.generate("p")
    assert excinfo.value.code == "NOT_CONFIGURED"


@pytest.mark.parametrize(
    "message, code, status",
    [
        ("API key not valid. Please pass a valid API key.", "INVALID_KEY", 500),
        ("429 Quota exceeded for quota metric", "QUOTA_EXCEEDED", 429),
        ("rate limit hit", "RATE_LIMITED", 429),
        ("404 models/gemini-pro is not found", "MODEL_UNAVAILABLE", 500),
        ("403 Permission denied on resource", "PERMISSION_DENIED", 403),
        ("Connection reset by peer", "NETWORK", 500),
        ("something odd", "GENERATION_FAILED", 500),
    ],
)
def test_classify_generation_error(message, code, status):
    api_error, status_code = classify_generation_error(Exception(message))
    assert api_error.code == code
    assert status_code == status
    assert api_error.source == "Gemini"
