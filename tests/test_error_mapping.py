from play2win.errors import (
    AggregationError,
    APIError,
    Play2WinError,
    SourceUnavailableError,
)


def test_apierror_to_dict():
    err = APIError("Gemini", "TIMEOUT", "Gemini failed", "details")
    data = err.to_dict()
    assert data["source"] == "Gemini"
    assert data["code"] == "TIMEOUT"
    assert "details" in data


def test_apierror_to_dict_omits_empty_details():
    assert "details" not in APIError("Gemini", "X", "msg").to_dict()


def test_pipeline_errors_are_distinct():
    src = SourceUnavailableError("/tmp/missing.csv", FileNotFoundError("nope"))
    agg = AggregationError(["goalsTimeline"])
    assert isinstance(src, Play2WinError) and isinstance(agg, Play2WinError)
    assert not isinstance(src, AggregationError)
    assert "/tmp/missing.csv" in str(src)
    assert "goalsTimeline" in str(agg)
