from flask import Flask, request
from datetime import datetime, timezone
from typing import Optional

from . import settings
from .config import setup_logger
from .aggregation import comprehensive_data_from_text
from .app_utils import apply_cors_headers, legacy_endpoint, make_error, make_ok
from .errors import AggregationError, SourceUnavailableError
from .gemini_client import GeminiClient, classify_generation_error
from .services.narratives import (
    coach_conclusion,
    load_grounding_rows,
    model_prediction,
    researcher_response,
)
from .tabular_loader import read_source_text
from .validators import validate_conclusion_request, validate_query

app = Flask(__name__)

logger = setup_logger(__name__)


def _get_client() -> GeminiClient:
    return GeminiClient()


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _missing_key_error():
    return make_error(
        "Gemini API key not configured",
        status_code=500,
        details="Please set GEMINI_API_KEY in your .env file",
    )


def _generation_failed(exc: Exception, fallback_message: str):
    api_error, status_code = classify_generation_error(exc)
    if api_error.code == "GENERATION_FAILED":
        api_error.message = fallback_message
    logger.error("generation_failed: code=%s error=%s", api_error.code, exc)
    return make_error(api_error, status_code=status_code)


@app.after_request
def _cors(response):
    if request.path.startswith("/api/"):
        apply_cors_headers(response, settings.CORS_ORIGINS)
    return response


@app.route("/status", methods=["GET"])
def status():
    """Health-check endpoint reporting response format mode."""
    from .config import USE_LEGACY_RESPONSES

    return make_ok(
        {
            "legacy_mode": USE_LEGACY_RESPONSES,
            "match_data_path": settings.MATCH_DATA_PATH,
            "llm_configured": bool(settings.GEMINI_API_KEY),
        }
    )


@app.route("/health", methods=["GET"])
def health():
    return make_ok(
        {"ok": True, "ts": datetime.now(timezone.utc).isoformat()},
        "OK",
        status_code=200,
    )


@app.route("/api/comprehensive-data", methods=["GET"])
@legacy_endpoint
def comprehensive_data():
    """Aggregated dashboard views, recomputed from the match data file."""
    try:
        text = read_source_text(settings.MATCH_DATA_PATH)
        payload = comprehensive_data_from_text(text, delimiter=settings.CSV_DELIMITER, logger=logger)
    except SourceUnavailableError as exc:
        return make_error("Failed to read match data", status_code=500, details=str(exc))
    except AggregationError as exc:
        return make_error(
            "Comprehensive data missing required properties",
            status_code=500,
            details=str(exc),
        )
    except Exception as exc:
        logger.exception("comprehensive_data_failed")
        return make_error(
            "Failed to process comprehensive data", status_code=500, details=str(exc)
        )
    return make_ok(payload)


@app.route("/api/researcher", methods=["POST"])
@legacy_endpoint
def researcher():
    body = _json_body()
    query, _warnings = validate_query(body.get("query"))
    if query is None:
        return make_error("Query is required", status_code=400)

    client = _get_client()
    if not client.configured:
        return _missing_key_error()

    try:
        return make_ok(researcher_response(query, load_grounding_rows(), client))
    except Exception as exc:
        return _generation_failed(exc, "Failed to generate response")


@app.route("/api/model-pred", methods=["POST"])
@legacy_endpoint
def model_pred():
    body = _json_body()
    query, _warnings = validate_query(body.get("query"))
    if query is None:
        return make_error("Query is required", status_code=400)

    client = _get_client()
    if not client.configured:
        return _missing_key_error()

    try:
        return make_ok(model_prediction(query, load_grounding_rows(), client))
    except Exception as exc:
        return _generation_failed(exc, "Failed to generate prediction")


@app.route("/api/conclusions", methods=["POST"])
@legacy_endpoint
def conclusions():
    body = _json_body()
    query, researcher_text, model_text, warnings = validate_conclusion_request(body)
    if "conclusion_inputs_missing" in warnings:
        return make_error("Either query or researcher/model texts are required", status_code=400)
    if (researcher_text is None or model_text is None) and query is None:
        return make_error(
            "Query is required when researcher/model texts are not provided", status_code=400
        )

    client = _get_client()
    if not client.configured:
        return _missing_key_error()

    rows: Optional[list] = None
    if researcher_text is None or model_text is None:
        rows = load_grounding_rows()

    try:
        payload = coach_conclusion(
            query, rows or [], client, researcher=researcher_text, model=model_text
        )
    except Exception as exc:
        return _generation_failed(exc, "Failed to generate conclusion")
    return make_ok(payload)


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=settings.PORT)
