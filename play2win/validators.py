from typing import Any, List, Mapping, Optional, Tuple

from .config import setup_logger

logger = setup_logger(__name__)


class ValidationWarning(str):
    """Lightweight tag for soft validation warnings."""
    pass


def _clean_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def validate_query(raw: Any) -> Tuple[Optional[str], List[ValidationWarning]]:
    """Return (trimmed_query_or_None, warnings). Empty or missing queries soft-fail."""
    if raw is None:
        return None, [ValidationWarning("query_missing")]
    if not isinstance(raw, str):
        logger.warning("query_not_string: %r", type(raw).__name__)
        return None, [ValidationWarning("query_invalid")]
    query = raw.strip()
    if not query:
        return None, [ValidationWarning("query_empty")]
    return query, []


def validate_conclusion_request(
    body: Optional[Mapping[str, Any]],
) -> Tuple[Optional[str], Optional[str], Optional[str], List[ValidationWarning]]:
    """Normalize a conclusions body into (query, researcher_text, model_text, warnings).

    Warns with ``conclusion_inputs_missing`` when neither a query nor any
    prior analysis text was supplied.
    """
    body = body or {}
    query, warnings = validate_query(body.get("query"))
    researcher = _clean_text(body.get("researcher"))
    model = _clean_text(body.get("model"))
    if query is None and researcher is None and model is None:
        warnings.append(ValidationWarning("conclusion_inputs_missing"))
    return query, researcher, model, warnings
