from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Protocol

from .. import settings
from ..config import setup_logger
from ..domain.contracts import NarrativeResponse
from ..errors import SourceUnavailableError
from ..prompts import (
    CONCLUSION_MODEL_PROMPT,
    CONCLUSION_RESEARCHER_PROMPT,
    MODEL_SYSTEM_PROMPT,
    RESEARCHER_SYSTEM_PROMPT,
    build_data_summary,
    build_prompt,
    build_synthesis_prompt,
    find_relevant_rows,
    format_relevant_rows,
)
from ..tabular_loader import parse_csv_rows, read_source_text

logger = setup_logger(__name__)

Row = Mapping[str, str]


class TextGenerator(Protocol):
    def generate(self, prompt: str): ...


def load_grounding_rows(path: Optional[str] = None) -> List[Row]:
    """Rows used to ground prompts; an unreadable file grounds on nothing."""
    try:
        text = read_source_text(path or settings.MATCH_DATA_PATH)
    except SourceUnavailableError as exc:
        logger.error("grounding_rows_unavailable: %s", exc)
        return []
    return parse_csv_rows(text)


def _summary(rows: Iterable[Row], query: str, include_game_id: bool, closing: str = "") -> str:
    relevant = find_relevant_rows(rows, query)
    return build_data_summary(format_relevant_rows(relevant, include_game_id=include_game_id), closing)


def researcher_response(query: str, rows: Iterable[Row], client: TextGenerator) -> NarrativeResponse:
    summary = _summary(rows, query, include_game_id=True, closing="Use this data to answer the user's query.")
    result = client.generate(build_prompt(RESEARCHER_SYSTEM_PROMPT, summary, query))
    return {"response": result.text}


def model_prediction(query: str, rows: Iterable[Row], client: TextGenerator) -> NarrativeResponse:
    # Game IDs are kept out of the model take's grounding rows
    summary = _summary(
        rows,
        query,
        include_game_id=False,
        closing="Use this data to answer the user's query with advanced AI model analysis.",
    )
    result = client.generate(build_prompt(MODEL_SYSTEM_PROMPT, summary, query))
    return {"response": result.text}


def coach_conclusion(
    query: Optional[str],
    rows: Iterable[Row],
    client: TextGenerator,
    researcher: Optional[str] = None,
    model: Optional[str] = None,
) -> NarrativeResponse:
    """
    Synthesize a coach-style verdict from a researcher take and a model take.

    Takes that are not supplied are generated from ``query`` first; a
    ValueError is raised when one is missing and there is no query.
    """
    if (not researcher or not model) and not query:
        raise ValueError("Query is required when researcher/model texts are not provided")

    if not researcher or not model:
        summary = _summary(list(rows), query or "", include_game_id=False)
        if not researcher:
            researcher = client.generate(
                build_prompt(CONCLUSION_RESEARCHER_PROMPT, summary, query)
            ).text
        if not model:
            model = client.generate(build_prompt(CONCLUSION_MODEL_PROMPT, summary, query)).text

    synthesis = client.generate(build_synthesis_prompt(researcher, model))
    return {"response": synthesis.text, "researcher": researcher, "model": model}
