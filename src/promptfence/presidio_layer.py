"""Optional NER layer — Presidio recognizers mapped onto our data types.

Off by default.  Useful for catching free-form locations the ADDRESS
heuristics miss.  Requires the ``presidio`` extra and a spaCy model.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .types import DataType, Match

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

# Lazy singleton — don't load spaCy until first use
_engine: AnalyzerEngine | None = None
_engine_lang: str = ""

ENTITY_MAP: dict[str, DataType] = {
    "EMAIL_ADDRESS": DataType.EMAIL,
    "PHONE_NUMBER": DataType.PHONE,
    "IBAN_CODE": DataType.IBAN,
    "CREDIT_CARD": DataType.CREDIT_CARD,
    "LOCATION": DataType.ADDRESS,
}


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """Lazy-init the Presidio analyzer engine."""
    global _engine, _engine_lang
    if _engine is None or _engine_lang != language:
        from presidio_analyzer import AnalyzerEngine
        from presidio_analyzer.nlp_engine import NlpEngineProvider

        provider = NlpEngineProvider(nlp_configuration={
            "nlp_engine_name": "spacy",
            "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
        })
        nlp_engine = provider.create_engine()
        _engine = AnalyzerEngine(nlp_engine=nlp_engine, supported_languages=[language])
        _engine_lang = language
    return _engine


def scan_presidio(
    text: str,
    *,
    language: str = "en",
    score_threshold: float = 0.35,
    exclude_spans: list[tuple[int, int]] | None = None,
) -> list[Match]:
    """Run Presidio analysis on text.

    Args:
        text: Input text to scan.
        language: ISO language code.
        score_threshold: Minimum confidence score.
        exclude_spans: Spans already found by the built-in detectors; overlaps are skipped.
    """
    engine = _get_engine(language)
    results = engine.analyze(
        text=text,
        language=language,
        entities=list(ENTITY_MAP),
        score_threshold=score_threshold,
    )

    exclude = exclude_spans or []
    matches: list[Match] = []
    for r in results:
        data_type = ENTITY_MAP.get(r.entity_type)
        if data_type is None:
            continue
        # Built-in detectors win for anything they already cover
        if any(r.start < e and r.end > s for s, e in exclude):
            continue
        matches.append(Match(
            type=data_type,
            start=r.start,
            end=r.end,
            text=text[r.start:r.end],
        ))

    return sorted(matches, key=lambda m: m.start)
