"""
Normalization of the model's JSON output into an AnalysisResult.

The caller's identity fields always replace whatever the model returned,
measure names are stripped of CMS/NQF coding annotations, and measure
counts are coerced to numbers.
"""

import json
import logging
import math
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..models import AnalysisResult, Measure, Narrative, ProviderSummary, SubmissionRequest
from .exceptions import ParseError

logger = logging.getLogger(__name__)

CODING_ANNOTATION_PATTERN = re.compile(r"\s*\([^)]*(CMS|NQF)[^)]*\)\s*", re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r"\s+")

IDENTITY_KEYS = {
    "providerName",
    "reportingMonth",
    "reportingYear",
    "provider_name",
    "reporting_month",
    "reporting_year",
}


def clean_measure_name(name: Any) -> str:
    """
    Remove parenthesized CMS/NQF annotations and collapse whitespace.

    Examples:
        "Diabetes Control (NQF 0059)" -> "Diabetes Control"
        "A1c Testing (CMS122v10) Rate" -> "A1c Testing Rate"
    """
    if isinstance(name, bool) or not isinstance(name, (str, int, float)):
        return ""

    cleaned = CODING_ANNOTATION_PATTERN.sub(" ", str(name))
    return WHITESPACE_PATTERN.sub(" ", cleaned).strip()


def coerce_number(value: Any) -> int | float:
    """
    Coerce a raw count to a number, defaulting to 0.

    Missing values, booleans, non-numeric strings and non-finite numbers
    all become 0. Integral values are returned as int.
    """
    if isinstance(value, bool):
        return 0

    if isinstance(value, str):
        try:
            value = float(value.strip()) if value.strip() else 0
        except ValueError:
            return 0

    if not isinstance(value, (int, float)):
        return 0

    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        if value.is_integer():
            return int(value)
    return value


def normalize_measures(raw_measures: Any) -> list[Measure]:
    """Clean every measure entry, dropping those without a usable name."""
    if not isinstance(raw_measures, list):
        return []

    measures = []
    for entry in raw_measures:
        if not isinstance(entry, dict):
            continue
        name = clean_measure_name(entry.get("name"))
        if not name:
            continue
        measures.append(
            Measure(
                name=name,
                numerator=coerce_number(entry.get("numerator")),
                denominator=coerce_number(entry.get("denominator")),
            )
        )
    return measures


def _parse_payload(raw_text: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as e:
        logger.error("Model output is not valid JSON: %s", raw_text[:500])
        raise ParseError("Model did not return valid JSON", details=raw_text) from e

    if not isinstance(payload, dict):
        raise ParseError("Model did not return a JSON object", details=raw_text)
    return payload


def normalize_result(raw_text: str, submission: SubmissionRequest) -> AnalysisResult:
    """
    Parse and normalize the model's output.

    Args:
        raw_text: Text returned by the model.
        submission: The validated submission; its identity fields are
            authoritative.

    Returns:
        The normalized AnalysisResult.

    Raises:
        ParseError: If the text is not JSON or does not match the result shape.
    """
    payload = _parse_payload(raw_text)

    provider_data = payload.get("provider") or {}
    narrative_data = payload.get("narrative") or {}
    if not isinstance(provider_data, dict) or not isinstance(narrative_data, dict):
        raise ParseError("Model JSON does not match the expected schema", details=raw_text)

    provider_fields = {k: v for k, v in provider_data.items() if k not in IDENTITY_KEYS}

    try:
        provider = ProviderSummary.model_validate(
            {
                **provider_fields,
                "providerName": submission.provider_name,
                "reportingMonth": submission.reporting_month,
                "reportingYear": submission.reporting_year,
            }
        )
        narrative = Narrative.model_validate(narrative_data)
    except PydanticValidationError as e:
        logger.error("Model JSON does not match the expected schema: %s", e)
        raise ParseError(
            "Model JSON does not match the expected schema", details=raw_text
        ) from e

    measures = normalize_measures(payload.get("measures"))
    logger.info("Normalized %d measure(s) for %s", len(measures), submission.provider_name)

    return AnalysisResult(provider=provider, measures=measures, narrative=narrative)
