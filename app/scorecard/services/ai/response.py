"""
Locating the model's text in a Responses API result.

Each strategy inspects the response and returns the text it finds or None.
Strategies are tried in order and the first non-empty text wins. Responses
may be SDK objects or plain dicts.
"""

from typing import Any, Callable

OutputTextStrategy = Callable[[Any], str | None]


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def first_output_text_block(response: Any) -> str | None:
    """Text of the first ``output_text`` block in the first output item."""
    output = _get(response, "output")
    if not output:
        return None

    for block in _get(output[0], "content") or []:
        if _get(block, "type") == "output_text":
            return _get(block, "text")
    return None


def aggregated_output_text(response: Any) -> str | None:
    """The top-level ``output_text`` convenience field."""
    text = _get(response, "output_text")
    return text if isinstance(text, str) else None


OUTPUT_TEXT_STRATEGIES: list[OutputTextStrategy] = [
    first_output_text_block,
    aggregated_output_text,
]


def extract_output_text(
    response: Any,
    strategies: list[OutputTextStrategy] = OUTPUT_TEXT_STRATEGIES,
) -> str:
    """Return the first non-empty text found by ``strategies``, else ""."""
    for strategy in strategies:
        text = strategy(response)
        if text:
            return text
    return ""
