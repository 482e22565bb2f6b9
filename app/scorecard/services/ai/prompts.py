"""
Prompt construction for scorecard extraction.

The instruction is fixed; only the provider identity, the extracted PDF
text and the attached images vary per request.
"""

from typing import Any

from ...models import EncodedImage, SubmissionRequest

NO_PDF_TEXT_PLACEHOLDER = "[No PDFs uploaded or no text extracted]"

SCORECARD_INSTRUCTION = """
You are a Healthcare Quality Operations Expert and Performance Coach.
Extract provider performance metrics from the supplied scorecard(s).

Rules:
- Return JSON ONLY. No markdown. No commentary.
- Clean measure names: remove (CMS...) and (NQF...) codes.
- Do not invent numbers. If not found, use null (provider fields) or omit the measure entry.
- Measures must include numerator and denominator when present.

Return JSON with this schema:

{
  "provider": {
    "providerName": string,
    "reportingMonth": string,
    "reportingYear": string,
    "currentEncounters": number|null,
    "priorEncounters": number|null,
    "awvsCompleted": number|null,
    "awvsGoal": number|null,
    "tocsCompleted": number|null,
    "tocsGoal": number|null
  },
  "measures": [
    { "name": string, "numerator": number, "denominator": number }
  ],
  "narrative": {
    "why": string,
    "how": string,
    "priorities": [
      { "t": string, "d": string },
      { "t": string, "d": string },
      { "t": string, "d": string }
    ]
  }
}
"""


def build_user_text(submission: SubmissionRequest, combined_text: str) -> str:
    """Build the user message text for a submission."""
    return (
        f"Provider: {submission.provider_name}\n"
        f"Month: {submission.reporting_month}\n"
        f"Year: {submission.reporting_year}\n\n"
        f"PDF Extracted Text (if any):\n{combined_text or NO_PDF_TEXT_PLACEHOLDER}\n\n"
        f"{SCORECARD_INSTRUCTION}"
    )


def build_input(user_text: str, images: list[EncodedImage]) -> list[dict[str, Any]]:
    """
    Build the Responses API input: one user message holding the text
    followed by every image, in order.
    """
    content: list[dict[str, Any]] = [{"type": "input_text", "text": user_text}]
    for image in images:
        content.append({"type": "input_image", "image_url": image.data_url})

    return [{"role": "user", "content": content}]
