"""Pull the JSON payload out of Gemini's free-text reply."""

import json
import re

from pydantic import ValidationError

from autofit.config import MAX_ACCESSORIES, MAX_PALETTE_COLORS, MAX_STYLING_TIPS
from autofit.errors import ResponseParseError
from autofit.logging import get_logger
from autofit.models import Accessory, Color, CoordinateResult

logger = get_logger(__name__)

JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```")


def extract_json_block(text: str) -> str:
    """Contents of the first ```json fence, or the whole text when there is none."""
    match = JSON_FENCE.search(text)
    return match.group(1) if match else text.strip()


def _score(value) -> int | None:
    if value is None:
        logger.warning("model_response_missing_score")
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 100:
        logger.warning("model_response_invalid_score", score=value)
        return None
    return round(value)


def _list(parsed: dict, key: str) -> list:
    value = parsed.get(key) or []
    if not isinstance(value, list):
        raise ResponseParseError(f"{key} is not a list")
    return value


def parse_coordinate_response(text: str, expect_score: bool = False) -> CoordinateResult:
    """
    Parse a coordination reply, filling defaults for absent fields.

    Raises ResponseParseError when the payload is not a JSON object or a field
    has the wrong shape. A missing or out-of-range score is left as None.
    """
    try:
        parsed = json.loads(extract_json_block(text))
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Could not parse AI response: {e}") from e

    if not isinstance(parsed, dict):
        raise ResponseParseError("AI response JSON is not an object")

    try:
        return CoordinateResult(
            score=_score(parsed.get("score")) if expect_score or "score" in parsed else None,
            styling_tips=[str(tip) for tip in _list(parsed, "stylingTips")[:MAX_STYLING_TIPS]],
            accessories=[Accessory.model_validate(a) for a in _list(parsed, "accessories")[:MAX_ACCESSORIES]],
            color_palette=[
                c if isinstance(c, str) else Color.model_validate(c)
                for c in _list(parsed, "colorPalette")[:MAX_PALETTE_COLORS]
            ],
            overall_comment=str(parsed.get("overallComment") or ""),
        )
    except ValidationError as e:
        raise ResponseParseError(f"AI response has an unexpected shape: {e}") from e
