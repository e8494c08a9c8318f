import re

# Gemini may wrap JSON in markdown code blocks
_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(raw_text: str) -> str:
    """Remove a leading ```/```json marker and a trailing ``` marker, then trim."""
    if not raw_text:
        return ""
    json_str = _LEADING_FENCE.sub("", raw_text.strip())
    json_str = _TRAILING_FENCE.sub("", json_str)
    return json_str.strip()
