import re

from nemo.errors import DegenerateOutputError

_INST_SPAN = re.compile(r"\[INST\].*?\[/INST\]", re.DOTALL)
_SEQUENCE_MARKERS = re.compile(r"<s>|</s>")


def sanitize(raw: str, original_prompt: str = "") -> str:
    """Strip prompt echo and template markers from a raw completion."""
    text = raw or ""
    if original_prompt and text.startswith(original_prompt):
        text = text[len(original_prompt):]
    text = _INST_SPAN.sub("", text)
    text = _SEQUENCE_MARKERS.sub("", text)
    return text.strip()


def ensure_substantial(text: str, min_chars: int) -> str:
    """Reject replies shorter than ``min_chars`` (tunable, see settings)."""
    if not text or len(text) < min_chars:
        raise DegenerateOutputError(
            f"Reply too short ({len(text)} < {min_chars} chars)"
        )
    return text
