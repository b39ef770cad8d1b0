import re
from typing import Optional

_WS_RUN_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run (spaces, tabs, newlines) to one space and trim."""
    return _WS_RUN_RE.sub(" ", text).strip()


def narrow_to_tag(content: str, tag: str) -> Optional[str]:
    """
    Return the text between the first `<tag>` and the next `</tag>`, or None
    when the pair is absent. Used to skip prose around a wrapped edit region.
    """
    m = re.search(rf"<{re.escape(tag)}>(.*?)</{re.escape(tag)}>", content, flags=re.DOTALL)
    return m.group(1) if m else None
