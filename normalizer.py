"""
Normalize raw model text before JSON parsing

Purpose: undo the wrapping an unreliable upstream sometimes puts around its JSON answer.

Input: raw response text (str or None).

Output: cleaned text; may be "" which the parser treats as a failure.

Example: '```json\\n{"action": "notification", ...}\\n```' -> '{"action": "notification", ...}'

Notes: each step is a plain str -> str function. Add new wrapping patterns to NORMALIZERS;
parser.py does not need to change.
"""
import re
from typing import Callable, List, Optional

FENCE_RE = re.compile(r"^```[ \t]*[A-Za-z0-9_-]*[ \t]*\r?\n?(.*?)\r?\n?```$", re.DOTALL)


def strip_whitespace(text: str) -> str:
    return text.strip()


def strip_bom(text: str) -> str:
    """Drop a byte-order mark, including one that follows leading whitespace."""
    return text.lstrip().lstrip("\ufeff")


def strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` (or bare ```) fence around the whole text."""
    match = FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


NORMALIZERS: List[Callable[[str], str]] = [
    strip_bom,
    strip_whitespace,
    strip_code_fence,
]


def normalize_response_text(text: Optional[str], steps: Optional[List[Callable[[str], str]]] = None) -> str:
    if not text:
        return ""
    for step in steps if steps is not None else NORMALIZERS:
        text = step(text)
    return text
