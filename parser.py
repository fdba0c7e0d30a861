"""
Parse normalized model text into a JSON object

Purpose: turn the cleaned response text into a dict, failing loudly on anything unusable.

Input: normalized text from normalizer.normalize_response_text().

Output: dict (the raw, not yet validated workflow object).

Example: parse_workflow_json('{"action": "code_insert"}') -> {"action": "code_insert"}
"""
import json
from typing import Any, Dict

from errors import GenerationError


def parse_workflow_json(text: str) -> Dict[str, Any]:
    if not text:
        raise GenerationError("Empty response from model")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Model returned non-JSON text: {e}") from e

    if not isinstance(parsed, dict):
        raise GenerationError(f"Model returned JSON {type(parsed).__name__}, expected object")

    return parsed
