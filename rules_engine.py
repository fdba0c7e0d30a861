"""
Deterministic checks on the model output

Purpose: enforce the declared WorkflowResult schema independent of the LLM: enum values,
content length, string fields.

Input: parsed dict from parser.parse_workflow_json().

Output: WorkflowResult, or GenerationError if the object breaks the schema.

Example: {"action": "delete_all", ...} -> GenerationError

Notes: keys outside the schema are dropped, not rejected.
"""
from typing import Any, Dict

from pydantic import ValidationError

from errors import GenerationError
from models import WorkflowResult


def validate_workflow_result(data: Dict[str, Any]) -> WorkflowResult:
    try:
        return WorkflowResult.model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise GenerationError(f"Model output violates WorkflowResult schema: {', '.join(fields)}") from e
