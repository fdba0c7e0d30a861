"""
WORKFLOW PROXY
Turns one GestureEvent into one WorkflowResult.

- Checks the credential (read at call time, no outbound call without it)
- Builds the system instruction + content payload
- Makes exactly one generation call
- Normalizes, parses and validates the returned text
- Converts every generation failure into the fixed fallback notification
"""
from typing import Callable, Optional
import logging

import config
from errors import ConfigurationError, GenerationError
from llm_client import GeminiClient, create_client
from log import log_workflow
from models import FALLBACK_RESULT, GestureEvent, WorkflowResult
from normalizer import normalize_response_text
from parser import parse_workflow_json
from prompt_builder import build_prompt
from rules_engine import validate_workflow_result

logger = logging.getLogger(__name__)


class WorkflowProxy:
    """Request -> validate -> call -> repair -> respond."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client_factory: Callable[[str], GeminiClient] = create_client
    ):
        self.api_key = api_key if api_key is not None else config.get_api_key()

        if not self.api_key:
            logger.error(f"[Workflow] {config.API_KEY_ENV} is not set")
            raise ConfigurationError(f"{config.API_KEY_ENV} is not set")

        self.client = client_factory(self.api_key)

    def run(self, event: GestureEvent) -> WorkflowResult:
        """Return the model's WorkflowResult, or FALLBACK_RESULT on any generation failure."""
        logger.info(f"[Workflow] gesture={event.gesture.value} command={event.command.value}")

        try:
            result = self._generate(event)
        except GenerationError as e:
            logger.error(f"[Workflow] Generation failed: {e}", exc_info=True)
            return self._fallback(event)
        except Exception as e:
            logger.error(f"[Workflow] Unexpected error: {str(e)}", exc_info=True)
            return self._fallback(event)

        log_workflow(event, result, fallback=False)
        return result

    def _fallback(self, event: GestureEvent) -> WorkflowResult:
        log_workflow(event, FALLBACK_RESULT, fallback=True)
        return FALLBACK_RESULT

    def _generate(self, event: GestureEvent) -> WorkflowResult:
        system_instruction, contents = build_prompt(event)
        raw_text = self.client.generate(system_instruction, contents)
        text = normalize_response_text(raw_text)
        data = parse_workflow_json(text)
        return validate_workflow_result(data)


def create_proxy() -> WorkflowProxy:
    """Create a WorkflowProxy from current configuration. Raises ConfigurationError."""
    return WorkflowProxy()
