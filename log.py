"""
Logging & request traces

Purpose: configure process-wide logging and write one trace line per workflow request.

Input: gesture event, final result, and whether the fallback was used.

Output: log records under the "workflow.trace" logger.

Example: [Trace] gesture=thumb_press command=health_dashboard action=code_insert fallback=False
"""
import logging

import config

trace_logger = logging.getLogger("workflow.trace")


def resolve_level(level=None):
    """Accept LOG_LEVEL=debug as well as DEBUG or a numeric level."""
    level = level if level is not None else config.LOG_LEVEL
    if isinstance(level, str):
        return level.strip().upper()
    return level


def setup_logging(level=None):
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def log_workflow(event, result, fallback: bool) -> None:
    trace_logger.info(
        f"[Trace] gesture={event.gesture.value} command={event.command.value} "
        f"selected_text_len={len(event.selected_text)} action={result.action.value} "
        f"haptic={result.haptic_feedback.value} fallback={fallback}"
    )
