"""
Request / response models shared by the proxy and the gesture simulator.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

MAX_CONTENT_CHARS = 300


class Gesture(str, Enum):
    ring_rotate_cw = "ring_rotate_cw"
    thumb_press = "thumb_press"
    console_dial1_press = "console_dial1_press"


class Command(str, Enum):
    refactor_telehealth = "refactor_telehealth"
    patient_api = "patient_api"
    health_dashboard = "health_dashboard"


class Action(str, Enum):
    code_insert = "code_insert"
    notification = "notification"


class HapticFeedback(str, Enum):
    short_vibrate = "short_vibrate"
    long_pulse = "long_pulse"
    none = "none"


class GestureEvent(BaseModel):
    """One simulated hardware input. Frozen once built."""
    model_config = ConfigDict(frozen=True)

    gesture: Gesture
    selected_text: str = ""
    command: Command


class WorkflowResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Action
    content: str = Field(max_length=MAX_CONTENT_CHARS)
    haptic_feedback: HapticFeedback
    next_gesture: str


class ErrorResponse(BaseModel):
    error: str


FALLBACK_RESULT = WorkflowResult(
    action=Action.notification,
    content="Error generating telehealth code.",
    haptic_feedback=HapticFeedback.none,
    next_gesture="Thumb press to retry",
)
