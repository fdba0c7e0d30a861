"""
Build the system instruction + content payload for the generation call

Purpose: render the fixed instruction template (persona, output schema, domain rules) and
serialize the gesture event as the call's content.

Input: GestureEvent, optional template overrides.

Output: (system_instruction, contents) strings ready for llm_client.GeminiClient.generate().

Example: contents == '{"gesture": "thumb_press", "selected_text": "", "command": "health_dashboard"}'

Notes: the template is data, not code. New wording goes into PROMPT_DEFAULTS, not into build_prompt().
"""
import json
from string import Template
from typing import Dict, Optional, Tuple

from models import MAX_CONTENT_CHARS, GestureEvent

SYSTEM_INSTRUCTION_TEMPLATE = Template("""You are $persona, an intelligent AI plugin for $hardware in $ide.
Your Role: Gesture -> generate $target_code -> insert via JSON.

Available Mock API Endpoints (Base URL: $api_base):
$api_endpoints

Rules:
1. $target_code only ($domain_features).
2. $ide format ($code_style).
3. $domain_context.
4. Forms MUST include real-time validation feedback and clear error messages using React state.
5. Use the provided mock API endpoints in generated code.
6. Output MUST be STRICT JSON matching this schema:
{
  "action": "code_insert" | "notification",
  "content": "string (max $max_content_chars chars)",
  "haptic_feedback": "short_vibrate" | "long_pulse" | "none",
  "next_gesture": "string"
}
Respond ONLY with the JSON object. No markdown, no explanations.""")

PROMPT_DEFAULTS = {
    "persona": "CursorGenie",
    "hardware": "Logitech MX Master4 (Actions Ring) + MX Creative Console",
    "ide": "Cursor.IDE",
    "target_code": "React Native telehealth code",
    "domain_features": "patient fetch, vitals charts, booking UI",
    "code_style": "async functions, hooks, Tailwind",
    "domain_context": "Bengaluru hospital context (vitals monitoring, appointment flow)",
    "api_base": "/api",
    "api_endpoints": "\n".join([
        "- GET /patients: Fetch all patients",
        "- GET /patients/:id: Fetch single patient",
        "- POST /patients: Create new patient (Body: { name, age, symptoms })",
    ]),
    "max_content_chars": str(MAX_CONTENT_CHARS),
}


def build_system_instruction(overrides: Optional[Dict[str, str]] = None) -> str:
    values = dict(PROMPT_DEFAULTS)
    if overrides:
        values.update(overrides)
    # substitute() raises KeyError on a missing field
    return SYSTEM_INSTRUCTION_TEMPLATE.substitute(values)


def build_contents(event: GestureEvent) -> str:
    return json.dumps(event.model_dump(mode="json"))


def build_prompt(event: GestureEvent, overrides: Optional[Dict[str, str]] = None) -> Tuple[str, str]:
    return build_system_instruction(overrides), build_contents(event)
