"""
Central configuration

Purpose: single source of truth for the API key, model name, endpoint, timeouts and default params.

Input: environment variables (optionally loaded from a .env file next to this module).

Output: constants used by other modules, plus get_api_key() which is read at call time.

Example: GEMINI_API_KEY=AIza... python API.py
"""
import os

from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(__file__), '.env')
load_dotenv(dotenv_path=env_path)

API_KEY_ENV = "GEMINI_API_KEY"
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))
LLM_TEMPERATURE = 0.1
LLM_RESPONSE_MIME_TYPE = "application/json"

HOST = "0.0.0.0"
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBOUNCE_MS = 200
HAPTIC_PULSE_SECONDS = 0.5
WORKFLOW_API_URL = os.getenv("WORKFLOW_API_URL", f"http://localhost:{PORT}")
WORKFLOW_TIMEOUT = float(os.getenv("WORKFLOW_TIMEOUT", "90"))


def get_api_key():
    """Return the configured credential, or None when missing or blank."""
    api_key = os.getenv(API_KEY_ENV)
    if api_key is None or not api_key.strip():
        return None
    return api_key.strip()
