from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging

import config
from errors import ConfigurationError
from log import setup_logging
from models import ErrorResponse, GestureEvent, WorkflowResult
from workflow_proxy import create_proxy

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="WorkflowGenie API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"❌ Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


@app.post(
    "/api/workflow",
    response_model=WorkflowResult,
    responses={500: {"model": ErrorResponse}},
)
def workflow(event: GestureEvent):
    """
    Gesture -> generated workflow result.

    Workflow:
    1. Credential check (500 {"error": ...} if GEMINI_API_KEY is missing, no LLM call)
    2. Prompt built from the fixed instruction template + serialized event
    3. One Gemini call, JSON-typed, temperature 0.1
    4. Response text normalized, parsed and validated
    5. Any generation failure -> fixed notification fallback (still HTTP 200)
    """
    logger.info(f"📝 Workflow request: {event.gesture.value} / {event.command.value}")
    proxy = create_proxy()
    return proxy.run(event)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "WorkflowGenie API"}


if __name__ == "__main__":
    uvicorn.run(
        "API:app",
        host=config.HOST,
        port=config.PORT,
        reload=True
    )
