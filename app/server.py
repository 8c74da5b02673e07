from dotenv import load_dotenv
import os

load_dotenv()
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router as api_router
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.services.proofreading_service import ProofreadingService, build_llm_client, is_test_mode


def validate_startup_config():
    """Validiert kritische Umgebungsvariablen beim Startup (fail-fast)."""
    errors = []

    # Prüfe OPENAI_API_KEY (wird für LLM-Calls benötigt, außer im TEST_MODE)
    if not is_test_mode() and not os.getenv("OPENAI_API_KEY"):
        errors.append(
            "OPENAI_API_KEY is not set. "
            "Set it in .env file or as environment variable. "
            "Required for LLM-based proofreading."
        )

    if settings.max_lines < 1 or settings.max_chars < 1:
        errors.append("MAX_LINES and MAX_CHARS must be positive.")

    if errors:
        error_msg = "Startup validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    # Validierung beim Startup
    validate_startup_config()
    # ein langlebiger LLM-Client für den ganzen Prozess
    app.state.proofreading_service = ProofreadingService(build_llm_client(settings), settings)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Proofread API running"}
