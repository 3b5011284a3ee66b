"""
Unified Backend Entrypoint for the SwasthyaLink gateway.

Composes three routers:
- /api/chatbot and /api/gemini → Health assistant chat (Dialogflow + Gemini)
- /api/users/* → User directory search
- /api/family/* → Family requests and networks

Each application built by ``create_app`` owns its own in-memory stores and
upstream clients; ``app`` is the process-wide instance served by uvicorn.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.chatbot.api import router as chatbot_router
from backend.chatbot.gateway import ChatGateway
from backend.chatbot.gemini import GeminiClient
from backend.chatbot.intent import IntentDetector, build_intent_detector
from backend.config import Settings, get_settings
from backend.directory.api import router as users_router
from backend.directory.users import UserDirectory
from backend.errors import GatewayError
from backend.family.api import router as family_router
from backend.family.service import FamilyService

logger = logging.getLogger(__name__)


# =============================================================================
# LOGGING
# =============================================================================

def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
    )


# =============================================================================
# ERROR HANDLERS
# =============================================================================
# Every failure leaves the API as {"success": false, "error": <message>}.

async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "error": detail})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )


# =============================================================================
# FASTAPI APP CREATION
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    intent_detector: Optional[IntentDetector] = None,
    gemini: Optional[GeminiClient] = None,
    directory: Optional[UserDirectory] = None,
) -> FastAPI:
    """Build an application with fresh stores; upstreams may be injected."""
    settings = settings or get_settings()
    directory = directory or UserDirectory()

    app = FastAPI(
        title="SwasthyaLink API",
        description="Health assistant chat and family network gateway",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.state.settings = settings
    app.state.user_directory = directory
    app.state.family_service = FamilyService(directory=directory)
    app.state.chat_gateway = ChatGateway(
        intent_detector=intent_detector or build_intent_detector(settings),
        gemini=gemini or GeminiClient(settings),
    )

    # =========================================================================
    # HEALTH CHECK
    # =========================================================================

    @app.get("/api/health")
    async def health_check():
        """Unified health check endpoint."""
        gateway: ChatGateway = app.state.chat_gateway
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "dialogflow": gateway.dialogflow_status,
            "gemini": gateway.gemini_status,
        }

    app.include_router(chatbot_router)
    app.include_router(users_router)
    app.include_router(family_router)

    return app


# =============================================================================
# PROCESS-WIDE APP
# =============================================================================

_settings = get_settings()
configure_logging(_settings)
app = create_app(_settings)


@app.on_event("startup")
async def startup_event():
    """Log startup information."""
    gateway: ChatGateway = app.state.chat_gateway
    base = f"http://localhost:{_settings.port}"
    logger.info("=" * 60)
    logger.info("SwasthyaLink API - Unified Backend")
    logger.info("=" * 60)
    logger.info("Health check: %s/api/health", base)
    logger.info("Chatbot endpoint: %s/api/chatbot (%s)", base, gateway.dialogflow_status)
    logger.info("Gemini endpoint: %s/api/gemini (%s)", base, gateway.gemini_status)
    logger.info("=" * 60)
