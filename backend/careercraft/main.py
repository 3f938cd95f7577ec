"""CareerCraft: FastAPI Application Entry Point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careercraft import models  # noqa: F401  registers tables on Base.metadata
from careercraft.config import settings
from careercraft.database import engine, Base
from careercraft.errors import register_error_handlers
from careercraft.logging_config import configure_logging
from careercraft.routers import users, dashboard, resume, cover_letters, interview
from careercraft.services.ai_client import ai_provider_name, ai_health_check

configure_logging()
logger = logging.getLogger(__name__)

# Create all tables on startup
Base.metadata.create_all(bind=engine)

_cors_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]

app = FastAPI(
    title="CareerCraft",
    description="AI-powered career growth: insights, resumes, cover letters and interview prep.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Revalidate-Path"],
)

# Routers
app.include_router(users.router)
app.include_router(dashboard.router)
app.include_router(resume.router)
app.include_router(cover_letters.router)
app.include_router(interview.router)


@app.on_event("startup")
async def on_startup():
    """Log which AI provider is active."""
    provider = ai_provider_name()
    if provider == "none":
        logger.warning(
            "AI NOT CONFIGURED: set GEMINI_API_KEY, the ORACLE_GENAI_* settings "
            "or ANTHROPIC_API_KEY in backend/.env and restart. Visit /api/health/ai to verify."
        )
    else:
        logger.info("AI provider: %s", provider)


@app.get("/")
def root():
    return {
        "name": "CareerCraft API",
        "version": "1.0.0",
        "docs": "/docs",
        "ai_provider": ai_provider_name(),
    }


@app.get("/health")
def health():
    return {"status": "ok", "ai_provider": ai_provider_name()}


@app.get("/api/health/ai")
async def health_ai():
    """Live connectivity test for the configured AI provider.

    Returns:
        provider: which AI is active
        status:   "ok" | "error" | "unconfigured"
        test_reply / error: result of a tiny test call
    """
    return await ai_health_check()
