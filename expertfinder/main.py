#!/usr/bin/env python3
"""
ExpertFinder - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All business logic is in the modules, following black box principles.
"""

import asyncio
import logging
import logging.config as log_config
from contextlib import asynccontextmanager, suppress
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expertfinder import __version__
from expertfinder.config.provider import ConfigProvider, EnvConfigProvider
from expertfinder.logging_config import get_logging_config

# Import modules through their black box interfaces
from expertfinder.modules.api import (
    MessageResponse,
    SearchRequest,
    SearchResponse,
    TokenExchangeRequest,
    TokenExchangeResponse,
    TokenRejectedResponse,
)
from expertfinder.modules.auth import AuthenticationService, AuthFactory, TokenAuthority
from expertfinder.modules.config import ConfigModule, get_config
from expertfinder.modules.llm import OpenAIClient
from expertfinder.modules.render import render_answer
from expertfinder.modules.search import GoogleSearchClient
from expertfinder.modules.upstream import UpstreamServiceError, build_http_client

# Get configuration
config = get_config()

# Configure logging with health check suppression
log_config.dictConfig(get_logging_config(config.get("log_level")))
logger = logging.getLogger(__name__)

TOPIC_FALLBACK_LENGTH = 100
TOKEN_EXCHANGE_PATH = "/api/auth/validate"

router = APIRouter()


async def sweep_expired_sessions(authority: TokenAuthority, interval: int) -> None:
    """Periodically drop expired sessions that nobody validates any more."""
    while True:
        await asyncio.sleep(interval)
        removed = authority.sweep_expired()
        if removed:
            logger.info(f"Swept {removed} expired sessions")


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    auth_service: Optional[AuthenticationService] = None,
    llm_client: Optional[OpenAIClient] = None,
    search_client: Optional[GoogleSearchClient] = None,
    settings: Optional[ConfigModule] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Collaborators that are not injected are built from configuration when the
    application starts. A missing one-time token source aborts startup.
    """
    config_provider = config_provider or EnvConfigProvider()
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting ExpertFinder API...")

        http_client = None
        if llm_client is None or search_client is None:
            http_client = build_http_client(settings.get("http_timeout"))

        # Build authentication service via factory (dependency injection)
        app.state.auth_service = auth_service or AuthFactory.build(
            config_provider,
            session_lifetime=timedelta(hours=settings.get("session_lifetime_hours")),
        )

        if llm_client is None:
            openai_config = config_provider.get_openai_config()
            if not openai_config.is_configured:
                logger.warning("OpenAI API key is not set; searches will fail upstream")
            app.state.llm_client = OpenAIClient(openai_config, http_client)
        else:
            app.state.llm_client = llm_client

        if search_client is None:
            search_config = config_provider.get_search_config()
            if not search_config.is_configured:
                logger.warning("Google API key or search engine id is not set; searches will fail upstream")
            app.state.search_client = GoogleSearchClient(search_config, http_client)
        else:
            app.state.search_client = search_client

        sweeper = None
        sweep_interval = settings.get("session_sweep_interval")
        if sweep_interval > 0:
            sweeper = asyncio.create_task(
                sweep_expired_sessions(app.state.auth_service.authority, sweep_interval)
            )

        logger.info("ExpertFinder API started successfully")

        yield

        # Shutdown
        logger.info("Shutting down ExpertFinder API...")
        if sweeper:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        if http_client:
            await http_client.aclose()
        logger.info("ExpertFinder API shutdown complete")

    app = FastAPI(
        title="ExpertFinder API",
        description=(
            "Backend API for the Expert Finder project. Handles authentication "
            "and API calls to the LLM and web search providers."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    cors_origins = config_provider.get_api_config().cors_origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.settings = settings
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, request_error_handler)
    app.add_exception_handler(UpstreamServiceError, upstream_error_handler)
    app.add_exception_handler(ValueError, validation_error_handler)
    return app


# Dependency injection helpers


def get_auth_service(request: Request) -> AuthenticationService:
    service = getattr(request.app.state, "auth_service", None)
    if service is None:
        raise HTTPException(503, "Service not initialized")
    return service


def get_llm_client(request: Request) -> OpenAIClient:
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        raise HTTPException(503, "Service not initialized")
    return client


def get_search_client(request: Request) -> GoogleSearchClient:
    client = getattr(request.app.state, "search_client", None)
    if client is None:
        raise HTTPException(503, "Service not initialized")
    return client


def require_session(
    authorization: Optional[str] = Header(None, description="Bearer session token"),
    auth_service: AuthenticationService = Depends(get_auth_service),
) -> str:
    """
    Verify the session credential of a protected request.

    Returns:
        The validated session token
    """
    result = auth_service.authenticate(authorization)
    if not result.ok:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return result.session_token


# Authentication Endpoints


@router.post(
    TOKEN_EXCHANGE_PATH,
    response_model=TokenExchangeResponse,
    responses={400: {"model": MessageResponse}, 401: {"model": TokenRejectedResponse}},
)
def validate_token(
    body: Optional[TokenExchangeRequest] = None,
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    """
    Exchange a one-time token for a session token.

    The client sends the session token as a bearer credential on every
    subsequent call.

    Returns:
        200: Session token issued
        400: No token supplied
        401: Token invalid or already used
    """
    if body is None or not body.token or not body.token.strip():
        return JSONResponse(
            status_code=400, content=MessageResponse(message="Please enter a Token").model_dump()
        )

    session_token = auth_service.exchange(body.token)
    if session_token is None:
        return JSONResponse(status_code=401, content=TokenRejectedResponse().model_dump())

    return TokenExchangeResponse(session_token=session_token)


@router.post("/api/auth/revoke", status_code=204)
def revoke_token(
    authorization: Optional[str] = Header(None, description="Bearer session token"),
    auth_service: AuthenticationService = Depends(get_auth_service),
):
    """
    End the caller's session. Unknown sessions are ignored.

    Returns:
        204: Always
    """
    auth_service.revoke(authorization)
    return Response(status_code=204)


# Search Endpoints


@router.post("/api/search", response_model=SearchResponse)
async def search(
    request: Request,
    req: Optional[SearchRequest] = None,
    session_token: str = Depends(require_session),
    llm_client: OpenAIClient = Depends(get_llm_client),
    search_client: GoogleSearchClient = Depends(get_search_client),
):
    """
    Answer a query and find matching experts.

    Returns:
        200: Rendered answer, topic and expert links
        400: Query or location missing
        401: Unauthorized
        502: LLM or search provider failed
    """
    if req is None or not (req.query or "").strip() or not (req.location or "").strip():
        return JSONResponse(
            status_code=400,
            content=MessageResponse(message="Query and Location required").model_dump(),
        )

    raw_answer = await llm_client.get_answer(req.query) or ""

    topic = (await llm_client.extract_topic(req.query) or "").strip()
    if not topic:
        topic = req.query[:TOPIC_FALLBACK_LENGTH]

    experts = await search_client.search(
        topic, req.location, max_results=request.app.state.settings.get("search_max_results")
    )

    logger.info(
        f"Search answered: topic={topic!r} experts={len(experts)} answer_chars={len(raw_answer)}"
    )

    return SearchResponse(answer=render_answer(raw_answer), topic=topic, experts=experts)


# Health Endpoints


@router.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness/liveness probes.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@router.get("/health")
async def health_check(request: Request):
    """
    Health check with module status.

    Returns:
        200: Service healthy
        503: Modules not initialized
    """
    state = request.app.state
    modules_ready = all(
        getattr(state, name, None) is not None
        for name in ("auth_service", "llm_client", "search_client")
    )

    if not modules_ready:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "modules": "not initialized"},
        )

    authority = state.auth_service.authority
    return {
        "status": "healthy",
        "modules": "initialized",
        "active_sessions": authority.active_session_count(),
        "unused_tokens": authority.unused_token_count(),
        "environment": state.settings.get("environment"),
        "version": __version__,
    }


# Error handlers


async def request_error_handler(request: Request, exc: RequestValidationError):
    """Malformed token exchange bodies get the same 400 as a missing token."""
    if request.url.path == TOKEN_EXCHANGE_PATH:
        return JSONResponse(
            status_code=400, content=MessageResponse(message="Please enter a Token").model_dump()
        )
    return await request_validation_exception_handler(request, exc)


async def upstream_error_handler(request: Request, exc: UpstreamServiceError):
    """Handle third-party API failures."""
    logger.error(f"Upstream error: {exc}")
    return JSONResponse(status_code=502, content={"error": "Upstream service failed"})


async def validation_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    logger.error(f"Validation error: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


app = create_app()


if __name__ == "__main__":
    # Use dict config for logging, not file path
    uvicorn.run(
        "expertfinder.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )
