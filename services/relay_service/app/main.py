import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .logger import configure_logging
from .logic.dispatcher import ProviderDispatcher
from .logic.errors import AllProvidersFailed, InvalidRequest, NoProvidersConfigured
from .routers import frontend as frontend_router
from .routers import relay as relay_router
from .schemas.relay import AttemptOut, ErrorResponse

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, dispatcher: Optional[ProviderDispatcher] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(title="Creator Studio Relay", version="0.1.0")
    app.state.settings = settings
    app.state.dispatcher = dispatcher or ProviderDispatcher(settings)

    configured = [p.name for p in app.state.dispatcher.candidates()]
    if configured:
        logger.info("Providers configured (in fallback order): %s", ", ".join(configured))
    else:
        logger.warning("No provider credential configured; /api/generate will fail until one is set")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidRequest)
    async def invalid_request(request: Request, exc: InvalidRequest):
        return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True))

    @app.exception_handler(NoProvidersConfigured)
    async def no_providers(request: Request, exc: NoProvidersConfigured):
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump(exclude_none=True))

    @app.exception_handler(AllProvidersFailed)
    async def all_failed(request: Request, exc: AllProvidersFailed):
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(
                error=str(exc),
                attempts=[AttemptOut(provider=a.provider, message=a.message) for a in exc.attempts],
            ).model_dump(),
        )

    app.include_router(relay_router.router)
    # Catch-all must be registered last
    app.include_router(frontend_router.router)
    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
