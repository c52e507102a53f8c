"""Recipe Finder Application - recipe ideas and details brokered through Gemini.

Single entry point for the HTTP service:
- Validates configuration (fail-fast: missing GOOGLE_API_KEY exits with status 1)
- Configures CORS for the single-page client
- Registers the /api routes and JSON error handlers

Run with: python app.py  (or: uvicorn app:app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.utils.config import config
from src.utils.logger import logger


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}", extra={"endpoint": request.url.path})
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc, extra={"endpoint": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app() -> FastAPI:
    """Build the FastAPI application.

    Raises:
        SystemExit: If required configuration is missing or invalid.
    """
    try:
        config.validate()
    except ValueError as e:
        logger.error(f"✗ Configuration invalid: {e}")
        raise SystemExit(1) from e

    app = FastAPI(title="Recipe Finder", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _invalid_body_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    logger.info(
        f"✓ Application configured (model={config.GEMINI_MODEL}, "
        f"stock photos={'enabled' if config.PEXELS_API_KEY else 'disabled'})"
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Recipe Finder on http://{config.HOST}:{config.PORT}")
    logger.info(f"API docs available at: http://{config.HOST}:{config.PORT}/docs")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
