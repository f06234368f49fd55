"""
propscore FastAPI main
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from propscore import __version__
from propscore.config import settings
from propscore.errors import (
    InternalError,
    InvalidConfigurationError,
    PropScoreError,
    ValidationError,
)
from propscore.log import setup_logging
from propscore.api.routes import router

setup_logging()

app = FastAPI(
    title="PropScore",
    description="Property intelligence aggregation and buyer match scoring",
    version=__version__,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(ValidationError)
async def validation_error_handler(_request: Request, exc: ValidationError):
    return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request", jsonable_encoder(exc.errors()))


@app.exception_handler(InvalidConfigurationError)
async def invalid_configuration_handler(_request: Request, exc: InvalidConfigurationError):
    return _error(422, str(exc))


@app.exception_handler(InternalError)
async def internal_error_handler(_request: Request, exc: InternalError):
    logger.bind(component="API").error(f"Internal error: {exc}")
    return _error(500, "Failed to compute property intelligence", str(exc))


@app.exception_handler(PropScoreError)
async def propscore_error_handler(_request: Request, exc: PropScoreError):
    logger.bind(component="API").error(f"Unhandled {exc.__class__.__name__}: {exc}")
    return _error(500, str(exc))


@app.get("/")
async def root():
    """Health check"""
    return {
        "name": "PropScore",
        "status": "running",
        "version": __version__,
    }


@app.get("/health")
async def health():
    """Detailed health check"""
    return {
        "status": "healthy",
        "env": settings.ENV,
        # sources that need a key are reported as unavailable until it is set
        "api_keys": {
            "environment": bool(settings.AIRNOW_API_KEY),
            "walkability": bool(settings.WALKSCORE_API_KEY),
            "places": bool(settings.GOOGLE_PLACES_API_KEY),
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("propscore.api.main:app", host="0.0.0.0", port=8000, reload=False)
