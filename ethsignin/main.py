from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os

from . import config
from .exceptions import BadRequest

# Configure basic logging
logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

from .routers import auth

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Sign-In with Ethereum Backend",
    description="Issues one-time nonces and verifies wallet signatures over them.",
    version="0.1.0"
)

# --- CORS Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error responses are plain text ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Unparsable or incomplete bodies are reported as 400 rather than 422
    errors = "; ".join(
        f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.debug(f"Rejected request body for {request.url.path}: {errors}")
    error = BadRequest(f"invalid request body: {errors}")
    return PlainTextResponse(str(error), status_code=error.status_code)


# Include routers
app.include_router(auth.router)


if config.UI_BUILD_DIR and os.path.isdir(config.UI_BUILD_DIR):
    # Mounted last so /api routes take precedence
    app.mount("/", StaticFiles(directory=config.UI_BUILD_DIR, html=True), name="ui")
    logger.info(f"Serving UI from {config.UI_BUILD_DIR}")
else:
    @app.get("/", tags=["Health Check"])
    def read_root():
        """Root endpoint for health check."""
        return {"status": "ok", "message": "Sign-In with Ethereum backend is running."}


def run():
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn
    print(f"Start listening at http://localhost:{config.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)


# --- Server Startup (for local development) ---
if __name__ == "__main__":
    run()
