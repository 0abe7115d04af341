import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chat_app.config import get_settings
from chat_app.database import init_db, close_db
from chat_app.exceptions import ApplicationException
from chat_app.routes.login import router as login_router

settings = get_settings()

# Setup logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI"""
    logger.info("Starting chat...")
    await init_db()
    logger.info("Database initialized")

    if not settings.github_client_id or not settings.github_client_secret:
        logger.warning("GitHub OAuth credentials not provided, login will not complete")

    yield

    logger.info("Shutting down chat...")
    await close_db()
    logger.info("Database closed")


app = FastAPI(
    title="Chat",
    description="Chat rooms behind a GitHub login",
    version="1.0.0",
    lifespan=lifespan,
)


async def application_exception_handler(request: Request, exc: ApplicationException):
    """Handle application exceptions that escape route handlers"""
    logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "status_code": exc.status_code,
            "details": exc.details if exc.details else None,
        },
    )


app.add_exception_handler(ApplicationException, application_exception_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests and responses"""
    logger.info(f"[{request.method}] {request.url.path}")
    try:
        response = await call_next(request)
        logger.info(f"[{request.method}] {request.url.path} | Status: {response.status_code}")
        return response
    except Exception as e:
        logger.error(f"[{request.method}] {request.url.path} | Error: {str(e)}")
        raise


app.include_router(login_router)


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chat_app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False
    )
