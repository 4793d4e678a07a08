#run it with uvicorn app.main:app  (or: python -m app.main)
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from dotenv import load_dotenv
from contextlib import asynccontextmanager
import asyncio
import logging
import sys

from app.api.api_router import api_router
from app.core.config import get_settings
from app.core.exceptions import ConfigurationError, ContactValidationError, DispatchError
from app.core.mailer import SMTPMailDispatcher
from app.core.origins import OriginAllowListMiddleware

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

try:
    settings = get_settings()
except ConfigurationError as e:
    logging.basicConfig(level=logging.INFO)
    for env_var in e.missing:
        logger.error(f"Missing required environment variable: {env_var}")
    sys.exit(1)

# Set up logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the mail dispatcher and check the transport in the background"""
    dispatcher = SMTPMailDispatcher(settings)
    app.state.mail_dispatcher = dispatcher

    # Verification is logged only; serving does not wait for it
    transport_check = asyncio.create_task(dispatcher.verify())
    logger.info(f"🚀 Contact relay ready, allowed origins: {', '.join(settings.allowed_origins)}")
    yield
    if not transport_check.done():
        transport_check.cancel()


app = FastAPI(title="Contact Relay", version="1.0.0", lifespan=lifespan)


async def catch_unhandled_errors(request: Request, call_next):
    """Turn unexpected faults into the generic 500 inside the CORS layer"""
    try:
        return await call_next(request)
    except Exception as exc:
        return unhandled_error_response(request, exc)


# Innermost: its responses still pass through CORSMiddleware
app.add_middleware(BaseHTTPMiddleware, dispatch=catch_unhandled_errors)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
)
# Added last so it runs first: foreign origins never reach CORS or the routes
app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.allowed_origins)

app.include_router(api_router)


@app.exception_handler(ContactValidationError)
async def validation_error_handler(request: Request, exc: ContactValidationError):
    return JSONResponse(status_code=400, content={"error": exc.reason})


@app.exception_handler(RequestValidationError)
async def request_body_error_handler(request: Request, exc: RequestValidationError):
    error_types = [error["type"] for error in exc.errors()]
    logger.info(f"Malformed request body on {request.url.path}: {error_types}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(DispatchError)
async def dispatch_error_handler(request: Request, exc: DispatchError):
    # Causes were already logged by the dispatcher; callers only get the generic text
    logger.warning(f"Contact submission not relayed: {exc}")
    return JSONResponse(status_code=500, content={"error": DispatchError.public_message})


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Something broke!"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Last resort for faults raised by the middleware stack itself
    return unhandled_error_response(request, exc)


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.

    Only reports whether configuration is present, never its values.
    """
    return {
        "status": "ok",
        "env_vars": {
            "email_user": bool(settings.email_user),
            "email_app_password": bool(settings.email_app_password),
            "receiver_email": bool(settings.receiver_email),
        },
    }


def run():
    import uvicorn

    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
