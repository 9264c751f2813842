from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, File, Request, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import httpx
import logging
import uvicorn

from config import Settings
from errors import InputError, ProxyError
from imaging import image_to_data_url, validate_upload
from model_client import VisionModelClient
from models import DiagnosisRequest, DiagnosisResult, ErrorResponse, IdentificationResult
from proxy import diagnose_disease, identify_plant

# --- Configuration ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Bad Request: No image data provided"},
    500: {"model": ErrorResponse, "description": "Internal Server Error: configuration, upstream or parsing failure"},
}

UPLOAD_ERROR_RESPONSES = {
    **ERROR_RESPONSES,
    413: {"model": ErrorResponse, "description": "Payload Too Large: File exceeds size limit"},
    422: {"model": ErrorResponse, "description": "Unprocessable Entity: Invalid file type"},
}


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=CORS_HEADERS)


def _guard(name: str, operation: Callable[[], BaseModel]) -> BaseModel:
    """Run a proxy operation, turning unexpected failures into a ProxyError."""
    try:
        return operation()
    except ProxyError:
        raise
    except Exception as e:
        logger.error(f"[{name}] Unexpected failure: {e}", exc_info=True)
        raise ProxyError(f"Failed to process image for {name}.") from e


def create_app(settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None) -> FastAPI:
    """Build the API with its model client. Tests inject settings and a mock transport."""
    settings = settings or Settings.from_env()
    logging.getLogger().setLevel(settings.log_level)

    ai_client = VisionModelClient(settings, http_client)
    if not settings.api_key:
        logger.warning("OPENAI_API_KEY is not set; proxy requests will fail until it is configured.")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        ai_client.close()

    app = FastAPI(
        title="Plant Doctor API",
        description="AI-powered plant identification and disease diagnosis",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ai_client = ai_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allows all origins
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        # Preflights never reach the endpoints
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=PREFLIGHT_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # --- Error Handlers ---

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        if exc.detail:
            logger.error(f"{request.url.path} failed: {exc.message} ({exc.detail})")
        else:
            logger.warning(f"{request.url.path} failed: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.url.path} rejected malformed request body")
        return _error_response(InputError.status_code, InputError.default_message)

    # --- API Endpoints ---

    @app.get("/health")
    async def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy", "service": "plant-doctor-proxy"}

    @app.post("/identify-plant", response_model=IdentificationResult, responses=ERROR_RESPONSES)
    def identify(body: DiagnosisRequest):
        """Identify the plant in a data-URI encoded image."""
        return _guard("identify-plant", lambda: identify_plant(body.imageData, ai_client, settings))

    @app.post("/diagnose-disease", response_model=DiagnosisResult, responses=ERROR_RESPONSES)
    def diagnose(body: DiagnosisRequest):
        """Diagnose disease, pests or stress in a data-URI encoded image."""
        return _guard("diagnose-disease", lambda: diagnose_disease(body.imageData, ai_client, settings))

    @app.post("/identify-plant/upload", response_model=IdentificationResult, responses=UPLOAD_ERROR_RESPONSES)
    def identify_upload(file: UploadFile = File(...)):
        return _guard("identify-plant", lambda: identify_plant(_read_upload(file), ai_client, settings))

    @app.post("/diagnose-disease/upload", response_model=DiagnosisResult, responses=UPLOAD_ERROR_RESPONSES)
    def diagnose_upload(file: UploadFile = File(...)):
        return _guard("diagnose-disease", lambda: diagnose_disease(_read_upload(file), ai_client, settings))

    return app


def _read_upload(file: UploadFile) -> str:
    image_bytes = file.file.read()
    validate_upload(file.content_type, image_bytes)
    logger.info(f"Received file: {file.filename}, Size: {len(image_bytes)} bytes")
    return image_to_data_url(image_bytes)


app = create_app()

if __name__ == "__main__":
    uvicorn.run("app:app", host="127.0.0.1", port=8000, reload=True)
