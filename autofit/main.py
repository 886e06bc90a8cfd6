import json
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from autofit.config import CORS_ORIGINS, MAX_FILE_SIZE
from autofit.errors import GatewayError, RequestError
from autofit.i18n import detect_locale, is_supported, message
from autofit.image import ImageBuffer, validate_upload
from autofit.logging import bind_context, clear_context, configure_logging, get_logger
from autofit.models import (
    CoordinateRequest, CoordinateResponse, ErrorBody, ErrorResponse,
    GeneratedImage, GenerateImageRequest, GenerateImageResponse, HealthResponse,
)
from autofit.pipeline import analyze, generate_outfit_image

configure_logging()
logger = get_logger(__name__)

COORDINATE_FIELDS = ("bodyInfo", "styleOptions", "tpo")
GENERATE_IMAGE_FIELDS = ("bodyInfo", "styleOptions", "tpo", "stylingTips", "colorPalette")

app = FastAPI(title="AutoFit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    clear_context()
    bind_context(request_id=uuid.uuid4().hex[:12], path=request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_context()


def _language(request: Request) -> str:
    """Language chosen by the request body when it names one, else from Accept-Language."""
    chosen = getattr(request.state, "language", None)
    if chosen:
        return chosen
    return detect_locale(request.headers.get("accept-language"))


def _error_response(status_code: int, code: str, language: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message(code, language)))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(RequestError)
async def request_error_handler(request: Request, exc: RequestError) -> JSONResponse:
    logger.info("request_rejected", code=exc.code, detail=exc.detail)
    return _error_response(exc.status_code, exc.code, _language(request))


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error("model_call_failed", code=exc.code, error=str(exc), exc_info=exc)
    return _error_response(exc.status_code, exc.code, _language(request))


def _decode_field(value: str):
    """Multipart fields carry JSON-encoded values; plain strings pass through."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


async def _read_payload(request: Request) -> tuple[dict, UploadFile | None, bool]:
    """Returns (fields, uploaded image, is_multipart)."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        try:
            form = await request.form()
        except HTTPException as e:
            raise RequestError("VALIDATION_ERROR", f"Malformed multipart body: {e.detail}") from e
        fields = {
            key: _decode_field(value)
            for key, value in form.multi_items()
            if not isinstance(value, UploadFile)
        }
        upload = form.get("image")
        return fields, upload if isinstance(upload, UploadFile) else None, True

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestError("VALIDATION_ERROR", f"Malformed JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise RequestError("VALIDATION_ERROR", "JSON body must be an object")
    return payload, None, False


def _require(fields: dict, required: tuple[str, ...]) -> None:
    missing = [name for name in required if fields.get(name) is None]
    if missing:
        raise RequestError("MISSING_FIELDS", f"Missing: {', '.join(missing)}")


async def _read_image(upload: UploadFile | None) -> ImageBuffer:
    if upload is None:
        raise RequestError("MISSING_FILE", "No image part in multipart body")
    data = await upload.read()
    return validate_upload(data, upload.content_type, MAX_FILE_SIZE)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.get("/api/coordinate", response_model=HealthResponse)
async def coordinate_health() -> HealthResponse:
    return HealthResponse(status="ok", message="Coordinate API is running")


@app.post("/api/coordinate", response_model=CoordinateResponse, response_model_exclude_none=True)
async def coordinate(request: Request) -> CoordinateResponse:
    """Styling analysis. JSON for profile-only, multipart with an `image` file for photo analysis."""
    language = _language(request)
    fields, upload, is_multipart = await _read_payload(request)
    _require(fields, COORDINATE_FIELDS)

    try:
        coordinate_request = CoordinateRequest.model_validate(fields)
    except ValidationError as e:
        raise RequestError("VALIDATION_ERROR", str(e)) from e

    photo = await _read_image(upload) if is_multipart else None

    try:
        result = await analyze(coordinate_request, photo=photo, language=language)
    except GatewayError:
        raise
    except Exception as e:
        raise GatewayError(f"Coordinate analysis failed: {e}") from e

    return CoordinateResponse(data=result)


@app.get("/api/generate-coordinate-image", response_model=HealthResponse)
async def generate_image_health() -> HealthResponse:
    return HealthResponse(status="ok", message="Generate Coordinate Image API is running")


@app.post("/api/generate-coordinate-image", response_model=GenerateImageResponse)
async def generate_coordinate_image(request: Request) -> GenerateImageResponse:
    """Composite outfit image from a previous analysis. The photo is optional."""
    fields, upload, _ = await _read_payload(request)
    _require(fields, GENERATE_IMAGE_FIELDS)

    try:
        image_request = GenerateImageRequest.model_validate(fields)
    except ValidationError as e:
        raise RequestError("VALIDATION_ERROR", str(e)) from e

    if is_supported(image_request.locale):
        request.state.language = image_request.locale
    locale = _language(request)
    bind_context(locale=locale)

    photo = await _read_image(upload) if upload is not None else None

    try:
        image_url = await generate_outfit_image(image_request, photo=photo)
    except GatewayError:
        raise
    except Exception as e:
        raise GatewayError(f"Image generation failed: {e}") from e

    return GenerateImageResponse(data=GeneratedImage(image_url=image_url))
