"""HTTP client the wizard uses to talk to the AutoFit API."""

import json

import httpx

from autofit.errors import ApiError
from autofit.i18n import DEFAULT_LANGUAGE, message
from autofit.image import ImageBuffer
from autofit.logging import get_logger
from autofit.models import CamelModel, CoordinateRequest, CoordinateResult, GenerateImageRequest

logger = get_logger(__name__)


class AutoFitClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        language: str = DEFAULT_LANGUAGE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.language = language
        self._transport = transport

    async def coordinate(
        self,
        request: CoordinateRequest,
        photo: ImageBuffer | None = None,
        language: str | None = None,
    ) -> CoordinateResult:
        data = await self._post("/api/coordinate", request, photo, language)
        return CoordinateResult.model_validate(data)

    async def generate_image(
        self,
        request: GenerateImageRequest,
        photo: ImageBuffer | None = None,
        language: str | None = None,
    ) -> str:
        """Returns the data: URL of the generated outfit image."""
        data = await self._post("/api/generate-coordinate-image", request, photo, language)
        return data["imageUrl"]

    async def _post(
        self,
        path: str,
        body: CamelModel,
        photo: ImageBuffer | None,
        language: str | None,
    ) -> dict:
        language = language or self.language
        payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        headers = {"Accept-Language": language}

        # Model calls routinely take tens of seconds; no client-side timeout
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport, timeout=None) as client:
                if photo is None:
                    resp = await client.post(path, json=payload, headers=headers)
                else:
                    fields = {key: json.dumps(value, ensure_ascii=False) for key, value in payload.items()}
                    files = {"image": ("photo", photo.data, photo.mime_type)}
                    resp = await client.post(path, data=fields, files=files, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", path=path, error=str(e))
            raise ApiError("NETWORK_ERROR", message("unknown_error", language)) from e

        try:
            result = resp.json()
        except ValueError as e:
            raise ApiError("INTERNAL_ERROR", message("INTERNAL_ERROR", language), resp.status_code) from e

        if not result.get("success") or "data" not in result:
            error = result.get("error") or {}
            raise ApiError(
                error.get("code", "INTERNAL_ERROR"),
                error.get("message") or message("unknown_error", language),
                resp.status_code,
            )
        return result["data"]
