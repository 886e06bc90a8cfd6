"""Gemini on Vertex AI: one blocking call per user action, no retries."""

import asyncio
import json

from google import genai
from google.genai import types
from google.oauth2 import service_account

from autofit import config
from autofit.errors import ConfigurationError, EmptyResponseError
from autofit.image import ImageBuffer
from autofit.logging import get_logger

logger = get_logger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

IMAGE_GENERATION_CONFIG = types.GenerateContentConfig(
    temperature=0.4,
    top_k=32,
    top_p=1,
    max_output_tokens=8192,
    candidate_count=1,
    response_modalities=["TEXT", "IMAGE"],
)

_clients: dict[str, genai.Client] = {}


def _credentials() -> service_account.Credentials | None:
    """Service account from GOOGLE_APPLICATION_CREDENTIALS_JSON, else application default credentials."""
    raw = config.GOOGLE_APPLICATION_CREDENTIALS_JSON
    if not raw:
        return None
    try:
        info = json.loads(raw)
    except json.JSONDecodeError:
        logger.error("credentials_json_invalid")
        return None
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=[CLOUD_PLATFORM_SCOPE])
    except ValueError as e:
        logger.error("credentials_json_not_service_account", error=str(e))
        return None


def get_client(location: str) -> genai.Client:
    if not config.GOOGLE_CLOUD_PROJECT:
        raise ConfigurationError("GOOGLE_CLOUD_PROJECT is not set")

    client = _clients.get(location)
    if client is None:
        client = genai.Client(
            vertexai=True,
            project=config.GOOGLE_CLOUD_PROJECT,
            location=location,
            credentials=_credentials(),
        )
        _clients[location] = client
    return client


def _image_part(image: ImageBuffer) -> types.Part:
    return types.Part.from_bytes(data=image.data, mime_type=image.mime_type)


async def generate_text(prompt: str, image: ImageBuffer | None = None) -> str:
    """Send the prompt (plus an optional photo) and return the model's raw text."""
    client = get_client(config.GOOGLE_CLOUD_LOCATION)
    contents: list = [prompt]
    if image is not None:
        contents.append(_image_part(image))

    logger.info("model_request", model=config.TEXT_MODEL, with_image=image is not None)
    response = await asyncio.to_thread(
        client.models.generate_content,
        model=config.TEXT_MODEL,
        contents=contents,
    )

    text = response.text
    if not text:
        raise EmptyResponseError("AI response was empty")
    return text


async def generate_image(prompt: str, image: ImageBuffer | None = None) -> tuple[bytes, str]:
    """Ask the image model for a picture. Returns (bytes, mime type) of the first inline image."""
    client = get_client(config.GOOGLE_CLOUD_IMAGE_LOCATION)
    contents: list = []
    if image is not None:
        contents.append(_image_part(image))
    contents.append(prompt)

    logger.info("model_request", model=config.IMAGE_MODEL, with_image=image is not None)
    response = await asyncio.to_thread(
        client.models.generate_content,
        model=config.IMAGE_MODEL,
        contents=contents,
        config=IMAGE_GENERATION_CONFIG,
    )

    if not response.candidates:
        raise EmptyResponseError("Image generation returned no candidates")

    content = response.candidates[0].content
    parts = content.parts if content else None
    if not parts:
        raise EmptyResponseError("Image generation returned no parts")

    for part in parts:
        if part.inline_data and part.inline_data.data:
            return part.inline_data.data, part.inline_data.mime_type or "image/png"

    raise EmptyResponseError("Image generation returned no image")
