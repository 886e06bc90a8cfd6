"""Request orchestration: compress → prompt → Gemini → parse."""

from autofit.gateway import generate_image, generate_text
from autofit.i18n import DEFAULT_LANGUAGE
from autofit.image import ImageBuffer, compress_image, data_url
from autofit.logging import get_logger
from autofit.models import CoordinateRequest, CoordinateResult, GenerateImageRequest
from autofit.parser import parse_coordinate_response
from autofit.prompts import build_coordination_prompt, build_image_generation_prompt, build_photo_analysis_prompt

logger = get_logger(__name__)


async def analyze(
    request: CoordinateRequest,
    photo: ImageBuffer | None = None,
    language: str = DEFAULT_LANGUAGE,
) -> CoordinateResult:
    """Styling advice from the profile alone, or from the profile plus a photo (scored)."""
    if photo is None:
        text = await generate_text(build_coordination_prompt(request, language))
        result = parse_coordinate_response(text)
    else:
        compressed = compress_image(photo)
        text = await generate_text(build_photo_analysis_prompt(request, language), compressed.buffer)
        result = parse_coordinate_response(text, expect_score=True)

    logger.info(
        "coordinate_analyzed",
        with_photo=photo is not None,
        tips=len(result.styling_tips),
        accessories=len(result.accessories),
        colors=len(result.color_palette),
    )
    return result


async def generate_outfit_image(request: GenerateImageRequest, photo: ImageBuffer | None = None) -> str:
    """Render three outfits side by side. Returns a data: URL."""
    image = compress_image(photo).buffer if photo is not None else None
    data, mime_type = await generate_image(build_image_generation_prompt(request), image)
    logger.info("outfit_image_generated", mime_type=mime_type, size=len(data), include_face=request.include_face)
    return data_url(data, mime_type)
