"""
The AutoFit form as an immutable state machine.

FormState is never mutated; reduce(state, action) returns the next state.
The two network round trips (analysis and outfit image) live in submit() and
request_outfit_image(), which wrap a single client call between reducer steps.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, get_args

from pydantic import ValidationError

from autofit.client import AutoFitClient
from autofit.config import MAX_STYLE_OPTIONS
from autofit.errors import ApiError, RequestError
from autofit.i18n import DEFAULT_LANGUAGE, is_supported, message
from autofit.image import ImageBuffer, preview_data_url, validate_upload
from autofit.logging import get_logger
from autofit.models import (
    NO_CONCERN, TPO, BodyConcern, BodyInfo, CoordinateRequest, CoordinateResult, GenerateImageRequest,
    StyleOption,
)

logger = get_logger(__name__)


class Step(str, Enum):
    BODY_INFO = "bodyInfo"
    PHOTO = "photo"
    STYLE_OPTION = "styleOption"
    TPO = "tpo"
    BODY_CONCERN = "bodyConcern"
    RESULT = "result"


def steps_for(with_photo: bool) -> tuple[Step, ...]:
    if with_photo:
        return (Step.BODY_INFO, Step.PHOTO, Step.STYLE_OPTION, Step.TPO, Step.BODY_CONCERN, Step.RESULT)
    return (Step.BODY_INFO, Step.STYLE_OPTION, Step.TPO, Step.BODY_CONCERN, Step.RESULT)


@dataclass(frozen=True)
class FormState:
    steps: tuple[Step, ...] = field(default_factory=lambda: steps_for(False))
    current_step: Step = Step.BODY_INFO
    language: str = DEFAULT_LANGUAGE
    body_info: BodyInfo | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    photo: ImageBuffer | None = None
    preview_url: str | None = None
    include_face: bool = False
    style_options: tuple[str, ...] = ()
    tpo: TPO | None = None
    body_concerns: tuple[str, ...] = ()
    notice: str | None = None
    is_loading: bool = False
    result: CoordinateResult | None = None
    error: str | None = None
    is_generating_image: bool = False
    generated_image_url: str | None = None

    @property
    def with_photo(self) -> bool:
        return Step.PHOTO in self.steps

    @property
    def step_index(self) -> int:
        return self.steps.index(self.current_step)

    @property
    def last_input_step(self) -> Step:
        return self.steps[-2]

    @property
    def is_complete(self) -> bool:
        return (
            self.body_info is not None
            and len(self.style_options) > 0
            and self.tpo is not None
            and (self.photo is not None or not self.with_photo)
        )

    def to_request(self) -> CoordinateRequest:
        if not self.is_complete:
            raise ValueError("form is incomplete")
        return CoordinateRequest(
            body_info=self.body_info,
            style_options=list(self.style_options),
            tpo=self.tpo,
            body_concerns=list(self.body_concerns),
        )


def initial_state(with_photo: bool = False, language: str = DEFAULT_LANGUAGE) -> FormState:
    return FormState(steps=steps_for(with_photo), language=language)


# Actions

@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Previous:
    pass


@dataclass(frozen=True)
class SetBodyInfo:
    values: dict[str, Any]


@dataclass(frozen=True)
class AttachPhoto:
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class ClearPhoto:
    pass


@dataclass(frozen=True)
class ToggleStyle:
    option: str


@dataclass(frozen=True)
class SetTPO:
    values: dict[str, Any]


@dataclass(frozen=True)
class ToggleConcern:
    concern: str


@dataclass(frozen=True)
class SetIncludeFace:
    include_face: bool


@dataclass(frozen=True)
class SetLanguage:
    language: str


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    result: CoordinateResult


@dataclass(frozen=True)
class SubmitFailed:
    message: str


@dataclass(frozen=True)
class ImageRequested:
    pass


@dataclass(frozen=True)
class ImageGenerated:
    image_url: str


@dataclass(frozen=True)
class ImageFailed:
    message: str


@dataclass(frozen=True)
class Reset:
    pass


# Selection rules

STYLE_OPTIONS: tuple[str, ...] = get_args(StyleOption)
BODY_CONCERNS: tuple[str, ...] = get_args(BodyConcern)


def toggle_style(selected: tuple[str, ...], option: str) -> tuple[str, ...] | None:
    """New selection, or None when adding would exceed the cap."""
    if option in selected:
        return tuple(s for s in selected if s != option)
    if len(selected) >= MAX_STYLE_OPTIONS:
        return None
    return selected + (option,)


def toggle_concern(selected: tuple[str, ...], concern: str) -> tuple[str, ...]:
    """'없음' is exclusive: picking it clears the rest, picking anything else drops it."""
    if concern == NO_CONCERN:
        return () if NO_CONCERN in selected else (NO_CONCERN,)
    remaining = tuple(c for c in selected if c != NO_CONCERN)
    if concern in remaining:
        return tuple(c for c in remaining if c != concern)
    return remaining + (concern,)


def _field_errors(error: ValidationError, language: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in error.errors():
        name = str(err["loc"][0]) if err["loc"] else "bodyShape"
        key = name if name in ("height", "weight") else "invalid_field"
        errors.setdefault(name, message(key, language))
    return errors


def _step_notice(state: FormState) -> str | None:
    """Message blocking the user from leaving the current step, if any."""
    step = state.current_step
    if step is Step.BODY_INFO and state.body_info is None:
        return message("incomplete_form", state.language)
    if step is Step.PHOTO and state.photo is None:
        return message("MISSING_FILE", state.language)
    if step is Step.STYLE_OPTION and not state.style_options:
        return message("style_required", state.language)
    if step is Step.TPO and state.tpo is None:
        return message("incomplete_form", state.language)
    return None


def reduce(state: FormState, action: object) -> FormState:
    lang = state.language

    if isinstance(action, Next):
        index = state.step_index
        if index >= len(state.steps) - 1:
            return state
        if state.steps[index + 1] is Step.RESULT and state.result is None:
            return state
        notice = _step_notice(state)
        if notice:
            return replace(state, notice=notice)
        return replace(state, current_step=state.steps[index + 1], notice=None)

    if isinstance(action, Previous):
        if state.step_index == 0:
            return state
        return replace(state, current_step=state.steps[state.step_index - 1], notice=None)

    if isinstance(action, SetBodyInfo):
        try:
            body_info = BodyInfo.model_validate(action.values)
        except ValidationError as e:
            return replace(state, field_errors=_field_errors(e, lang))
        return replace(state, body_info=body_info, field_errors={}, error=None)

    if isinstance(action, AttachPhoto):
        try:
            photo = validate_upload(action.data, action.mime_type)
        except RequestError as e:
            return replace(state, notice=message(e.code, lang))
        return replace(state, photo=photo, preview_url=preview_data_url(photo), notice=None, error=None)

    if isinstance(action, ClearPhoto):
        return replace(state, photo=None, preview_url=None, notice=None)

    if isinstance(action, ToggleStyle):
        if action.option not in STYLE_OPTIONS:
            return replace(state, notice=message("invalid_field", lang))
        selected = toggle_style(state.style_options, action.option)
        if selected is None:
            return replace(state, notice=message("style_limit", lang))
        return replace(state, style_options=selected, notice=None, error=None)

    if isinstance(action, SetTPO):
        try:
            tpo = TPO.model_validate(action.values)
        except ValidationError:
            return replace(state, notice=message("invalid_field", lang))
        return replace(state, tpo=tpo, notice=None, error=None)

    if isinstance(action, ToggleConcern):
        if action.concern not in BODY_CONCERNS:
            return replace(state, notice=message("invalid_field", lang))
        return replace(state, notice=None, body_concerns=toggle_concern(state.body_concerns, action.concern), error=None)

    if isinstance(action, SetIncludeFace):
        return replace(state, include_face=action.include_face)

    if isinstance(action, SetLanguage):
        if not is_supported(action.language):
            return state
        return replace(state, language=action.language)

    if isinstance(action, SubmitStarted):
        if state.is_loading or state.current_step is not state.last_input_step:
            return state
        if not state.is_complete:
            return replace(state, error=message("incomplete_form", lang))
        return replace(state, is_loading=True, error=None)

    if isinstance(action, SubmitSucceeded):
        return replace(state, is_loading=False, result=action.result, current_step=Step.RESULT, error=None)

    if isinstance(action, SubmitFailed):
        return replace(state, is_loading=False, error=action.message)

    if isinstance(action, ImageRequested):
        if state.current_step is not Step.RESULT or state.is_generating_image:
            return state
        return replace(state, is_generating_image=True, error=None)

    if isinstance(action, ImageGenerated):
        return replace(state, is_generating_image=False, generated_image_url=action.image_url)

    if isinstance(action, ImageFailed):
        return replace(state, is_generating_image=False, error=action.message)

    if isinstance(action, Reset):
        return initial_state(with_photo=state.with_photo, language=lang)

    raise TypeError(f"Unknown action: {action!r}")


async def submit(state: FormState, client: AutoFitClient) -> FormState:
    """Run the analysis call from the last input step. Resubmission while loading is ignored."""
    if state.is_loading:
        return state
    started = reduce(state, SubmitStarted())
    if not started.is_loading:
        return started

    try:
        result = await client.coordinate(started.to_request(), photo=started.photo, language=started.language)
    except ApiError as e:
        logger.warning("submit_failed", code=e.code)
        return reduce(started, SubmitFailed(e.message))
    return reduce(started, SubmitSucceeded(result))


async def request_outfit_image(state: FormState, client: AutoFitClient) -> FormState:
    """Ask for the composite outfit image from the result screen. Ignored while one is in flight."""
    if state.is_generating_image:
        return state
    started = reduce(state, ImageRequested())
    if not started.is_generating_image or started.result is None:
        return started

    base = started.to_request()
    request = GenerateImageRequest(
        body_info=base.body_info,
        style_options=base.style_options,
        tpo=base.tpo,
        body_concerns=base.body_concerns,
        styling_tips=started.result.styling_tips,
        accessories=started.result.accessories,
        color_palette=started.result.color_palette,
        include_face=started.include_face,
        locale=started.language,
    )
    try:
        image_url = await client.generate_image(request, photo=started.photo, language=started.language)
    except ApiError as e:
        logger.warning("outfit_image_failed", code=e.code)
        return reduce(started, ImageFailed(e.message))
    return reduce(started, ImageGenerated(image_url))
