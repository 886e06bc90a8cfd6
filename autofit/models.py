from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from autofit.config import MAX_STYLE_OPTIONS

Gender = Literal["남성", "여성"]
# Simple form uses 슬림/표준/통통/건장함, the detailed form 마른/보통/통통/근육질
BodyType = Literal["슬림", "표준", "통통", "건장함", "마른", "보통", "근육질"]
SkinTone = Literal["쿨톤", "웜톤", "중성"]
ShoulderWidth = Literal["좁음", "보통", "넓음"]
BodyShape = Literal["역삼각형", "삼각형", "직사각형", "모래시계", "원형", "사다리꼴"]

StyleOption = Literal["캐주얼", "비즈니스", "스트리트", "미니멀", "빈티지", "스포티"]
TimeOfDay = Literal["아침", "점심", "저녁", "밤"]
Place = Literal["실내", "실외", "사무실", "카페", "클럽", "레스토랑"]
Occasion = Literal["데이트", "회의", "파티", "운동", "쇼핑", "일상"]
BodyConcern = Literal["키가 작음", "다리가 짧음", "어깨가 넓음", "상체 비만", "하체 비만", "팔이 짧음", "없음"]

NO_CONCERN: BodyConcern = "없음"

MALE_BODY_SHAPES: tuple[str, ...] = ("역삼각형", "직사각형", "사다리꼴", "원형")
FEMALE_BODY_SHAPES: tuple[str, ...] = ("모래시계", "삼각형", "역삼각형", "직사각형", "원형")


def body_shapes_for(gender: str) -> tuple[str, ...]:
    """Body-shape values permitted for a gender."""
    return {"남성": MALE_BODY_SHAPES, "여성": FEMALE_BODY_SHAPES}.get(gender, ())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BodyInfo(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    height: float = Field(ge=100, le=250)
    weight: float = Field(ge=30, le=200)
    body_type: BodyType
    skin_tone: SkinTone
    gender: Gender | None = None
    shoulder_width: ShoulderWidth | None = None
    body_shape: BodyShape | None = None

    @model_validator(mode="after")
    def _shape_matches_gender(self) -> "BodyInfo":
        if self.body_shape is None:
            return self
        if self.gender is None:
            raise ValueError("bodyShape requires gender")
        if self.body_shape not in body_shapes_for(self.gender):
            raise ValueError(f"bodyShape {self.body_shape} is not valid for {self.gender}")
        return self


class TPO(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    time: TimeOfDay
    place: Place
    occasion: Occasion


class Accessory(CamelModel):
    name: str = ""
    description: str = ""
    reason: str = ""


class Color(CamelModel):
    name: str = ""
    hex: str = ""
    usage: str = ""


class CoordinateRequest(CamelModel):
    body_info: BodyInfo
    style_options: list[StyleOption] = Field(min_length=1, max_length=MAX_STYLE_OPTIONS)
    tpo: TPO
    body_concerns: list[BodyConcern] = Field(default_factory=list)

    @field_validator("style_options")
    @classmethod
    def _distinct_styles(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("styleOptions must not repeat")
        return v

    @field_validator("body_concerns")
    @classmethod
    def _none_is_exclusive(cls, v: list[str]) -> list[str]:
        if NO_CONCERN in v and len(v) > 1:
            raise ValueError(f"'{NO_CONCERN}' cannot be combined with other concerns")
        return v


class GenerateImageRequest(CoordinateRequest):
    styling_tips: list[str]
    accessories: list[Accessory] = Field(default_factory=list)
    color_palette: list[Color | str]
    include_face: bool = False
    locale: str | None = None


class CoordinateResult(CamelModel):
    score: int | None = Field(default=None, ge=0, le=100)
    styling_tips: list[str] = Field(default_factory=list)
    accessories: list[Accessory] = Field(default_factory=list)
    color_palette: list[Color | str] = Field(default_factory=list)
    overall_comment: str = ""


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: ErrorBody


class CoordinateResponse(BaseModel):
    success: Literal[True] = True
    data: CoordinateResult


class GeneratedImage(CamelModel):
    image_url: str


class GenerateImageResponse(BaseModel):
    success: Literal[True] = True
    data: GeneratedImage


class HealthResponse(BaseModel):
    status: str
    message: str | None = None
