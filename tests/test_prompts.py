"""Prompt templates are pure and branch only on includeFace and gender."""
from autofit.models import CoordinateRequest, GenerateImageRequest
from autofit.prompts import (
    WITH_FACE, WITHOUT_FACE,
    build_coordination_prompt, build_image_generation_prompt, build_photo_analysis_prompt,
)


def _request(body_info: dict, tpo: dict, concerns: list[str] | None = None) -> CoordinateRequest:
    return CoordinateRequest.model_validate({
        "bodyInfo": body_info,
        "styleOptions": ["미니멀", "비즈니스"],
        "tpo": tpo,
        "bodyConcerns": concerns or [],
    })


def _image_request(body_info: dict, tpo: dict, include_face: bool) -> GenerateImageRequest:
    return GenerateImageRequest.model_validate({
        "bodyInfo": body_info,
        "styleOptions": ["캐주얼"],
        "tpo": tpo,
        "stylingTips": ["하이웨스트 팬츠", "화이트 셔츠"],
        "accessories": [{"name": "실버 시계", "description": "", "reason": ""}],
        "colorPalette": ["#FFFFFF", {"name": "네이비", "hex": "#1F2A44", "usage": "메인"}],
        "includeFace": include_face,
    })


def test_coordination_prompt_is_deterministic(detailed_body_info, tpo):
    first = build_coordination_prompt(_request(detailed_body_info, tpo))
    second = build_coordination_prompt(_request(detailed_body_info, tpo))
    assert first == second


def test_coordination_prompt_interpolates_profile(detailed_body_info, tpo):
    prompt = build_coordination_prompt(_request(detailed_body_info, tpo, ["키가 작음"]))

    assert "- 신장: 162cm" in prompt
    assert "- 체중: 52kg" in prompt
    assert "- 어깨 너비: 좁음" in prompt
    assert "미니멀, 비즈니스" in prompt
    assert "- 장소: 레스토랑" in prompt
    assert "키가 작음" in prompt
    assert '"stylingTips"' in prompt


def test_body_shape_vocabulary_follows_gender(detailed_body_info, tpo):
    female = build_coordination_prompt(_request(detailed_body_info, tpo))
    male_info = {**detailed_body_info, "gender": "남성", "bodyShape": "사다리꼴"}
    male = build_coordination_prompt(_request(male_info, tpo))

    assert "모래시계/삼각형/역삼각형/직사각형/원형" in female
    assert "역삼각형/직사각형/사다리꼴/원형" in male


def test_simple_body_info_marks_missing_fields(simple_body_info, tpo):
    prompt = build_coordination_prompt(_request(simple_body_info, tpo))
    assert "- 성별: 미입력" in prompt
    assert "- 전체 체형: 표준" in prompt


def test_no_concerns_wording(simple_body_info, tpo):
    assert "## 신체 고민 사항\n없음" in build_coordination_prompt(_request(simple_body_info, tpo))
    assert "- 특별한 고민 없음" in build_photo_analysis_prompt(_request(simple_body_info, tpo))


def test_language_line(simple_body_info, tpo):
    assert "English" in build_coordination_prompt(_request(simple_body_info, tpo), language="en")
    assert "日本語" in build_photo_analysis_prompt(_request(simple_body_info, tpo), language="ja")


def test_photo_prompt_asks_for_score(simple_body_info, tpo):
    prompt = build_photo_analysis_prompt(_request(simple_body_info, tpo))
    assert '"score": 75' in prompt
    assert "1. 미니멀\n2. 비즈니스" in prompt


def test_image_prompt_face_sentence(simple_body_info, tpo):
    with_face = build_image_generation_prompt(_image_request(simple_body_info, tpo, True))
    without_face = build_image_generation_prompt(_image_request(simple_body_info, tpo, False))

    assert WITH_FACE in with_face and WITHOUT_FACE not in with_face
    assert WITHOUT_FACE in without_face and WITH_FACE not in without_face


def test_image_prompt_lists_guidance(simple_body_info, tpo):
    prompt = build_image_generation_prompt(_image_request(simple_body_info, tpo, False))

    assert "1. 하이웨스트 팬츠\n2. 화이트 셔츠" in prompt
    assert "#FFFFFF, 네이비 (#1F2A44)" in prompt
    assert "실버 시계" in prompt
    assert "저녁, 레스토랑에서 데이트 상황" in prompt
