"""Extracting and shaping the JSON in Gemini replies."""
import json

import pytest

from autofit.errors import ResponseParseError
from autofit.models import Color
from autofit.parser import extract_json_block, parse_coordinate_response


def test_fenced_block_gets_defaults():
    result = parse_coordinate_response('```json\n{"stylingTips":["a"]}\n```')

    assert result.model_dump(by_alias=True, exclude_none=True) == {
        "stylingTips": ["a"],
        "accessories": [],
        "colorPalette": [],
        "overallComment": "",
    }
    assert result.score is None


def test_unfenced_text_is_parsed_whole():
    result = parse_coordinate_response('{"overallComment": "좋아요"}')
    assert result.overall_comment == "좋아요"


def test_extract_prefers_fence_over_surrounding_text():
    text = 'Here you go:\n```json\n{"a": 1}\n```\nThanks!'
    assert extract_json_block(text) == '{"a": 1}'


def test_invalid_json_raises_typed_error():
    with pytest.raises(ResponseParseError):
        parse_coordinate_response("죄송합니다, 분석할 수 없습니다.")


def test_non_object_json_raises():
    with pytest.raises(ResponseParseError):
        parse_coordinate_response("[1, 2, 3]")


def test_wrongly_shaped_field_raises():
    with pytest.raises(ResponseParseError):
        parse_coordinate_response('{"stylingTips": "just one string"}')


def test_lists_are_capped():
    payload = {
        "stylingTips": [str(i) for i in range(8)],
        "accessories": [{"name": f"a{i}"} for i in range(5)],
        "colorPalette": [f"#00000{i}" for i in range(7)],
    }
    result = parse_coordinate_response(json.dumps(payload))

    assert len(result.styling_tips) == 5
    assert len(result.accessories) == 3
    assert len(result.color_palette) == 5


def test_palette_accepts_hex_strings_and_triples():
    payload = {"colorPalette": ["#FFFFFF", {"name": "네이비", "hex": "#1F2A44", "usage": "메인"}]}
    result = parse_coordinate_response(json.dumps(payload, ensure_ascii=False))

    assert result.color_palette[0] == "#FFFFFF"
    assert result.color_palette[1] == Color(name="네이비", hex="#1F2A44", usage="메인")


def test_score_is_kept_when_valid():
    result = parse_coordinate_response('{"score": 82}', expect_score=True)
    assert result.score == 82


@pytest.mark.parametrize("raw", ['{}', '{"score": 140}', '{"score": "high"}'])
def test_missing_or_bad_score_is_not_invented(raw):
    result = parse_coordinate_response(raw, expect_score=True)
    assert result.score is None
