"""Prompt templates for Gemini. Every builder is pure: same input, same string."""

from autofit.i18n import DEFAULT_LANGUAGE, LANGUAGE_NAMES
from autofit.models import BodyInfo, Color, CoordinateRequest, GenerateImageRequest, body_shapes_for

NOT_PROVIDED = "미입력"

COORDINATION_PROMPT = """당신은 전문 패션 스타일리스트입니다. 제공된 사용자의 상세한 체형 정보를 분석하고, 최적의 코디네이션을 추천해주세요.

## 사용자 신체 정보
{body_section}

## 선호 스타일
{styles}

## 착용 상황 (TPO)
- 시간: {time}
- 장소: {place}
- 상황: {occasion}

## 신체 고민 사항
{concerns}

## 요청사항
당신은 전문 스타일리스트입니다. 이 사용자를 위한 최적의 패션 가이드를 제공해주세요:

1. **체형 분석**: 사용자의 신체 특징(어깨 너비, 체형 유형 등)과 고민사항을 고려한 맞춤 가이드
2. **스타일 추천**: 선호 스타일과 TPO에 완벽하게 어울리는 코디 제안
3. **실용적 팁**: 바로 적용 가능한 구체적인 스타일링 조언
4. **컬러 가이드**: 피부톤에 어울리는 색상 팔레트

## 응답 형식 (반드시 JSON 형식으로 응답)
```json
{{
  "stylingTips": [
    "구체적인 아이템과 스타일링 방법 (예: 하이웨스트 팬츠로 다리 길이 보정)",
    "색상 조합 가이드 (예: 네이비 재킷 + 화이트 셔츠로 깔끔한 이미지)",
    "핏과 실루엣 추천 (예: 오버사이즈보다 슬림핏으로 체형 강조)",
    "레이어링 방법 (예: 얇은 카디건으로 입체감 추가)",
    "상황별 활용 팁 (예: 포멀한 자리엔 넥타이, 캐주얼엔 스카프)"
  ],
  "accessories": [
    {{
      "name": "추천 액세서리 이름",
      "description": "어떤 스타일인지 설명",
      "reason": "왜 이 사용자에게 어울리는지"
    }}
  ],
  "colorPalette": [
    {{
      "name": "색상 이름 (예: 네이비 블루)",
      "hex": "#HEXCODE",
      "usage": "메인 컬러/포인트 컬러/액센트 등 활용 방법"
    }}
  ],
  "overallComment": "이 사용자에게 어울리는 전체적인 스타일 방향성과 핵심 포인트를 친근하게 설명 (200자 이내)"
}}
```

**중요**: 평가나 비판이 아닌, 긍정적이고 실용적인 가이드를 제공하세요. "~하면 더 좋아요", "~을 추천해요" 같은 톤으로 작성하세요.
{language_line}"""

PHOTO_ANALYSIS_PROMPT = """당신은 전문 패션 스타일리스트이자 이미지 컨설턴트입니다.
제공된 사용자 사진을 세밀하게 분석하고, 아래 정보를 종합하여 최적의 코디네이션을 추천해주세요.

## 📊 사용자 프로필
### 신체 정보
{body_section}

### 선호 스타일
{styles}

### 착용 상황 (TPO)
- **시간대**: {time}
- **장소**: {place}
- **상황**: {occasion}

### 신체 고민 사항
{concerns}

---

## 📝 분석 및 추천 요청사항

1. **현재 스타일 분석**
   - 사진 속 착용 의상의 핏, 색상, 스타일 평가
   - 체형과의 조화도 분석
   - TPO 적합성 평가

2. **개선 포인트**
   - 신체 비율을 보완할 수 있는 아이템 선택
   - 피부톤에 맞는 색상 팔레트
   - 체형 고민을 커버하는 실루엣 제안

3. **구체적 코디네이션 가이드**
   - 상의/하의/신발/아우터 조합
   - 레이어링 방법
   - 소재 및 패턴 선택

4. **스타일링 디테일**
   - 액세서리 활용법
   - 헤어스타일 제안
   - 메이크업 톤 (해당 시)

---

## 🎯 응답 형식

**반드시 아래 JSON 형식으로만 응답해주세요:**

```json
{{
  "score": 75,
  "stylingTips": [
    "구체적이고 실용적인 팁 1",
    "구체적이고 실용적인 팁 2",
    "구체적이고 실용적인 팁 3",
    "구체적이고 실용적인 팁 4",
    "구체적이고 실용적인 팁 5"
  ],
  "accessories": [
    {{
      "name": "액세서리 이름",
      "description": "20자 이내 설명",
      "reason": "이 액세서리가 스타일을 완성시키는 이유"
    }}
  ],
  "colorPalette": ["#HEXCODE1", "#HEXCODE2", "#HEXCODE3", "#HEXCODE4", "#HEXCODE5"],
  "overallComment": "전반적인 스타일 진단과 개선 방향을 150-200자로 요약"
}}
```

### 점수 기준 (0-100)
- **90-100**: 완벽한 조화, TPO 최적, 체형 보완 탁월
- **80-89**: 우수한 스타일링, 약간의 개선 여지
- **70-79**: 양호, 몇 가지 개선 필요
- **60-69**: 보통, 상당한 개선 필요
- **0-59**: 전반적인 재검토 필요

### 주의사항
- 모든 조언은 구체적이고 실행 가능해야 합니다
- 한국 패션 트렌드를 반영해주세요
- 색상 코드는 반드시 유효한 Hex 코드로 제공
- 액세서리는 실제 구매 가능한 일반적인 아이템으로
{language_line}"""

WITH_FACE = "위 사진 속 인물과 동일한 얼굴, 체형, 피부톤으로 생성"
WITHOUT_FACE = "위 사진 속 인물과 동일한 체형, 피부톤의 모델로 생성 (얼굴은 가상의 모델 얼굴 사용)"

IMAGE_GENERATION_PROMPT = """이 사람을 위한 3가지 다른 패션 코디 옵션을 나란히 보여주는 이미지 1장을 생성해주세요.

## 인물 정보
- 신장: {height}cm, 체중: {weight}kg
- 체형: {body_type}
- 피부톤: {skin_tone}
- 신체 고민: {concerns}

## 착용 상황 (TPO)
{time}, {place}에서 {occasion} 상황

## 코디 스타일
스타일: {styles}

## 구체적인 스타일링 가이드
{tips}

## 추천 컬러
{colors}

## 추천 액세서리
{accessories}

---

**이미지 생성 요구사항:**
1. {person_description}
2. 같은 인물이 서로 다른 3가지 코디를 입은 모습을 가로로 나란히 배치
3. 각 코디는 전신 샷(머리부터 발끝까지)
4. 3가지 코디 모두 위 스타일링 가이드를 기반으로 하되, 각각 다른 조합으로 구성:
   - 첫 번째: 가장 포멀하고 정통적인 스타일
   - 두 번째: 캐주얼하면서도 세련된 스타일
   - 세 번째: 액세서리와 컬러를 강조한 대담한 스타일
5. TPO에 적합한 코디네이션
6. 추천 컬러 팔레트 색상 활용
7. 깔끔하고 전문적인 패션 룩북 스타일
8. 고화질, 자연스러운 조명
9. 3개의 코디가 한 장의 이미지에 균등하게 배치

이미지 1장만 생성하세요."""


def _numbered(items: list[str]) -> str:
    return "\n".join(f"{idx}. {item}" for idx, item in enumerate(items, start=1))


def _number(value: float) -> str:
    return f"{value:g}"


def _language_line(language: str) -> str:
    return f"- 모든 텍스트 값은 {LANGUAGE_NAMES.get(language, LANGUAGE_NAMES[DEFAULT_LANGUAGE])}로 작성해주세요"


def _body_shape_line(info: BodyInfo) -> str:
    if info.gender is None:
        return f"- 체형 유형: {info.body_shape or NOT_PROVIDED}"
    options = "/".join(body_shapes_for(info.gender))
    return f"- 체형 유형: {info.body_shape or NOT_PROVIDED} ({info.gender} 기준 {options} 중)"


def _body_section(info: BodyInfo) -> str:
    return "\n".join([
        f"- 성별: {info.gender or NOT_PROVIDED}",
        f"- 신장: {_number(info.height)}cm",
        f"- 체중: {_number(info.weight)}kg",
        f"- 전체 체형: {info.body_type}",
        f"- 피부톤: {info.skin_tone}",
        f"- 어깨 너비: {info.shoulder_width or NOT_PROVIDED}",
        _body_shape_line(info),
    ])


def _color_label(color: Color | str) -> str:
    if isinstance(color, str):
        return color
    return f"{color.name} ({color.hex})" if color.name else color.hex


def build_coordination_prompt(request: CoordinateRequest, language: str = DEFAULT_LANGUAGE) -> str:
    """Text-only analysis from the body profile, style, TPO and concerns."""
    return COORDINATION_PROMPT.format(
        body_section=_body_section(request.body_info),
        styles=", ".join(request.style_options),
        time=request.tpo.time,
        place=request.tpo.place,
        occasion=request.tpo.occasion,
        concerns=", ".join(request.body_concerns) if request.body_concerns else "없음",
        language_line=_language_line(language),
    )


def build_photo_analysis_prompt(request: CoordinateRequest, language: str = DEFAULT_LANGUAGE) -> str:
    """Analysis of an attached photo, including a 0-100 score."""
    return PHOTO_ANALYSIS_PROMPT.format(
        body_section=_body_section(request.body_info),
        styles=_numbered(list(request.style_options)),
        time=request.tpo.time,
        place=request.tpo.place,
        occasion=request.tpo.occasion,
        concerns=_numbered(list(request.body_concerns)) if request.body_concerns else "- 특별한 고민 없음",
        language_line=_language_line(language),
    )


def build_image_generation_prompt(request: GenerateImageRequest) -> str:
    info = request.body_info
    return IMAGE_GENERATION_PROMPT.format(
        height=_number(info.height),
        weight=_number(info.weight),
        body_type=info.body_type,
        skin_tone=info.skin_tone,
        concerns=", ".join(request.body_concerns) if request.body_concerns else "없음",
        time=request.tpo.time,
        place=request.tpo.place,
        occasion=request.tpo.occasion,
        styles=", ".join(request.style_options),
        tips=_numbered(request.styling_tips),
        colors=", ".join(_color_label(c) for c in request.color_palette),
        accessories=", ".join(a.name for a in request.accessories) if request.accessories else "없음",
        person_description=WITH_FACE if request.include_face else WITHOUT_FACE,
    )
