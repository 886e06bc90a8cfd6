"""
Shared fixtures for the AutoFit tests.

No test talks to Vertex AI: the gateway functions are patched where the
pipeline imports them.
"""
import io
import json
import random
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image


# ============================================================================
# Fixtures: Request data
# ============================================================================

@pytest.fixture
def simple_body_info() -> dict:
    """Body info as the simple form sends it."""
    return {"height": 170, "weight": 65, "bodyType": "표준", "skinTone": "중성"}


@pytest.fixture
def detailed_body_info() -> dict:
    """Body info from the detailed form (gender, shoulders, shape)."""
    return {
        "gender": "여성",
        "height": 162,
        "weight": 52,
        "bodyType": "보통",
        "skinTone": "웜톤",
        "shoulderWidth": "좁음",
        "bodyShape": "모래시계",
    }


@pytest.fixture
def tpo() -> dict:
    return {"time": "저녁", "place": "레스토랑", "occasion": "데이트"}


@pytest.fixture
def coordinate_payload(simple_body_info: dict, tpo: dict) -> dict:
    return {
        "bodyInfo": simple_body_info,
        "styleOptions": ["캐주얼"],
        "tpo": tpo,
        "bodyConcerns": [],
    }


@pytest.fixture
def model_reply() -> str:
    """A typical fenced Gemini reply with one tip too many."""
    payload = {
        "stylingTips": [f"팁 {i}" for i in range(1, 7)],
        "accessories": [{"name": "가죽 벨트", "description": "브라운 벨트", "reason": "허리선 강조"}],
        "colorPalette": [{"name": "네이비", "hex": "#1F2A44", "usage": "메인 컬러"}],
        "overallComment": "깔끔한 세미 캐주얼을 추천해요.",
    }
    return "분석 결과입니다.\n```json\n" + json.dumps(payload, ensure_ascii=False) + "\n```"


# ============================================================================
# Fixtures: Images
# ============================================================================

def make_image_bytes(width: int = 64, height: int = 64, fmt: str = "PNG", noise: bool = False) -> bytes:
    if noise:
        rng = random.Random(42)
        img = Image.frombytes("RGB", (width, height), rng.randbytes(width * height * 3))
    else:
        img = Image.new("RGB", (width, height), (120, 80, 200))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def small_png() -> bytes:
    return make_image_bytes()


@pytest.fixture(scope="session")
def large_png() -> bytes:
    """Random noise PNG, well over the 1MB compression threshold."""
    data = make_image_bytes(1024, 1024, noise=True)
    assert len(data) >= 1_048_576
    return data


# ============================================================================
# Fixtures: Gateway mocks and clients
# ============================================================================

@pytest.fixture
def mock_generate_text(model_reply: str):
    with patch("autofit.pipeline.generate_text", new=AsyncMock(return_value=model_reply)) as mock:
        yield mock


@pytest.fixture
def mock_generate_image():
    with patch("autofit.pipeline.generate_image", new=AsyncMock(return_value=(b"fake-png", "image/png"))) as mock:
        yield mock


@pytest.fixture
def app():
    from autofit.main import app
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def asgi_transport(app) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=app)


@pytest.fixture
def image_factory():
    return make_image_bytes
