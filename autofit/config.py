import os
from dotenv import load_dotenv

load_dotenv()

GOOGLE_CLOUD_PROJECT: str = os.getenv("GOOGLE_CLOUD_PROJECT", "")
GOOGLE_CLOUD_LOCATION: str = os.getenv("GOOGLE_CLOUD_LOCATION", "asia-northeast3")
# Gemini image generation is only served from a few regions
GOOGLE_CLOUD_IMAGE_LOCATION: str = os.getenv("GOOGLE_CLOUD_IMAGE_LOCATION", "us-central1")
GOOGLE_APPLICATION_CREDENTIALS_JSON: str = os.getenv("GOOGLE_APPLICATION_CREDENTIALS_JSON", "")

TEXT_MODEL: str = os.getenv("TEXT_MODEL", "gemini-2.5-flash")
IMAGE_MODEL: str = os.getenv("IMAGE_MODEL", "gemini-2.5-flash-image")

MAX_FILE_SIZE: int = int(os.getenv("MAX_FILE_SIZE", "10485760"))
CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON: bool = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")

ALLOWED_IMAGE_TYPES: list[str] = ["image/jpeg", "image/png", "image/webp"]

COMPRESSION_THRESHOLD: int = 1_048_576
COMPRESSION_TARGET: int = 524_288
COMPRESSION_MIN_WIDTH: int = 400

MAX_STYLE_OPTIONS: int = 3
MAX_STYLING_TIPS: int = 5
MAX_ACCESSORIES: int = 3
MAX_PALETTE_COLORS: int = 5
