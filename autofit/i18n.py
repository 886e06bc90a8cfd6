"""Language detection and the localized message catalog."""

from typing import Literal

from autofit import config

MEGABYTE = 1024 * 1024

Language = Literal["ko", "en", "ja"]

SUPPORTED_LANGUAGES: tuple[str, ...] = ("ko", "en", "ja")
DEFAULT_LANGUAGE: Language = "ko"

LANGUAGE_NAMES: dict[str, str] = {
    "ko": "한국어",
    "en": "English",
    "ja": "日本語",
}

MESSAGES: dict[str, dict[str, str]] = {
    "MISSING_FIELDS": {
        "ko": "필수 필드가 누락되었습니다.",
        "en": "Required fields are missing.",
        "ja": "必須項目が不足しています。",
    },
    "VALIDATION_ERROR": {
        "ko": "입력 데이터가 유효하지 않습니다.",
        "en": "The submitted data is invalid.",
        "ja": "入力データが無効です。",
    },
    "MISSING_FILE": {
        "ko": "이미지 파일이 필요합니다.",
        "en": "An image file is required.",
        "ja": "画像ファイルが必要です。",
    },
    "FILE_TOO_LARGE": {
        "ko": "파일 크기는 {max_mb:g}MB 이하여야 합니다.",
        "en": "The file must be {max_mb:g}MB or smaller.",
        "ja": "ファイルサイズは{max_mb:g}MB以下にしてください。",
    },
    "INVALID_FILE_TYPE": {
        "ko": "JPEG, PNG, WEBP 형식만 지원됩니다.",
        "en": "Only JPEG, PNG and WEBP images are supported.",
        "ja": "JPEG、PNG、WEBP形式のみ対応しています。",
    },
    "CONFIGURATION_ERROR": {
        "ko": "서버 설정 오류가 발생했습니다. 잠시 후 다시 시도해주세요.",
        "en": "The server is misconfigured. Please try again later.",
        "ja": "サーバー設定エラーが発生しました。しばらくしてから再度お試しください。",
    },
    "EMPTY_RESPONSE": {
        "ko": "AI 응답이 비어있습니다. 잠시 후 다시 시도해주세요.",
        "en": "The AI returned an empty response. Please try again.",
        "ja": "AIの応答が空でした。もう一度お試しください。",
    },
    "PARSE_ERROR": {
        "ko": "AI 응답을 파싱할 수 없습니다. 잠시 후 다시 시도해주세요.",
        "en": "Could not parse the AI response. Please try again.",
        "ja": "AIの応答を解析できませんでした。もう一度お試しください。",
    },
    "INTERNAL_ERROR": {
        "ko": "서버 오류가 발생했습니다. 잠시 후 다시 시도해주세요.",
        "en": "A server error occurred. Please try again later.",
        "ja": "サーバーエラーが発生しました。しばらくしてから再度お試しください。",
    },
    "height": {
        "ko": "신장은 100cm에서 250cm 사이여야 합니다.",
        "en": "Height must be between 100cm and 250cm.",
        "ja": "身長は100cmから250cmの間で入力してください。",
    },
    "weight": {
        "ko": "체중은 30kg에서 200kg 사이여야 합니다.",
        "en": "Weight must be between 30kg and 200kg.",
        "ja": "体重は30kgから200kgの間で入力してください。",
    },
    "invalid_field": {
        "ko": "올바른 값을 선택해주세요.",
        "en": "Please choose a valid value.",
        "ja": "有効な値を選択してください。",
    },
    "style_limit": {
        "ko": "최대 3개까지 선택 가능합니다.",
        "en": "You can select up to 3 styles.",
        "ja": "最大3つまで選択できます。",
    },
    "style_required": {
        "ko": "최소 1개 이상 선택해주세요.",
        "en": "Please select at least one style.",
        "ja": "少なくとも1つ選択してください。",
    },
    "incomplete_form": {
        "ko": "모든 필수 정보를 입력해주세요.",
        "en": "Please fill in all required information.",
        "ja": "すべての必須情報を入力してください。",
    },
    "unknown_error": {
        "ko": "알 수 없는 오류가 발생했습니다.",
        "en": "An unknown error occurred.",
        "ja": "不明なエラーが発生しました。",
    },
}


def is_supported(language: str | None) -> bool:
    return language in SUPPORTED_LANGUAGES


def detect_locale(accept_language: str | None) -> Language:
    """Pick a language from an Accept-Language header by substring match. No header means the default."""
    if not accept_language:
        return DEFAULT_LANGUAGE
    header = accept_language.lower()
    if "ko" in header:
        return "ko"
    if "ja" in header:
        return "ja"
    return "en"


def initial_language(stored: str | None, browser_locale: str | None) -> Language:
    """Resolve the session language: a valid stored preference wins, else the browser locale."""
    if is_supported(stored):
        return stored  # type: ignore[return-value]
    locale = (browser_locale or "").lower()
    if locale.startswith("ko"):
        return "ko"
    if locale.startswith("ja"):
        return "ja"
    return "en"


def message(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    entry = MESSAGES.get(key, MESSAGES["unknown_error"])
    text = entry.get(language) or entry[DEFAULT_LANGUAGE]
    return text.format(max_mb=round(config.MAX_FILE_SIZE / MEGABYTE, 1))
