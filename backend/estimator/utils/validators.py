import math
from typing import Optional

from estimator.config import settings
from estimator.errors import ValidationError


def clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def validate_name(value: Optional[str], label: str, max_length: int = 100) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError(f"{label}은(는) 필수입니다.")
    if len(name) > max_length:
        raise ValidationError(f"{label}은(는) {max_length}자를 넘을 수 없습니다.")
    return name


def validate_optional_text(value: Optional[str], label: str, max_length: int) -> Optional[str]:
    text = clean_text(value)
    if text is not None and len(text) > max_length:
        raise ValidationError(f"{label}은(는) {max_length}자를 넘을 수 없습니다.")
    return text


def validate_hours(value, label: str) -> float:
    if value is None:
        raise ValidationError(f"{label}은(는) 필수입니다.")
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label}은(는) 숫자여야 합니다.")
    if math.isnan(hours) or hours <= 0:
        raise ValidationError(f"{label}은(는) 0보다 커야 합니다.")
    if hours > settings.MAX_HOURS:
        raise ValidationError(f"{label}은(는) {settings.MAX_HOURS:g}시간을 넘을 수 없습니다.")
    return hours


def validate_hour_range(min_hours: float, max_hours: float, label: str = "최대 시간") -> None:
    if max_hours < min_hours:
        raise ValidationError(f"{label}은(는) 최소 시간보다 크거나 같아야 합니다. (min={min_hours:g}, max={max_hours:g})")


def validate_quantity(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("수량은 정수여야 합니다.")
    if value < 1:
        raise ValidationError("수량은 1 이상이어야 합니다.")
    if value > settings.MAX_QUANTITY:
        raise ValidationError(f"수량은 {settings.MAX_QUANTITY}을(를) 넘을 수 없습니다.")
    return value
