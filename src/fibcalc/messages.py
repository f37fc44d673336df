# src/fibcalc/messages.py
from __future__ import annotations

from fibcalc.validator import ValidationErrorKind

DEFAULT_LOCALE = "en"

# Per-locale texts; "{max_n}" is filled in with the active bound
_ERRORS: dict[str, dict[ValidationErrorKind, str]] = {
    "en": {
        ValidationErrorKind.NOT_A_NUMBER: "Please enter a valid number",
        ValidationErrorKind.NEGATIVE: "The number must be non-negative (n ≥ 0)",
        ValidationErrorKind.TOO_LARGE: "Maximum value is n = {max_n}",
    },
    "ru": {
        ValidationErrorKind.NOT_A_NUMBER: "Пожалуйста, введите корректное число",
        ValidationErrorKind.NEGATIVE: "Число должно быть неотрицательным (n ≥ 0)",
        ValidationErrorKind.TOO_LARGE: "Максимальное значение n = {max_n}",
    },
}

_TEXTS: dict[str, dict[str, str]] = {
    "en": {
        "error_title": "Input error",
        "done_title": "Calculation complete",
        "history_header": "Last {count} calculations",
        "history_empty": "History is empty.",
        "prompt": "Enter n (0..{max_n})",
        "about": "Each Fibonacci number is the sum of the two before it",
        "examples": "Examples",
        "cleared": "Cleared.",
        "prefilled": "Input set to {n}. Press Enter to calculate.",
        "calculating": "Calculating...",
    },
    "ru": {
        "error_title": "Ошибка ввода",
        "done_title": "Вычисление завершено",
        "history_header": "Последние {count} вычислений",
        "history_empty": "История пуста.",
        "prompt": "Введите n (0..{max_n})",
        "about": "Каждое число Фибоначчи является суммой двух предыдущих",
        "examples": "Примеры",
        "cleared": "Очищено.",
        "prefilled": "Введено {n}. Нажмите Enter для вычисления.",
        "calculating": "Вычисляю...",
    },
}


def available_locales() -> list[str]:
    return sorted(_ERRORS)


def _resolve(locale: str | None) -> str:
    loc = (locale or DEFAULT_LOCALE).lower()
    return loc if loc in _ERRORS else DEFAULT_LOCALE


def error_message(kind: ValidationErrorKind, *, max_n: int, locale: str | None = None) -> str:
    return _ERRORS[_resolve(locale)][kind].format(max_n=max_n)


def text(key: str, locale: str | None = None, **fmt: object) -> str:
    return _TEXTS[_resolve(locale)][key].format(**fmt)
