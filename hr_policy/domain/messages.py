"""Code -> localized text for enum labels, backend errors and notifications.

The translator exposes no "has key" lookup. A miss is recognised by the
translator echoing the key back (optionally prefixed with its namespace), and
every resolver here falls back on that signal or on any translator failure.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Final, Mapping

from hr_policy.config import settings
from hr_policy.domain.collaborators import DateFormatter, Locale, MessageParams, Translator
from hr_policy.observability import log_event, record_fallback

ISO_DATE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Whitespace, Latin letters with diacritics, or combining marks: the upstream
# sent a sentence rather than a machine code.
_HUMAN_READABLE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\s|[\u00C0-\u024F\u1E00-\u1EFF\u0300-\u036F]"
)

KNOWN_ERROR_CODES: Final[tuple[str, ...]] = (
    "INVALID_CREDENTIALS",
    "EMAIL_EXISTS",
    "USER_NOT_FOUND",
    "COMPANY_NOT_FOUND",
    "ACCOUNT_DISABLED",
    "INVALID_OTP",
    "OTP_EXPIRED",
    "TOKEN_EXPIRED",
    "UNAUTHORIZED",
    "FORBIDDEN",
    "VALIDATION_ERROR",
    "INSUFFICIENT_BALANCE",
    "DEPOSIT_NOT_FOUND",
    "DEPOSIT_ALREADY_PROCESSED",
    "PLAN_NOT_FOUND",
    "PLAN_IN_USE",
    "PAYROLL_PERIOD_LOCKED",
    "LEAVE_BALANCE_INSUFFICIENT",
    "SHIFT_OVERLAP",
    "INTERNAL_ERROR",
)

TIMEZONE_LOCALES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "Asia/Ho_Chi_Minh": "vi",
        "Asia/Tokyo": "ja",
    }
)


def resolve_locale(value: str | None) -> str:
    """Map a stored locale or timezone to a supported locale code."""
    if not value:
        return settings.default_locale
    locale = TIMEZONE_LOCALES.get(value, value)
    if locale in settings.supported_locales:
        return locale
    return settings.default_locale


def is_known_error_code(code: str | None) -> bool:
    return bool(code) and code in KNOWN_ERROR_CODES


def is_translation_miss(result: object, key: str, namespace: str | None = None) -> bool:
    if not isinstance(result, str) or not result:
        return True
    if result == key:
        return True
    return namespace is not None and result == f"{namespace}.{key}"


def _call(t: Translator, key: str, params: MessageParams | None = None) -> Any:
    if params:
        return t(key, params)
    return t(key)


def _lookup(
    t: Translator,
    key: str,
    *,
    family: str,
    namespace: str | None,
    params: MessageParams | None = None,
) -> str | None:
    """Translated text for ``key``, or None on a miss or translator failure."""
    try:
        result = _call(t, key, params)
    except Exception as exc:
        record_fallback("translator_failed", labels={"family": family}, key=key, error=str(exc))
        return None
    if is_translation_miss(result, key, namespace):
        record_fallback("translation_miss", level=logging.DEBUG, labels={"family": family}, key=key)
        return None
    return result


def get_enum_label(enum_name: str, value: str | None, t: Translator) -> str:
    if value is None or value == "":
        return ""
    value = str(value)
    label = _lookup(
        t,
        f"{enum_name}.{value}",
        family="enum",
        namespace=settings.enums_namespace,
    )
    return value if label is None else label


def _generic_message(t: Translator) -> str:
    try:
        message = t(settings.generic_error_key)
    except Exception as exc:
        log_event("generic_message_failed", level=logging.WARNING, error=str(exc))
        return settings.generic_error_text
    if not isinstance(message, str) or not message:
        return settings.generic_error_text
    return message


def _read(error: object, *names: str) -> Any:
    for name in names:
        if isinstance(error, Mapping):
            value = error.get(name)
        else:
            value = getattr(error, name, None)
        if value is not None:
            return value
    return None


def _normalize_error(error: object) -> tuple[str | None, str | None]:
    if error is None:
        return None, None
    if isinstance(error, str):
        return error or None, None
    code = _read(error, "errorCode", "error_code")
    message = _read(error, "message")
    if message is None and isinstance(error, BaseException):
        message = str(error)
    code = code if isinstance(code, str) and code else None
    message = message if isinstance(message, str) and message else None
    return code, message


def looks_human_readable(code: str) -> bool:
    return bool(_HUMAN_READABLE_PATTERN.search(code))


def get_error_message(error: object, t: Translator, fallback: str | None = None) -> str:
    """User-facing text for a backend error.

    ``error`` is a code string, or a mapping/object carrying ``errorCode`` and
    ``message``. An exception without a ``message`` attribute contributes
    ``str(exc)`` as the upstream message. Failures fall back to the upstream
    message, then ``fallback``, then the catalog's generic message.
    """
    code, original_message = _normalize_error(error)

    def _fallback() -> str:
        return original_message or fallback or _generic_message(t)

    if code is None:
        return _fallback()

    # TODO: drop once every backend path returns machine codes instead of sentences.
    if looks_human_readable(code):
        return code

    message = _lookup(t, code, family="error", namespace=settings.errors_namespace)
    if message is None:
        return _fallback()
    return message


def _format_date_params(
    params: Mapping[str, Any],
    locale: str,
    format_date: DateFormatter,
) -> dict[str, Any]:
    formatted = dict(params)
    for key, value in params.items():
        if isinstance(value, str) and ISO_DATE_PATTERN.match(value):
            formatted[key] = format_date(value, locale)
    return formatted


def _is_single_day(params: Mapping[str, Any]) -> bool:
    start = params.get("startDate")
    end = params.get("endDate")
    return bool(start) and bool(end) and start == end


def translate_notification(
    code: str,
    params: Mapping[str, Any] | None,
    t: Translator,
    locale: Locale | None = None,
    *,
    format_date: DateFormatter | None = None,
) -> str:
    """Render a notification code through the ``codes.*`` catalog.

    With a locale and a date formatter, ``yyyy-MM-dd`` params are rendered as
    dates with their weekday before interpolation. A locale without a formatter
    leaves the dates raw. A single-day range prefers the ``<code>_SINGLE``
    message.
    """
    if not code:
        return ""
    params = params or {}
    namespace = settings.notification_namespace
    prefix = settings.notification_codes_prefix

    try:
        interpolated = dict(params)
        if locale and format_date is not None:
            interpolated = _format_date_params(params, locale, format_date)
        elif locale:
            log_event("notification_dates_unformatted", level=logging.DEBUG, code=code, locale=locale)

        if _is_single_day(params):
            single_key = f"{prefix}.{code}{settings.notification_single_day_suffix}"
            message = _lookup(
                t,
                single_key,
                family="notification",
                namespace=namespace,
                params=interpolated,
            )
            if message is not None:
                return message

        message = _lookup(
            t,
            f"{prefix}.{code}",
            family="notification",
            namespace=namespace,
            params=interpolated,
        )
    except Exception as exc:
        log_event(
            "notification_render_failed",
            level=logging.WARNING,
            code=code,
            error=str(exc),
        )
        return code
    return code if message is None else message
