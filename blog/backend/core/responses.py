"""
Response Formatter.

Builds the JSON envelope returned by every endpoint.

Success:
    {"status": 201, "message": "Create article successfully", "data": {...}}

Error:
    {"status": 400, "level": "warning", "message": "The url has been used", "extra": ""}

Message keys are namespaced ``<type><File>-<code>`` (``articleApi-1000``).
The success text is looked up as ``success-<key>`` and the error text as
``error-<key>``. The error ``level`` comes from error_levels.yaml.

``extra`` explains the cause of an error. A ``domain,layer,code`` triple
(as raised by repositories and the credential verifier) is translated into
its own message; any other cause is reported as its string form. Outside
production only; in production ``extra`` is always empty.
"""

import re
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from blog.backend.core.config import get_app_config
from blog.backend.core.i18n import translate

MISSING_SUCCESS_MESSAGE = "Translate message not found"
MISSING_ERROR_MESSAGE = "Error code not found"

_TRIPLE = re.compile(r"^\s*(\w+)\s*,\s*(\w+)\s*,\s*(\d+)\s*$")


def message_key(kind: str, file: str, code: int | str) -> str:
    """
    Build a namespaced message key.

    Example:
        message_key("article", "api", 1000) -> "articleApi-1000"
    """
    return f"{kind}{file[:1].upper()}{file[1:]}-{code}"


def describe_error(error: Any, locale: str | None) -> str:
    """Render the cause of an error for the ``extra`` field."""
    if error is None:
        return ""

    text = str(error)
    match = _TRIPLE.match(text)
    if match:
        domain, layer, code = match.groups()
        return translate(f"error-{message_key(domain, layer, code)}", locale, MISSING_ERROR_MESSAGE)
    return text


def success_body(
    status_code: int,
    key: str,
    data: Any = None,
    locale: str | None = None,
) -> dict[str, Any]:
    """Build the success envelope. ``data`` is omitted when None."""
    body: dict[str, Any] = {
        "status": status_code,
        "message": translate(f"success-{key}", locale, MISSING_SUCCESS_MESSAGE),
    }
    if data is not None:
        body["data"] = jsonable_encoder(data, by_alias=True)
    return body


def error_body(
    status_code: int,
    key: str,
    error: Any = None,
    locale: str | None = None,
) -> dict[str, Any]:
    """Build the error envelope."""
    app_config = get_app_config()
    extra = "" if app_config.application.is_production else describe_error(error, locale)
    return {
        "status": status_code,
        "level": app_config.error_levels.level_for(key),
        "message": translate(f"error-{key}", locale, MISSING_ERROR_MESSAGE),
        "extra": extra,
    }


def success_response(
    status_code: int,
    key: str,
    data: Any = None,
    locale: str | None = None,
) -> JSONResponse:
    """
    Build a success response.

    Args:
        status_code: HTTP status, also echoed in the body
        key: Message key, e.g. ``articleApi-1000``
        data: Payload; pydantic models are serialised by alias
        locale: Locale for the message text

    Returns:
        JSONResponse with the success envelope
    """
    return JSONResponse(
        status_code=status_code,
        content=success_body(status_code, key, data, locale),
    )


def error_response(
    status_code: int,
    key: str,
    error: Any = None,
    locale: str | None = None,
) -> JSONResponse:
    """Build an error response. See error_body for the envelope."""
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, key, error, locale),
    )
