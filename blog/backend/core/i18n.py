"""
Message Localisation.

Resolves the locale of a request and looks up message keys in the
locale tables under config/locales/. Tables are loaded once per process
through get_locale_tables() and never mutated.

Locale resolution order:
    1. ``lang`` query parameter
    2. Accept-Language header, highest quality first
    3. i18n.default_locale from application.yaml

A requested tag matches a configured locale exactly (case-insensitive) or
by primary subtag, so ``en-US`` resolves to ``en`` and ``zh`` to ``zh-TW``.
"""

from starlette.requests import Request

from blog.backend.core.config import get_app_config, get_locale_tables


def parse_accept_language(header: str | None) -> list[str]:
    """
    Split an Accept-Language header into tags ordered by quality.

    Args:
        header: Raw header value, e.g. ``"zh-TW,zh;q=0.9,en;q=0.8"``

    Returns:
        Language tags, highest quality first. Tags with q=0 are dropped.
    """
    if not header:
        return []

    weighted: list[tuple[float, int, str]] = []
    for position, entry in enumerate(header.split(",")):
        tag, _, params = entry.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0
        if quality > 0:
            weighted.append((-quality, position, tag))

    return [tag for _, _, tag in sorted(weighted)]


def match_locale(tag: str, supported: list[str]) -> str | None:
    """Return the configured locale matching a language tag, if any."""
    lowered = tag.lower()
    for locale in supported:
        if locale.lower() == lowered:
            return locale

    primary = lowered.split("-")[0]
    for locale in supported:
        if locale.lower().split("-")[0] == primary:
            return locale
    return None


def resolve_locale(request: Request) -> str:
    """Pick the response locale for a request."""
    i18n = get_app_config().application.i18n

    candidates: list[str] = []
    requested = request.query_params.get("lang")
    if requested:
        candidates.append(requested)
    candidates.extend(parse_accept_language(request.headers.get("accept-language")))

    for tag in candidates:
        locale = match_locale(tag, i18n.locales)
        if locale is not None:
            return locale
    return i18n.default_locale


def translate(key: str, locale: str | None, fallback: str) -> str:
    """
    Look up a message key.

    Falls back to the default locale's table, then to ``fallback``.
    """
    tables = get_locale_tables()
    default_locale = get_app_config().application.i18n.default_locale

    for name in (locale, default_locale):
        if name is None:
            continue
        message = tables.get(name, {}).get(key)
        if message is not None:
            return message
    return fallback


def request_locale(request: Request) -> str:
    """Locale stored by RequestContextMiddleware, resolved here when absent."""
    return getattr(request.state, "locale", None) or resolve_locale(request)
