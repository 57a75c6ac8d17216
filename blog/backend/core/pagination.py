"""
List Query Utilities.

Offset pagination, sorting and field projection for list endpoints.

Query parameters are lenient: a value that cannot be used (``limit=-1``,
``offset=abc``, ``direct=ascx``, an unknown ``sortby``) falls back to its
default instead of failing the request.

    limit    1..pagination.max_limit, default pagination.default_limit
    offset   >= 0, default 0
    sortby   one of the endpoint's sort fields, default createdAt
    direct   asc | desc, default desc
"""

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Query

from blog.backend.core.config import get_app_config


@dataclass(frozen=True)
class ListParams:
    """Resolved list parameters. ``sort_by`` is a model attribute name."""

    limit: int
    offset: int
    sort_by: str
    descending: bool


def _to_int(raw: str | None, default: int, minimum: int, maximum: int | None = None) -> int:
    """Parse an integer query value, falling back to ``default`` when unusable."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < minimum or (maximum is not None and value > maximum):
        return default
    return value


def resolve_list_params(
    limit: str | None,
    offset: str | None,
    sortby: str | None,
    direct: str | None,
    sort_fields: dict[str, str],
    default_sort: str = "createdAt",
) -> ListParams:
    """
    Turn raw query values into ListParams.

    Args:
        limit: Raw ``limit`` value
        offset: Raw ``offset`` value
        sortby: Raw ``sortby`` value, a public (camelCase) field name
        direct: Raw ``direct`` value
        sort_fields: Public field name to model attribute name
        default_sort: Public field used when ``sortby`` is missing or unknown

    Returns:
        ListParams with every value inside its allowed range
    """
    pagination = get_app_config().application.pagination

    sort_key = sortby if sortby in sort_fields else default_sort
    direction = (direct or "").lower()

    return ListParams(
        limit=_to_int(limit, pagination.default_limit, 1, pagination.max_limit),
        offset=_to_int(offset, 0, 0),
        sort_by=sort_fields[sort_key],
        descending=direction != "asc",
    )


def list_params(
    sort_fields: dict[str, str],
    default_sort: str = "createdAt",
) -> Callable[..., ListParams]:
    """
    Build a FastAPI dependency for an endpoint's list parameters.

    Usage:
        ArticleListParams = Annotated[ListParams, Depends(list_params(ARTICLE_SORT_FIELDS))]
    """

    def get_list_params(
        limit: str | None = Query(default=None, description="Maximum number of items to return"),
        offset: str | None = Query(default=None, description="Number of items to skip"),
        sortby: str | None = Query(default=None, description="Field to sort by"),
        direct: str | None = Query(default=None, description="Sort direction, asc or desc"),
    ) -> ListParams:
        return resolve_list_params(limit, offset, sortby, direct, sort_fields, default_sort)

    return get_list_params


def parse_fields(
    raw: str | None,
    allowed: dict[str, str],
    default: list[str],
) -> list[str]:
    """
    Parse a comma-separated field selection.

    ``id`` (also spelled ``_id``) is always included. Unknown names are
    ignored; when nothing usable remains the default selection applies.

    Args:
        raw: Raw query value, e.g. ``"_id,url,title"``
        allowed: Public field names that may be selected
        default: Public field names used when ``raw`` selects nothing

    Returns:
        Public field names, ``id`` first, in request order
    """
    requested = [name.strip() for name in (raw or "").split(",")]
    requested = ["id" if name == "_id" else name for name in requested]
    selected = [name for name in requested if name in allowed and name != "id"]

    if not selected and not any(name == "id" for name in requested):
        selected = [name for name in default if name != "id"]
    return ["id", *dict.fromkeys(selected)]
