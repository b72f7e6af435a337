"""
Request validation for the /user resource.

The user id comes from the ``id`` query parameter. The user name is resolved
through a fallback chain of extractors (JSON body, form body, query string);
the first non-empty result wins.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from pydantic import ValidationError as ModelValidationError
from starlette.datastructures import QueryParams

from .errors import ValidationError
from .models import CreateUserRequest


logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Signed 64-bit bounds
MIN_USER_ID = -(2 ** 63)
MAX_USER_ID = 2 ** 63 - 1

BYTE_ORDER_MARK = "\ufeff"


def first_value(params: QueryParams, key: str) -> str:
    """Return the first value of ``key`` (params may repeat keys), or ``""``."""
    values = params.getlist(key)
    return values[0] if values else ""


def parse_user_id(raw: Optional[str]) -> int:
    """
    Parse a user id: optional sign followed by ASCII digits, within int64.
    
    Whitespace, underscores, decimal points and out-of-range values are
    rejected with ``ValidationError("invalid id")``.
    """
    if not raw or not _ID_PATTERN.fullmatch(raw):
        raise ValidationError("invalid id")
    user_id = int(raw)
    if not MIN_USER_ID <= user_id <= MAX_USER_ID:
        raise ValidationError("invalid id")
    return user_id


@dataclass
class NameSource:
    """Everything the name extractors may read from one request."""
    method: str
    path: str
    body: bytes = b""
    content_type: str = ""
    query_params: QueryParams = field(default_factory=QueryParams)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


NameExtractor = Callable[[NameSource], str]


def name_from_json(source: NameSource) -> str:
    """Read ``name`` from a JSON object body. Parse failures are logged, not raised."""
    raw = source.text.strip()
    if raw.startswith(BYTE_ORDER_MARK):
        raw = raw[len(BYTE_ORDER_MARK):].strip()
    if not raw.startswith("{"):
        return ""
    
    try:
        req = CreateUserRequest.model_validate_json(raw)
    except ModelValidationError as e:
        logger.warning(
            f"{source.method} {source.path}: json unmarshal error: {e}; "
            f"raw={raw!r}; ctype={source.content_type!r}"
        )
        return ""
    return (req.name or "").strip()


def name_from_form(source: NameSource) -> str:
    """Read ``name`` from an application/x-www-form-urlencoded body."""
    form = QueryParams(source.text)
    return first_value(form, "name").strip()


def name_from_query(source: NameSource) -> str:
    """Read ``name`` from the query string."""
    return first_value(source.query_params, "name").strip()


NAME_EXTRACTORS: Sequence[NameExtractor] = (
    name_from_json,
    name_from_form,
    name_from_query,
)


def resolve_name(source: NameSource, extractors: Sequence[NameExtractor] = NAME_EXTRACTORS) -> str:
    """Try each extractor in order; raise ``ValidationError`` if none yields a name."""
    for extract in extractors:
        name = extract(source)
        if name:
            return name
    raise ValidationError("invalid name")
