"""Annotated field types used by form schemas.

Each helper returns an ``Annotated`` type carrying its own coercion and
error messages so schemas read as a flat list of constraints::

    class AssetForm(FormSchema):
        name: required_text("Asset name is required.") = Field("", title="Name")
        value: number(ge=0, ge_message="Value cannot be negative.") = Field(0, title="Value")

Values arrive as strings from HTML forms or as native JSON types; both are
accepted. Blank input is treated as missing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import AfterValidator, BeforeValidator, HttpUrl, TypeAdapter, ValidationError
from pydantic_core import PydanticCustomError

REQUIRED_MESSAGE = "This field is required."
NUMBER_MESSAGE = "Enter a valid number."
WHOLE_NUMBER_MESSAGE = "Enter a whole number."
DATE_MESSAGE = "Enter a valid date (YYYY-MM-DD)."
MONTH_MESSAGE = "Enter a valid month (YYYY-MM)."
URL_MESSAGE = "Enter a valid http(s) URL."

_TRUTHY = {"1", "true", "yes", "on", "y"}
_FALSY = {"", "0", "false", "no", "off", "n"}


@dataclass(frozen=True, slots=True)
class Requirement:
    """Marker stored in field metadata so renderers know what is mandatory."""

    required: bool = True


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _format_bound(value: float) -> str:
    return f"{value:g}" if abs(value) < 1e15 else str(value)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def required_text(
    message: str,
    *,
    min_length: int = 1,
    max_length: int | None = None,
    max_message: str | None = None,
) -> Any:
    """Text that must be present and at least ``min_length`` characters long."""

    def check(value: str) -> str:
        if len(value) < min_length:
            raise PydanticCustomError("string_too_short", message)
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError("string_too_long", max_message or message)
        return value

    return Annotated[str, BeforeValidator(_as_text), AfterValidator(check), Requirement()]


def exact_text(length: int, message: str) -> Any:
    """Text that must be exactly ``length`` characters (GSTIN, Aadhar, year)."""

    def check(value: str) -> str:
        if len(value) != length:
            raise PydanticCustomError("string_length", message)
        return value

    return Annotated[str, BeforeValidator(_as_text), AfterValidator(check), Requirement()]


def optional_text(*, max_length: int | None = None) -> Any:
    """Free text that may be left blank."""

    def check(value: str) -> str:
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "string_too_long", f"Must be {max_length} characters or fewer."
            )
        return value

    return Annotated[str, BeforeValidator(_as_text), AfterValidator(check), Requirement(False)]


_HTTP_URL = TypeAdapter(HttpUrl)


def optional_url(message: str = URL_MESSAGE) -> Any:
    """An http(s) URL, or blank."""

    def check(value: str) -> str:
        if not value:
            return value
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError:
            raise PydanticCustomError("url_parsing", message) from None
        return value

    return Annotated[str, BeforeValidator(_as_text), AfterValidator(check), Requirement(False)]


def number(
    *,
    ge: float | None = None,
    le: float | None = None,
    gt: float | None = None,
    ge_message: str | None = None,
    le_message: str | None = None,
    gt_message: str | None = None,
    optional: bool = False,
    whole: bool = False,
    required_message: str = REQUIRED_MESSAGE,
) -> Any:
    """Numeric input with bounds.

    ``ge``/``le`` are inclusive, ``gt`` is exclusive. Blank input is an error
    unless ``optional`` is set, in which case it becomes ``None``. ``whole``
    restricts the value to integers.
    """

    def coerce(value: Any) -> Any:
        if _is_blank(value):
            if optional:
                return None
            raise PydanticCustomError("value_required", required_message)
        if isinstance(value, bool):
            raise PydanticCustomError("number_parsing", NUMBER_MESSAGE)
        try:
            if isinstance(value, (int, float)):
                parsed = float(value)
            else:
                parsed = float(str(value).strip().replace(",", ""))
        except (ValueError, OverflowError):
            raise PydanticCustomError("number_parsing", NUMBER_MESSAGE) from None
        if not math.isfinite(parsed):
            raise PydanticCustomError("number_parsing", NUMBER_MESSAGE)
        if whole:
            if not parsed.is_integer():
                raise PydanticCustomError("int_parsing", WHOLE_NUMBER_MESSAGE)
            return int(parsed)
        return parsed

    def bounds(value: Any) -> Any:
        if value is None:
            return value
        if gt is not None and value <= gt:
            raise PydanticCustomError(
                "greater_than", gt_message or f"Must be greater than {_format_bound(gt)}."
            )
        if ge is not None and value < ge:
            default = "Cannot be negative." if ge == 0 else f"Must be at least {_format_bound(ge)}."
            raise PydanticCustomError("greater_than_equal", ge_message or default)
        if le is not None and value > le:
            raise PydanticCustomError(
                "less_than_equal", le_message or f"Cannot exceed {_format_bound(le)}."
            )
        return value

    base: Any = int if whole else float
    if optional:
        base = Optional[base]
    return Annotated[base, BeforeValidator(coerce), AfterValidator(bounds), Requirement(not optional)]


def integer(**kwargs: Any) -> Any:
    """Shorthand for ``number(whole=True, ...)``."""

    return number(whole=True, **kwargs)


def parse_date(value: Any) -> date:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a ``date``."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return datetime.strptime(text, "%Y-%m-%d").date()
    return datetime.fromisoformat(text).date()


def parse_month(value: Any) -> date:
    """Parse ``YYYY-MM`` (or any full date) into the first day of that month."""

    if isinstance(value, (date, datetime)):
        return parse_date(value).replace(day=1)
    text = str(value).strip()
    if len(text) == 7:
        return datetime.strptime(text, "%Y-%m").date()
    return parse_date(text).replace(day=1)


def calendar_date(message: str = "A date is required.") -> Any:
    """A calendar date; ``message`` is used when nothing was picked."""

    def coerce(value: Any) -> date:
        if _is_blank(value):
            raise PydanticCustomError("value_required", message)
        try:
            return parse_date(value)
        except (TypeError, ValueError):
            raise PydanticCustomError("date_parsing", DATE_MESSAGE) from None

    return Annotated[date, BeforeValidator(coerce), Requirement()]


def calendar_month(message: str = "A month is required.") -> Any:
    """A month, stored as the first day of that month."""

    def coerce(value: Any) -> date:
        if _is_blank(value):
            raise PydanticCustomError("value_required", message)
        try:
            return parse_month(value)
        except (TypeError, ValueError):
            raise PydanticCustomError("date_parsing", MONTH_MESSAGE) from None

    return Annotated[date, BeforeValidator(coerce), Requirement()]


def choice(*options: str, message: str | None = None) -> Any:
    """One of a fixed set of values, rendered as a select or radio group."""

    if not options:
        raise ValueError("choice() needs at least one option")
    error = message or f"Choose one of: {', '.join(options)}."

    def check(value: Any) -> str:
        text = _as_text(value).strip()
        if text not in options:
            raise PydanticCustomError("literal_error", error)
        return text

    return Annotated[Literal[options], BeforeValidator(check), Requirement()]


def coerce_checkbox(value: Any) -> bool:
    """Map checkbox submissions (``on``, ``true``, missing) to booleans."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise PydanticCustomError("bool_parsing", "Tick the box or leave it empty.")


def checkbox() -> Any:
    """A tick box; missing means unticked."""

    return Annotated[bool, BeforeValidator(coerce_checkbox), Requirement(False)]


def line_items(item_schema: type, message: str = "Please add at least one item.") -> Any:
    """A repeating table of ``item_schema`` rows; at least one row is required."""

    def check(rows: list) -> list:
        if not rows:
            raise PydanticCustomError("too_short", message)
        return rows

    return Annotated[list[item_schema], AfterValidator(check), Requirement()]


__all__ = [
    "DATE_MESSAGE",
    "MONTH_MESSAGE",
    "NUMBER_MESSAGE",
    "REQUIRED_MESSAGE",
    "WHOLE_NUMBER_MESSAGE",
    "Requirement",
    "calendar_date",
    "calendar_month",
    "checkbox",
    "choice",
    "coerce_checkbox",
    "exact_text",
    "integer",
    "line_items",
    "number",
    "optional_text",
    "optional_url",
    "parse_date",
    "parse_month",
    "required_text",
]
