"""Base class for form schemas and helpers to describe them to templates."""

from __future__ import annotations

import math
import typing
from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar, Literal, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from .fields import Requirement


def lenient_number(value: Any) -> float:
    """Best-effort numeric read used for live figures; junk counts as zero."""

    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        if isinstance(value, (int, float)):
            parsed = float(value)
        else:
            parsed = float(str(value).strip().replace(",", "") or 0)
    except (ValueError, OverflowError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


class FormSchema(BaseModel):
    """A declarative description of one form's fields and constraints.

    Subclasses declare fields with the helpers from :mod:`apexerp.forms.fields`
    and may override :meth:`cross_field_errors` and :meth:`compute_derived`.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_default=True,
        extra="ignore",
    )

    # key -> label for read-only figures computed from the current values
    DERIVED_FIELDS: ClassVar[dict[str, str]] = {}

    @classmethod
    def initial_values(cls) -> dict[str, Any]:
        """Return the values an untouched form starts with."""

        values: dict[str, Any] = {}
        for name, info in cls.model_fields.items():
            default = field_default(info)
            if isinstance(default, BaseModel):
                default = default.model_dump()
            values[name] = default
        return values

    def cross_field_errors(self) -> dict[str, str]:
        """Return ``{field_path: message}`` for rules spanning several fields.

        Only called once every field parsed on its own.
        """

        return {}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        """Compute read-only figures from raw (possibly invalid) values."""

        return {}

    @classmethod
    def derived(cls, values: Mapping[str, Any]) -> dict[str, str]:
        """Derived figures formatted to two decimal places."""

        return {key: f"{amount:.2f}" for key, amount in cls.compute_derived(values).items()}


def starter_rows(item_schema: type[FormSchema], count: int = 1):
    """Default factory giving a line-item table ``count`` rows of defaults."""

    return lambda: [item_schema.initial_values() for _ in range(count)]


@dataclass(slots=True)
class FieldView:
    """Template-friendly description of a single schema field."""

    name: str
    label: str
    widget: str
    required: bool = False
    placeholder: str = ""
    readonly: bool = False
    choices: list[tuple[str, str]] = field(default_factory=list)
    children: list["FieldView"] = field(default_factory=list)
    default: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "widget": self.widget,
            "required": self.required,
        }
        if self.placeholder:
            data["placeholder"] = self.placeholder
        if self.readonly:
            data["readonly"] = True
        if self.choices:
            data["choices"] = [{"value": value, "label": label} for value, label in self.choices]
        if self.children:
            data["fields"] = [child.to_dict() for child in self.children]
        if self.default is not None:
            data["default"] = _json_default(self.default)
        return data


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list):
        return [_json_default(item) for item in value]
    if isinstance(value, dict):
        return {key: _json_default(item) for key, item in value.items()}
    return value


def field_default(info: FieldInfo) -> Any:
    """Declared default of a field, or ``None`` when it has none."""

    default = info.get_default(call_default_factory=True)
    return None if default is PydanticUndefined else default


def _unwrap_optional(annotation: Any) -> Any:
    args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
    if typing.get_origin(annotation) is typing.Union and len(args) == 1:
        return args[0]
    return annotation


def _extra(info: FieldInfo) -> dict[str, Any]:
    extra = info.json_schema_extra
    return dict(extra) if isinstance(extra, dict) else {}


def item_schema_for(info: FieldInfo) -> type[FormSchema] | None:
    """Return the row schema of a line-item field, if it is one."""

    annotation = info.annotation
    if typing.get_origin(annotation) is list:
        (item_type,) = typing.get_args(annotation)
        return item_type
    return None


def group_schema_for(info: FieldInfo) -> type[FormSchema] | None:
    """Return the nested schema of a grouped field, if it is one."""

    annotation = _unwrap_optional(info.annotation)
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def widget_for(info: FieldInfo) -> str:
    """Pick the input widget for a field from its type and hints."""

    hinted = _extra(info).get("widget")
    if item_schema_for(info) is not None:
        return "items"
    if group_schema_for(info) is not None:
        return "group"
    annotation = _unwrap_optional(info.annotation)
    if typing.get_origin(annotation) is Literal:
        return hinted if hinted in {"radio", "select"} else "select"
    if annotation is bool:
        return "checkbox"
    if annotation is date:
        return hinted if hinted == "month" else "date"
    if annotation in (int, float):
        return "number"
    return hinted if hinted in {"textarea", "url"} else "text"


def _is_required(info: FieldInfo) -> bool:
    for marker in info.metadata:
        if isinstance(marker, Requirement):
            return marker.required
    return info.is_required()


def describe_fields(schema: type[FormSchema], *, prefix: str = "") -> list[FieldView]:
    """Return a :class:`FieldView` per field of ``schema`` in declaration order."""

    views: list[FieldView] = []
    for name, info in schema.model_fields.items():
        extra = _extra(info)
        widget = widget_for(info)
        view = FieldView(
            name=f"{prefix}{name}",
            label=info.title or name.replace("_", " ").title(),
            widget=widget,
            required=_is_required(info),
            placeholder=str(extra.get("placeholder", "")),
            readonly=bool(extra.get("readonly", False)),
            default=field_default(info),
        )
        if widget in {"select", "radio"}:
            labels = extra.get("choice_labels", {})
            options = typing.get_args(_unwrap_optional(info.annotation))
            view.choices = [(option, labels.get(option, option)) for option in options]
        elif widget == "items":
            # Row fields are named relative to the row; templates add the index.
            view.children = describe_fields(item_schema_for(info))
        elif widget == "group":
            view.children = describe_fields(group_schema_for(info), prefix=f"{name}.")
        views.append(view)
    return views


__all__ = [
    "FieldView",
    "FormSchema",
    "describe_fields",
    "group_schema_for",
    "item_schema_for",
    "lenient_number",
    "starter_rows",
    "widget_for",
]
