"""Bind request data to form schemas and collect validation errors."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from .fields import REQUIRED_MESSAGE
from .schema import FormSchema, group_schema_for, item_schema_for, widget_for

ROOT_ERROR_KEY = "__root__"


def _path_parts(path: str) -> list[str | int]:
    return [int(part) if part.isdigit() else part for part in path.split(".") if part]


def _compact(node: Any) -> Any:
    """Turn int-keyed dicts into lists ordered by index."""

    if isinstance(node, dict):
        compacted = {key: _compact(value) for key, value in node.items()}
        if compacted and all(isinstance(key, int) for key in compacted):
            return [compacted[key] for key in sorted(compacted)]
        return compacted
    return node


def unflatten(data: Mapping[str, Any]) -> dict[str, Any]:
    """Expand dotted keys (``items.0.item_name``) into nested dicts and lists.

    Numeric segments become list positions; gaps left by removed rows are
    closed up so ``items.0`` and ``items.3`` yield a two-row list.
    """

    tree: dict[Any, Any] = {}
    for key in data.keys():
        parts = _path_parts(key)
        if not parts:
            continue
        node = tree
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = data[key]
    # Bare numeric keys have no field to land on.
    return {key: _compact(value) for key, value in tree.items() if isinstance(key, str)}


def _fill_absent(schema: type[FormSchema], values: dict[str, Any]) -> dict[str, Any]:
    for name, info in schema.model_fields.items():
        item_schema = item_schema_for(info)
        group_schema = group_schema_for(info)
        if item_schema is not None:
            rows = values.get(name)
            if not isinstance(rows, list):
                rows = []
            values[name] = [
                _fill_absent(item_schema, row) if isinstance(row, dict) else row for row in rows
            ]
        elif group_schema is not None:
            nested = values.get(name)
            values[name] = _fill_absent(group_schema, nested if isinstance(nested, dict) else {})
        elif widget_for(info) == "checkbox" and name not in values:
            # Browsers omit unticked boxes entirely.
            values[name] = False
    return values


def bind_form_data(schema: type[FormSchema], data: Mapping[str, Any]) -> dict[str, Any]:
    """Return raw values for ``schema`` from an HTML form submission."""

    return _fill_absent(schema, unflatten(data))


def errors_from_exception(exc: ValidationError) -> dict[str, list[str]]:
    """Map a pydantic ``ValidationError`` onto ``{field_path: [messages]}``."""

    errors: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = [str(part) for part in error.get("loc", ())]
        key = ".".join(loc) if loc else ROOT_ERROR_KEY
        message = REQUIRED_MESSAGE if error.get("type") == "missing" else error.get("msg", "Invalid value.")
        bucket = errors.setdefault(key, [])
        if message not in bucket:
            bucket.append(message)
    return errors


def parse_row_action(action: str) -> tuple[str, str, Optional[int]]:
    """Split ``add_row:<field>`` / ``remove_row:<field>:<index>`` commands."""

    parts = action.split(":")
    if len(parts) == 2 and parts[0] == "add_row" and parts[1]:
        return "add_row", parts[1], None
    if len(parts) == 3 and parts[0] == "remove_row" and parts[1] and parts[2].isdigit():
        return "remove_row", parts[1], int(parts[2])
    raise ValueError(f"Unrecognised form action: {action!r}")


def _display(value: Any, *, month: bool = False) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, date):
        return value.strftime("%Y-%m") if month else value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return value if isinstance(value, str) else str(value)


@dataclass(slots=True)
class FormSubmission:
    """Raw values for one form plus the outcome of validating them."""

    schema: type[FormSchema]
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    record: FormSchema | None = field(default=None, init=False)

    @classmethod
    def blank(
        cls, schema: type[FormSchema], overrides: Mapping[str, Any] | None = None
    ) -> FormSubmission:
        """A fresh form showing the schema defaults."""

        values = schema.initial_values()
        values.update(overrides or {})
        return cls(schema=schema, values=values)

    @classmethod
    def from_mapping(
        cls,
        schema: type[FormSchema],
        data: Mapping[str, Any],
        *,
        defaults: Mapping[str, Any] | None = None,
        html: bool = True,
    ) -> FormSubmission:
        """Bind submitted data; ``html`` applies browser-form conventions."""

        values = bind_form_data(schema, data) if html else copy.deepcopy(dict(data))
        for key, value in (defaults or {}).items():
            if values.get(key) in (None, ""):
                values[key] = value
        return cls(schema=schema, values=values)

    @classmethod
    def from_form(cls, schema: type[FormSchema], data: Mapping[str, Any], **kwargs: Any) -> FormSubmission:
        return cls.from_mapping(schema, data, html=True, **kwargs)

    @classmethod
    def from_json(cls, schema: type[FormSchema], data: Mapping[str, Any], **kwargs: Any) -> FormSubmission:
        return cls.from_mapping(schema, data, html=False, **kwargs)

    def validate(self) -> bool:
        """Validate the bound values, populating ``errors`` and ``record``."""

        self.errors = {}
        self.record = None
        try:
            record = self.schema.model_validate(self.values)
        except ValidationError as exc:
            self.errors = errors_from_exception(exc)
            return False

        for key, message in record.cross_field_errors().items():
            self._add_error(key, message)
        if self.errors:
            return False

        self.record = record
        return True

    def _add_error(self, field_path: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field_path, []).append(message)

    @property
    def cleaned(self) -> dict[str, Any]:
        """JSON-safe payload of a validated submission."""

        if self.record is None:
            raise RuntimeError("Submission has not been validated successfully.")
        return self.record.model_dump(mode="json")

    @property
    def error_messages(self) -> list[str]:
        return [message for messages in self.errors.values() for message in messages]

    @property
    def derived(self) -> dict[str, str]:
        return self.schema.derived(self.values)

    def field_errors(self, path: str) -> list[str]:
        return self.errors.get(path, [])

    def has_errors_under(self, prefix: str) -> bool:
        """True when ``prefix`` or anything nested below it has an error."""

        return any(key == prefix or key.startswith(f"{prefix}.") for key in self.errors)

    def raw(self, path: str) -> Any:
        node: Any = self.values
        for part in _path_parts(path):
            if isinstance(node, Mapping):
                node = node.get(part)
            elif isinstance(node, list) and isinstance(part, int) and part < len(node):
                node = node[part]
            else:
                return None
        return node

    def display(self, path: str, widget: str = "text") -> Any:
        """Value at ``path`` formatted for an HTML input of type ``widget``."""

        return _display(self.raw(path), month=widget == "month")

    def rows(self, field_name: str) -> list[dict[str, Any]]:
        rows = self.values.get(field_name)
        return rows if isinstance(rows, list) else []

    def _item_schema(self, field_name: str) -> type[FormSchema]:
        info = self.schema.model_fields.get(field_name)
        item_schema = item_schema_for(info) if info is not None else None
        if item_schema is None:
            raise KeyError(field_name)
        return item_schema

    def add_row(self, field_name: str) -> None:
        """Append a row of defaults to a line-item table."""

        item_schema = self._item_schema(field_name)
        rows = self.rows(field_name)
        rows.append(item_schema.initial_values())
        self.values[field_name] = rows

    def remove_row(self, field_name: str, index: int) -> bool:
        """Drop row ``index``; the last remaining row is kept."""

        self._item_schema(field_name)
        rows = self.rows(field_name)
        if len(rows) <= 1 or not 0 <= index < len(rows):
            return False
        del rows[index]
        return True

    def apply_action(self, action: str) -> bool:
        """Run a row command such as ``add_row:items``; returns whether it changed anything."""

        verb, field_name, index = parse_row_action(action)
        if verb == "add_row":
            self.add_row(field_name)
            return True
        return self.remove_row(field_name, index if index is not None else -1)


__all__ = [
    "ROOT_ERROR_KEY",
    "FormSubmission",
    "bind_form_data",
    "errors_from_exception",
    "parse_row_action",
    "unflatten",
]
