"""Form toolkit shared by every ERP module."""

from __future__ import annotations

from .binding import FormSubmission, bind_form_data, errors_from_exception, unflatten
from .fields import (
    calendar_date,
    calendar_month,
    checkbox,
    choice,
    exact_text,
    integer,
    line_items,
    number,
    optional_text,
    optional_url,
    required_text,
)
from .registry import (
    DisplayField,
    FormDefinition,
    ModuleDefinition,
    SampleTable,
    get_form,
    get_module,
    iter_modules,
    register_module,
)
from .schema import FieldView, FormSchema, describe_fields, lenient_number, starter_rows

__all__ = [
    "DisplayField",
    "FieldView",
    "FormDefinition",
    "FormSchema",
    "FormSubmission",
    "ModuleDefinition",
    "SampleTable",
    "bind_form_data",
    "calendar_date",
    "calendar_month",
    "checkbox",
    "choice",
    "describe_fields",
    "errors_from_exception",
    "exact_text",
    "get_form",
    "get_module",
    "integer",
    "iter_modules",
    "lenient_number",
    "line_items",
    "number",
    "optional_text",
    "optional_url",
    "register_module",
    "required_text",
    "starter_rows",
    "unflatten",
]
