"""Material indent form."""

from datetime import date
from typing import Any, Mapping

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    choice,
    lenient_number,
    line_items,
    number,
    required_text,
    starter_rows,
)


class IndentItem(FormSchema):
    item_name: required_text("Item name is required.") = Field(
        "", title="Item Name", json_schema_extra={"placeholder": "Product Name"}
    )
    current_stock: number(ge=0, ge_message="Stock cannot be negative.") = Field(
        0, title="Current Stock", json_schema_extra={"placeholder": "0"}
    )
    requested_qty: number(ge=1, ge_message="Quantity must be at least 1.") = Field(
        1, title="Requested Qty", json_schema_extra={"placeholder": "1"}
    )


class IndentForm(FormSchema):
    """Internal request for materials raised by a department."""

    request_date: calendar_date("A request date is required.") = Field(
        default_factory=date.today, title="Request Date"
    )
    department: required_text("Department is required.") = Field(
        "", title="Department", json_schema_extra={"placeholder": "e.g. Production"}
    )
    priority: choice("High", "Medium", "Low") = Field(
        "Medium", title="Priority", json_schema_extra={"placeholder": "Select priority"}
    )
    items: line_items(IndentItem) = Field(default_factory=starter_rows(IndentItem), title="Items")

    DERIVED_FIELDS = {"total_requested": "Total Requested Qty"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        rows = values.get("items")
        if not isinstance(rows, list):
            rows = []
        rows = [row for row in rows if isinstance(row, Mapping)]
        return {"total_requested": sum(lenient_number(row.get("requested_qty")) for row in rows)}


MODULE = ModuleDefinition(
    slug="purchase",
    title="Purchase Management",
    nav_label="Purchase",
    icon="truck",
    description="Material indents raised by departments.",
    forms=(
        FormDefinition(
            slug="indent",
            tab_label="Indent",
            title="New Material Indent",
            description="Create an internal request for materials.",
            schema=IndentForm,
            submit_label="Save Indent",
            success_title="Indent Saved",
            success_description="The new material indent has been successfully saved.",
            display_fields=(DisplayField("Indent No", "Auto-generated"),),
        ),
    ),
)
