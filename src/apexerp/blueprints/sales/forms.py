"""Sales inquiry form."""

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
    optional_text,
    required_text,
    starter_rows,
)


class InquiryItem(FormSchema):
    item_name: required_text("Item name is required.") = Field(
        "", title="Item Name", json_schema_extra={"placeholder": "Product Name"}
    )
    quantity: number(ge=1, ge_message="Quantity must be at least 1.") = Field(
        1, title="Quantity", json_schema_extra={"placeholder": "1"}
    )
    target_price: number(ge=0, ge_message="Target price cannot be negative.") = Field(
        0, title="Target Price", json_schema_extra={"placeholder": "0.00"}
    )


class InquiryForm(FormSchema):
    """A customer inquiry with one or more requested items."""

    customer_name: required_text("Customer name is required.") = Field(
        "", title="Customer Name", json_schema_extra={"placeholder": "Enter customer name"}
    )
    inquiry_date: calendar_date("An inquiry date is required.") = Field(
        default_factory=date.today, title="Inquiry Date"
    )
    sales_person: optional_text() = Field(
        "", title="Sales Person", json_schema_extra={"readonly": True}
    )
    items: line_items(InquiryItem) = Field(
        default_factory=starter_rows(InquiryItem), title="Items"
    )
    status: choice("New", "Processing", "Quoted", "Lost") = Field(
        "New", title="Status", json_schema_extra={"placeholder": "Select status"}
    )

    DERIVED_FIELDS = {"estimated_total": "Estimated Total"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        rows = values.get("items")
        if not isinstance(rows, list):
            rows = []
        total = sum(
            lenient_number(row.get("quantity")) * lenient_number(row.get("target_price"))
            for row in rows
            if isinstance(row, Mapping)
        )
        return {"estimated_total": total}


MODULE = ModuleDefinition(
    slug="sales",
    title="Sales Management",
    nav_label="Sales",
    icon="shopping-cart",
    description="Customer inquiries and the items they ask about.",
    forms=(
        FormDefinition(
            slug="inquiry",
            tab_label="Inquiry",
            title="New Inquiry",
            description="Enter the details for a new sales inquiry.",
            schema=InquiryForm,
            submit_label="Save Inquiry",
            success_title="Inquiry Saved",
            success_description="The new inquiry has been successfully saved.",
            display_fields=(DisplayField("Inquiry No", "Auto-generated"),),
            config_defaults=(("sales_person", "CURRENT_USER_NAME"),),
        ),
    ),
)
