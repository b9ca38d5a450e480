"""Warehouse master and stock movement forms."""

import datetime

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    choice,
    number,
    required_text,
)

AUTO = "Auto-generated"
today = datetime.date.today


class WarehouseForm(FormSchema):
    name: required_text("Warehouse name is required.") = Field(
        "", title="Name", json_schema_extra={"placeholder": "e.g. Main Warehouse"}
    )
    manager_name: required_text("Manager name is required.") = Field("", title="Manager Name")
    address: required_text("Address is required.") = Field(
        "",
        title="Address",
        json_schema_extra={"widget": "textarea", "placeholder": "Enter full address"},
    )


class OpeningStockForm(FormSchema):
    item_name: required_text("Item name is required.") = Field(
        "", title="Item Name", json_schema_extra={"placeholder": "Select Item"}
    )
    opening_qty: number(ge=0, ge_message="Quantity cannot be negative.") = Field(
        0, title="Opening Quantity"
    )
    value: number(ge=0, ge_message="Value cannot be negative.") = Field(0, title="Value")
    date: calendar_date() = Field(default_factory=today, title="Date")


class DispatchSRVForm(FormSchema):
    """Non-sales dispatch such as a returnable gate pass."""

    date: calendar_date() = Field(default_factory=today, title="Date")
    party_name: required_text("Party name is required.") = Field(
        "", title="Party Name", json_schema_extra={"placeholder": "Recipient's Name"}
    )
    item: required_text("Item name is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item being dispatched"}
    )
    qty: number(ge=1, ge_message="Quantity must be at least 1.") = Field(1, title="Quantity")
    return_expected: choice("Yes", "No") = Field(
        "Yes", title="Return Expected?", json_schema_extra={"widget": "radio"}
    )


class StockTransferForm(FormSchema):
    from_warehouse: required_text("Source warehouse is required.") = Field(
        "", title="From Warehouse", json_schema_extra={"placeholder": "Select Source"}
    )
    to_warehouse: required_text("Destination warehouse is required.") = Field(
        "", title="To Warehouse", json_schema_extra={"placeholder": "Select Destination"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item to Transfer"}
    )
    qty: number(ge=1, ge_message="Quantity must be at least 1.") = Field(1, title="Quantity")

    def cross_field_errors(self) -> dict[str, str]:
        if self.to_warehouse.casefold() == self.from_warehouse.casefold():
            return {"to_warehouse": "Destination must differ from the source warehouse."}
        return {}


class MaterialReceiptForm(FormSchema):
    source_doc_ref: required_text("Source document is required.") = Field(
        "", title="Source Doc Ref", json_schema_extra={"placeholder": "e.g. Transfer ID, SRV No"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    qty_received: number(ge=1, ge_message="Quantity must be at least 1.") = Field(
        1, title="Qty Received"
    )


MODULE = ModuleDefinition(
    slug="inventory",
    title="Warehouse Management",
    nav_label="Inventory",
    icon="warehouse",
    description="Warehouses, opening balances and stock movements.",
    forms=(
        FormDefinition(
            slug="warehouse-master",
            tab_label="Warehouse Master",
            title="New Warehouse",
            description="Add a new warehouse to the master list.",
            schema=WarehouseForm,
            submit_label="Save Warehouse",
            success_title="Warehouse Saved",
            display_fields=(DisplayField("Warehouse ID", AUTO),),
        ),
        FormDefinition(
            slug="opening-stock",
            tab_label="Opening Stock",
            title="Warehouse Opening Stock",
            description="Set up the initial stock for an item.",
            schema=OpeningStockForm,
            submit_label="Save Opening Stock",
            success_title="Opening Stock Saved",
        ),
        FormDefinition(
            slug="dispatch-srv",
            tab_label="Dispatch SRV",
            title="New Dispatch SRV (Service Voucher)",
            description="Create a non-sales dispatch, like a returnable gate pass.",
            schema=DispatchSRVForm,
            submit_label="Create SRV",
            success_title="SRV Created",
            display_fields=(DisplayField("SRV No", AUTO),),
        ),
        FormDefinition(
            slug="stock-transfer",
            tab_label="Stock Transfer",
            title="Warehouse Stock Transfer",
            description="Move stock between two warehouses.",
            schema=StockTransferForm,
            submit_label="Initiate Transfer",
            success_title="Stock Transfer Initiated",
            display_fields=(DisplayField("Transfer ID", AUTO),),
        ),
        FormDefinition(
            slug="material-receipt",
            tab_label="Material Receipt",
            title="Warehouse Material Receipt",
            description="Receive transferred or returned material.",
            schema=MaterialReceiptForm,
            submit_label="Receive Material",
            success_title="Material Received",
            display_fields=(DisplayField("Receipt ID", AUTO),),
        ),
    ),
)
