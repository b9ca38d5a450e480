"""Transporter master, transport orders, challans and freight bills."""

import datetime
from typing import Any, Mapping

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    exact_text,
    lenient_number,
    line_items,
    number,
    required_text,
    starter_rows,
)

AUTO = "Auto-generated"


class TransporterForm(FormSchema):
    transporter_name: required_text("Transporter name is required.") = Field(
        "", title="Transporter Name"
    )
    owner_name: required_text("Owner name is required.") = Field("", title="Owner Name")
    mobile: required_text("Mobile number must be at least 10 digits.", min_length=10) = Field(
        "", title="Mobile"
    )
    gstin: exact_text(15, "GSTIN must be 15 characters.") = Field("", title="GSTIN")


class TransportOrderForm(FormSchema):
    transporter: required_text("Transporter is required.") = Field(
        "", title="Transporter", json_schema_extra={"placeholder": "Select Transporter"}
    )
    pickup_date: calendar_date("A pickup date is required.") = Field(
        default_factory=datetime.date.today, title="Pickup Date"
    )
    destination: required_text("Destination is required.") = Field("", title="Destination")
    vehicle_type: required_text("Vehicle type is required.") = Field(
        "", title="Vehicle Type", json_schema_extra={"placeholder": "e.g. 20ft Container"}
    )


class ChallanItem(FormSchema):
    item_name: required_text("Item name is required.") = Field("", title="Item Name")
    quantity: number(ge=1, ge_message="Quantity must be at least 1.") = Field(1, title="Quantity")


class ChallanOutForm(FormSchema):
    transport_order_ref: required_text("Transport order reference is required.") = Field(
        "", title="Transport Order Ref", json_schema_extra={"placeholder": "TO-001"}
    )
    items: line_items(ChallanItem) = Field(default_factory=starter_rows(ChallanItem), title="Items")


class FreightBillForm(FormSchema):
    date: calendar_date() = Field(default_factory=datetime.date.today, title="Date")
    lr_no: required_text("LR No is required.") = Field("", title="LR No")
    freight_amount: number(ge=0) = Field(0, title="Freight Amount")
    gst: number(ge=0) = Field(0, title="GST")

    DERIVED_FIELDS = {"total_payable": "Total Payable"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "total_payable": lenient_number(values.get("freight_amount"))
            + lenient_number(values.get("gst"))
        }


MODULE = ModuleDefinition(
    slug="logistics",
    title="Logistics Management",
    nav_label="Logistics",
    icon="ship",
    description="Transporters, bookings, delivery challans and freight bills.",
    forms=(
        FormDefinition(
            slug="transport-master",
            tab_label="Transport Master",
            title="New Transporter",
            description="Add a new transporter to the master list.",
            schema=TransporterForm,
            submit_label="Save Transporter",
            success_title="Transporter Saved",
        ),
        FormDefinition(
            slug="transport-order",
            tab_label="Transport Order",
            title="New Transport Order",
            description="Book a truck for a shipment.",
            schema=TransportOrderForm,
            submit_label="Create Order",
            success_title="Transport Order Created",
            display_fields=(DisplayField("Order No", AUTO),),
        ),
        FormDefinition(
            slug="challan-out",
            tab_label="Challan Out",
            title="Challan Out",
            description="Create a delivery document.",
            schema=ChallanOutForm,
            submit_label="Create Challan",
            success_title="Challan Created",
            display_fields=(DisplayField("Challan No", AUTO),),
        ),
        FormDefinition(
            slug="freight-billbook",
            tab_label="Freight Billbook",
            title="Freight Billbook",
            description="Log an invoice from a transporter.",
            schema=FreightBillForm,
            submit_label="Log Bill",
            success_title="Freight Bill Logged",
            display_fields=(DisplayField("Bill No", AUTO),),
        ),
    ),
)
