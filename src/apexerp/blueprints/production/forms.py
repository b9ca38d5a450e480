"""Production floor forms: flows, routecards, issues and job work."""

import datetime
from typing import Any, Mapping

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    lenient_number,
    line_items,
    number,
    required_text,
    starter_rows,
)

AUTO = "Auto-generated"
today = datetime.date.today


class RawMaterial(FormSchema):
    item_name: required_text("Item name is required.") = Field(
        "", title="Item Name", json_schema_extra={"placeholder": "Component or Material Name"}
    )
    quantity: number(ge=1, ge_message="Quantity must be at least 1.") = Field(
        1, title="Quantity", json_schema_extra={"placeholder": "1"}
    )


class ProductionFlowForm(FormSchema):
    """Bill of materials for one process step."""

    finished_good: required_text("Finished good name is required.") = Field(
        "", title="Finished Good", json_schema_extra={"placeholder": "e.g. Assembled Widget"}
    )
    process_name: required_text("Process name is required.") = Field(
        "", title="Process Name", json_schema_extra={"placeholder": "e.g. Cutting"}
    )
    machine: required_text("Machine is required.") = Field(
        "", title="Machine", json_schema_extra={"placeholder": "e.g. CNC Machine"}
    )
    output_qty: number(ge=1, ge_message="Output quantity must be at least 1.") = Field(
        1, title="Output Quantity", json_schema_extra={"placeholder": "1"}
    )
    raw_materials: line_items(RawMaterial, "Please add at least one raw material.") = Field(
        default_factory=starter_rows(RawMaterial), title="Raw Materials"
    )


class RoutecardForm(FormSchema):
    batch_no: required_text("Batch no is required.") = Field(
        "", title="Batch No", json_schema_extra={"placeholder": "Batch-001"}
    )
    product: required_text("Product is required.") = Field(
        "", title="Product", json_schema_extra={"placeholder": "Product Name"}
    )
    plan_qty: number(ge=1) = Field(1, title="Plan Quantity")
    start_date: calendar_date("A start date is required.") = Field(
        default_factory=today, title="Start Date"
    )
    end_date: calendar_date("An end date is required.") = Field(
        default_factory=today, title="End Date"
    )

    def cross_field_errors(self) -> dict[str, str]:
        if self.end_date < self.start_date:
            return {"end_date": "End date cannot be before start date."}
        return {}


class MaterialIssueForm(FormSchema):
    route_card_ref: required_text("Route card ref is required.") = Field(
        "", title="Route Card Ref", json_schema_extra={"placeholder": "RC-001"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    qty_requested: number(ge=1) = Field(1, title="Qty Requested")
    qty_issued: number(ge=1) = Field(1, title="Qty Issued")


class MaterialTransferForm(FormSchema):
    from_dept: required_text("From department is required.") = Field(
        "", title="From Dept", json_schema_extra={"placeholder": "e.g. Stores"}
    )
    to_dept: required_text("To department is required.") = Field(
        "", title="To Dept", json_schema_extra={"placeholder": "e.g. Assembly"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    qty: number(ge=1) = Field(1, title="Quantity")
    received_by: required_text("Received by is required.") = Field(
        "", title="Received By", json_schema_extra={"placeholder": "Employee Name"}
    )


class ProductionReportForm(FormSchema):
    date: calendar_date() = Field(default_factory=today, title="Date")
    shift: required_text("Shift is required.") = Field(
        "A", title="Shift", json_schema_extra={"placeholder": "e.g. A"}
    )
    machine_no: required_text("Machine no is required.") = Field(
        "", title="Machine No", json_schema_extra={"placeholder": "Machine ID"}
    )
    operator: required_text("Operator is required.") = Field(
        "", title="Operator", json_schema_extra={"placeholder": "Operator Name"}
    )
    production_qty: number(ge=0) = Field(0, title="Production Qty")
    rejection_qty: number(ge=0) = Field(0, title="Rejection Qty")


class JobOrderForm(FormSchema):
    contractor: required_text("Contractor is required.") = Field(
        "", title="Contractor", json_schema_extra={"placeholder": "Contractor Name"}
    )
    item_sent: required_text("Item sent is required.") = Field(
        "", title="Item Sent", json_schema_extra={"placeholder": "Item Name"}
    )
    process_required: required_text("Process is required.") = Field(
        "", title="Process Required", json_schema_extra={"placeholder": "e.g. Plating"}
    )
    rate: number(ge=0) = Field(0, title="Rate")


class ChallanOutForm(FormSchema):
    job_order_ref: required_text("Job order ref is required.") = Field(
        "", title="Job Order Ref", json_schema_extra={"placeholder": "JO-001"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    qty: number(ge=1) = Field(1, title="Quantity")
    vehicle_no: required_text("Vehicle no is required.") = Field(
        "", title="Vehicle No", json_schema_extra={"placeholder": "Vehicle Number"}
    )


class ExternalGRNForm(FormSchema):
    """Goods back from job work, split into passed and rejected quantities."""

    challan_ref: required_text("Challan ref is required.") = Field(
        "", title="Challan Ref", json_schema_extra={"placeholder": "CHN-001"}
    )
    received_qty: number(ge=0) = Field(0, title="Received Qty")
    passed_qty: number(ge=0) = Field(0, title="Passed Qty")
    rejected_qty: number(ge=0) = Field(0, title="Rejected Qty")

    def cross_field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self.passed_qty > self.received_qty:
            errors["passed_qty"] = "Passed quantity cannot exceed received quantity."
        if self.passed_qty + self.rejected_qty > self.received_qty:
            errors["rejected_qty"] = (
                "Passed and rejected quantities cannot exceed received quantity."
            )
        return errors


class JobBillForm(FormSchema):
    job_order_ref: required_text("Job order ref is required.") = Field(
        "", title="Job Order Ref", json_schema_extra={"placeholder": "JO-001"}
    )
    labor_charges: number(ge=0) = Field(0, title="Labor Charges")
    gst: number(ge=0) = Field(0, title="GST")

    DERIVED_FIELDS = {"total": "Total Bill Amount"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "total": lenient_number(values.get("labor_charges")) + lenient_number(values.get("gst"))
        }


class RoutecardClosureForm(FormSchema):
    route_card_ref: required_text("Route card ref is required.") = Field(
        "", title="Route Card Ref", json_schema_extra={"placeholder": "RC-001"}
    )
    final_fg_qty: number(ge=0) = Field(0, title="Final FG Qty")
    scrap_generated: number(ge=0) = Field(0, title="Scrap Generated")
    closure_date: calendar_date() = Field(default_factory=today, title="Closure Date")


MODULE = ModuleDefinition(
    slug="production",
    title="Production Management",
    nav_label="Production",
    icon="gantt-chart-square",
    description="Process flows, routecards, shop-floor logs and external job work.",
    forms=(
        FormDefinition(
            slug="bom",
            tab_label="BOM",
            title="Production Flow Details (BOM)",
            description="Define a process with its required raw materials (Bill of Materials).",
            schema=ProductionFlowForm,
            submit_label="Save Production Flow",
            success_title="Production Flow Saved",
            success_description="The new production flow has been successfully saved.",
        ),
        FormDefinition(
            slug="routecard",
            tab_label="Routecard",
            title="New Production Routecard",
            description="Track the progress of a production batch.",
            schema=RoutecardForm,
            submit_label="Create Routecard",
            success_title="Routecard Created",
            display_fields=(DisplayField("Route Card No", AUTO),),
        ),
        FormDefinition(
            slug="material-issue",
            tab_label="Material Issue",
            title="Material Issue",
            description="Issue materials from inventory to the production floor.",
            schema=MaterialIssueForm,
            submit_label="Issue Material",
            success_title="Material Issued",
            display_fields=(DisplayField("Issue ID", AUTO),),
        ),
        FormDefinition(
            slug="mta",
            tab_label="MTA",
            title="Material Transfer Acknowledgement",
            description="Record inter-departmental material movement.",
            schema=MaterialTransferForm,
            submit_label="Acknowledge Transfer",
            success_title="MTA Created",
            display_fields=(DisplayField("MTA No", AUTO),),
        ),
        FormDefinition(
            slug="prod-report",
            tab_label="Prod. Report",
            title="Daily Production Report",
            description="Log daily output and rejections.",
            schema=ProductionReportForm,
            submit_label="Save Report",
            success_title="Production Logged",
        ),
        FormDefinition(
            slug="job-order",
            tab_label="Job Order",
            title="External Job Order",
            description="Outsource work to an external contractor.",
            schema=JobOrderForm,
            submit_label="Create Job Order",
            success_title="Job Order Created",
            display_fields=(DisplayField("Job Order No", AUTO),),
        ),
        FormDefinition(
            slug="challan-out",
            tab_label="Challan Out",
            title="Challan Out",
            description="Send materials out for external job work.",
            schema=ChallanOutForm,
            submit_label="Create Challan",
            success_title="Challan Created",
            display_fields=(DisplayField("Challan No", AUTO),),
        ),
        FormDefinition(
            slug="external-grn",
            tab_label="External GRN",
            title="External GRN & IQC",
            description="Receive and inspect goods from external job work.",
            schema=ExternalGRNForm,
            submit_label="Receive Goods",
            success_title="External GRN Created",
            display_fields=(DisplayField("GRN No", AUTO),),
        ),
        FormDefinition(
            slug="job-bill",
            tab_label="Job Bill",
            title="Job Work Billbook",
            description="Log a bill received from a contractor.",
            schema=JobBillForm,
            submit_label="Log Bill",
            success_title="Bill Logged",
            display_fields=(DisplayField("Bill No", AUTO),),
        ),
        FormDefinition(
            slug="routecard-closure",
            tab_label="Closure",
            title="Routecard Closure",
            description="Finish a production batch and record final quantities.",
            schema=RoutecardClosureForm,
            submit_label="Close Routecard",
            success_title="Routecard Closed",
        ),
    ),
)
