"""Quality checkpoints from incoming goods to dispatch."""

from pydantic import Field

from ...forms import FormDefinition, FormSchema, ModuleDefinition, choice, number, required_text


class IncomingQCForm(FormSchema):
    grn_ref: required_text("GRN Reference is required.") = Field(
        "", title="GRN Ref", json_schema_extra={"placeholder": "GRN-001"}
    )
    item: required_text("Item name is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    sample_qty: number(ge=1, ge_message="Sample quantity must be at least 1.") = Field(
        1, title="Sample Qty"
    )
    visual_check: choice("Pass", "Fail") = Field(
        "Pass", title="Visual Check", json_schema_extra={"widget": "radio"}
    )
    dimension_check: required_text("Dimension check details are required.") = Field(
        "", title="Dimension Check", json_schema_extra={"placeholder": "e.g. 5.01mm, 10.2mm"}
    )


class TransferSlipQCForm(FormSchema):
    mta_ref: required_text("MTA Ref is required.") = Field(
        "", title="MTA Ref", json_schema_extra={"placeholder": "MTA-001"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    qty_checked: number(ge=1, ge_message="Quantity must be at least 1.") = Field(
        1, title="Qty Checked"
    )
    status: choice("OK", "Damaged") = Field("OK", title="Status")


class ProcessQCForm(FormSchema):
    route_card_ref: required_text("Route Card Ref is required.") = Field(
        "", title="Route Card Ref", json_schema_extra={"placeholder": "RC-001"}
    )
    stage_name: required_text("Stage Name is required.") = Field(
        "", title="Stage Name", json_schema_extra={"placeholder": "e.g. Assembly"}
    )
    operator: required_text("Operator is required.") = Field(
        "", title="Operator", json_schema_extra={"placeholder": "Operator Name"}
    )
    observations: required_text("Observations are required.") = Field(
        "",
        title="Observations",
        json_schema_extra={"widget": "textarea", "placeholder": "Note any quality observations..."},
    )


class PreDispatchForm(FormSchema):
    so_ref: required_text("SO Ref is required.") = Field(
        "", title="SO Ref", json_schema_extra={"placeholder": "SO-001"}
    )
    box_no: required_text("Box No is required.") = Field(
        "", title="Box No", json_schema_extra={"placeholder": "Box-01"}
    )
    packaging_condition: choice("Good", "Fair", "Poor") = Field(
        "Good", title="Packaging Condition"
    )
    label_accuracy: choice("Correct", "Incorrect") = Field("Correct", title="Label Accuracy")


class RejectionDecisionForm(FormSchema):
    rejection_id: required_text("Rejection ID is required.") = Field(
        "", title="Rejection ID", json_schema_extra={"placeholder": "e.g. REJ-001"}
    )
    item: required_text("Item is required.") = Field(
        "", title="Item", json_schema_extra={"placeholder": "Item Name"}
    )
    qty: number(ge=1, ge_message="Quantity must be at least 1.") = Field(1, title="Quantity")
    action: choice("Scrap", "Return", "Rework", "Downgrade") = Field(
        "Scrap",
        title="Action",
        json_schema_extra={"choice_labels": {"Return": "Return to Vendor"}},
    )


MODULE = ModuleDefinition(
    slug="quality",
    title="Quality Management",
    nav_label="Quality",
    icon="shield-check",
    description="Inspections at receipt, transfer, process and dispatch.",
    forms=(
        FormDefinition(
            slug="iqc",
            tab_label="Incoming (IQC)",
            title="Incoming Quality Control",
            description="Perform quality check on incoming materials.",
            schema=IncomingQCForm,
            submit_label="Save IQC Report",
            success_title="IQC Report Saved",
        ),
        FormDefinition(
            slug="mts",
            tab_label="Transfer (MTS)",
            title="Material Transfer Slip QC",
            description="Check materials during inter-departmental movement.",
            schema=TransferSlipQCForm,
            submit_label="Save MTS Report",
            success_title="MTS Saved",
        ),
        FormDefinition(
            slug="pqc",
            tab_label="Process (PQC)",
            title="Process Quality Control",
            description="Perform in-process quality checks on the production line.",
            schema=ProcessQCForm,
            submit_label="Save PQC Report",
            success_title="PQC Report Saved",
        ),
        FormDefinition(
            slug="pdi",
            tab_label="Pre-Dispatch (PDI)",
            title="Pre-Dispatch Inspection (PDI)",
            description="Conduct a final audit before dispatching goods.",
            schema=PreDispatchForm,
            submit_label="Save PDI Report",
            success_title="PDI Report Saved",
        ),
        FormDefinition(
            slug="qrd",
            tab_label="Rejection (QRD)",
            title="Quality Rejection Decision",
            description="Decide the course of action for rejected materials.",
            schema=RejectionDecisionForm,
            submit_label="Save Decision",
            success_title="QRD Saved",
        ),
    ),
)
