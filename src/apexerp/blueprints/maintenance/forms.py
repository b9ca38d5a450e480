"""Tool master, maintenance schedules, calibration and repair memos."""

from datetime import date
from typing import Any, Mapping

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    checkbox,
    choice,
    lenient_number,
    number,
    optional_text,
    required_text,
)

AUTO = "Auto-generated"
TOOL_REF = {"placeholder": "Select Tool"}


class ToolForm(FormSchema):
    tool_name: required_text("Tool name is required.") = Field(
        "", title="Tool Name", json_schema_extra={"placeholder": "e.g. Lathe Machine"}
    )
    location: required_text("Location is required.") = Field(
        "", title="Location", json_schema_extra={"placeholder": "e.g. Shop Floor 1"}
    )
    maintenance_interval: number(ge=1, ge_message="Interval must be at least 1 day.") = Field(
        30, title="Maintenance Interval (Days)"
    )


class MaintenanceTasks(FormSchema):
    greasing: checkbox() = Field(False, title="Greasing")
    cleaning: checkbox() = Field(False, title="Cleaning")
    inspection: checkbox() = Field(False, title="Inspection")


class MaintenanceChartForm(FormSchema):
    tool_ref: required_text("Tool reference is required.") = Field(
        "", title="Tool Ref", json_schema_extra=TOOL_REF
    )
    scheduled_date: calendar_date() = Field(default_factory=date.today, title="Scheduled Date")
    tasks: MaintenanceTasks = Field(default_factory=MaintenanceTasks, title="Task List")


class CalibrationReportForm(FormSchema):
    tool_ref: required_text("Tool reference is required.") = Field(
        "", title="Tool Ref", json_schema_extra=TOOL_REF
    )
    calibration_date: calendar_date() = Field(default_factory=date.today, title="Calibration Date")
    standard_value: number() = Field(0, title="Standard Value")
    actual_value: number() = Field(0, title="Actual Value")
    result: choice("Pass", "Fail") = Field("Pass", title="Result")

    DERIVED_FIELDS = {"deviation": "Deviation"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "deviation": lenient_number(values.get("actual_value"))
            - lenient_number(values.get("standard_value"))
        }


class RectificationMemoForm(FormSchema):
    tool_ref: required_text("Tool reference is required.") = Field(
        "", title="Tool Ref", json_schema_extra=TOOL_REF
    )
    technician: required_text("Technician name is required.") = Field(
        "", title="Technician", json_schema_extra={"placeholder": "Technician Name"}
    )
    issue: required_text("Issue description is required.") = Field(
        "",
        title="Issue / Work Done",
        json_schema_extra={"widget": "textarea", "placeholder": "Describe the issue and the fix"},
    )
    spares_used: optional_text() = Field(
        "", title="Spares Used", json_schema_extra={"placeholder": "e.g. Bearing, Oil"}
    )
    cost: number(ge=0, optional=True) = Field(0, title="Cost")


MODULE = ModuleDefinition(
    slug="maintenance",
    title="Maintenance Management",
    nav_label="Maintenance",
    icon="wrench",
    description="Tools, preventive schedules, calibration and repairs.",
    forms=(
        FormDefinition(
            slug="tool-master",
            tab_label="Tool Master",
            title="New Tool",
            description="Add a new tool or asset to the master list.",
            schema=ToolForm,
            submit_label="Save Tool",
            success_title="Tool Saved",
            display_fields=(DisplayField("Asset Code", AUTO),),
        ),
        FormDefinition(
            slug="maintenance-chart",
            tab_label="Maintenance Chart",
            title="Tool Maintenance Chart",
            description="Schedule a maintenance task for a tool.",
            schema=MaintenanceChartForm,
            submit_label="Save Schedule",
            success_title="Maintenance Scheduled",
        ),
        FormDefinition(
            slug="calibration-report",
            tab_label="Calibration Report",
            title="Tool Calibration Report",
            description="Log the results of a tool calibration.",
            schema=CalibrationReportForm,
            submit_label="Save Report",
            success_title="Calibration Report Saved",
        ),
        FormDefinition(
            slug="rectification-memo",
            tab_label="Rectification Memo",
            title="Tool Maintenance/Rectification Memo",
            description="Log a repair or unscheduled maintenance job.",
            schema=RectificationMemoForm,
            submit_label="Save Memo",
            success_title="Maintenance Memo Saved",
            display_fields=(DisplayField("Job ID", AUTO),),
        ),
    ),
)
