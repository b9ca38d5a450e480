"""Contract labour: workers, rates, payroll, advances and payments."""

import datetime
from typing import Any, Mapping

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    calendar_month,
    choice,
    exact_text,
    lenient_number,
    number,
    optional_text,
    required_text,
)

AUTO = "Auto-generated"
DAILY_WAGE = 500
OVERTIME_HOURLY_RATE = 100
today = datetime.date.today


class ContractorEmployeeForm(FormSchema):
    contractor_firm: required_text("Contractor firm name is required.") = Field(
        "", title="Contractor Firm", json_schema_extra={"placeholder": "Contractor Firm Name"}
    )
    worker_name: required_text("Worker name is required.") = Field("", title="Worker Name")
    aadhar_no: exact_text(12, "Aadhar number must be 12 digits.") = Field("", title="Aadhar No")
    skill_level: choice("Skilled", "Unskilled") = Field(
        "Unskilled", title="Skill Level", json_schema_extra={"widget": "radio"}
    )


class ContractorSalaryHeadForm(FormSchema):
    role: required_text("Role is required.") = Field(
        "", title="Role", json_schema_extra={"placeholder": "e.g. Helper, Welder"}
    )
    daily_rate: number(ge=0, ge_message="Rate must be positive.") = Field(0, title="Daily Rate")
    overtime_rate: number(ge=0, ge_message="Rate must be positive.") = Field(
        0, title="Overtime Rate"
    )


class ContractorSalaryStructureForm(FormSchema):
    worker_name: required_text("Worker name is required.") = Field(
        "", title="Worker Name", json_schema_extra={"placeholder": "Select Worker"}
    )
    role: required_text("Role is required.") = Field(
        "", title="Role", json_schema_extra={"placeholder": "Select Role"}
    )
    applicable_daily_rate: number(ge=0) = Field(0, title="Applicable Daily Rate")


class ContractorSalarySheetForm(FormSchema):
    """Monthly payout: flat daily wage plus hourly overtime."""

    contractor_name: required_text("Contractor name is required.") = Field(
        "", title="Contractor Name", json_schema_extra={"placeholder": "Select Contractor"}
    )
    month: calendar_month() = Field(
        default_factory=today, title="Month", json_schema_extra={"widget": "month"}
    )
    worker_name: required_text("Worker name is required.") = Field(
        "", title="Worker Name", json_schema_extra={"placeholder": "Select Worker"}
    )
    days_worked: number(ge=0) = Field(0, title="Days Worked")
    overtime_hours: number(ge=0) = Field(0, title="Overtime Hours")

    DERIVED_FIELDS = {"total_payable": "Total Payable"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        days = lenient_number(values.get("days_worked"))
        hours = lenient_number(values.get("overtime_hours"))
        return {"total_payable": days * DAILY_WAGE + hours * OVERTIME_HOURLY_RATE}


class ContractorAdvanceMemoForm(FormSchema):
    contractor_name: required_text("Contractor name is required.") = Field(
        "", title="Contractor Name", json_schema_extra={"placeholder": "Select Contractor"}
    )
    date: calendar_date() = Field(default_factory=today, title="Date")
    amount: number(ge=1) = Field(0, title="Amount")
    remarks: optional_text() = Field("", title="Remarks", json_schema_extra={"widget": "textarea"})


class ContractorPaymentForm(FormSchema):
    contractor_name: required_text("Contractor is required.") = Field(
        "", title="Contractor Name", json_schema_extra={"placeholder": "Contractor Name"}
    )
    salary_sheet_ref: required_text("Salary Sheet Ref is required.") = Field(
        "", title="Salary Sheet Ref", json_schema_extra={"placeholder": "Sheet ID"}
    )
    net_amount_paid: number(ge=0.01, ge_message="Amount must be greater than 0.") = Field(
        0, title="Net Amount Paid"
    )
    tds_deducted: number(ge=0) = Field(0, title="TDS Deducted")


MODULE = ModuleDefinition(
    slug="contractors",
    title="Contractors Employee Management",
    nav_label="Contractors",
    icon="hard-hat",
    description="Contract labour registration, rates, payroll and payments.",
    forms=(
        FormDefinition(
            slug="employee-master",
            tab_label="Employee Master",
            title="New Contractor Employee",
            description="Register a new contract labor worker.",
            schema=ContractorEmployeeForm,
            submit_label="Save Worker",
            success_title="Contractor Employee Saved",
            display_fields=(DisplayField("Worker ID", AUTO),),
        ),
        FormDefinition(
            slug="salary-head",
            tab_label="Salary Head",
            title="Contractor Salary Head Master",
            description="Define daily and overtime rates for contract roles.",
            schema=ContractorSalaryHeadForm,
            submit_label="Save Rate",
            success_title="Contractor Salary Head Saved",
        ),
        FormDefinition(
            slug="salary-structure",
            tab_label="Salary Structure",
            title="Contractor Salary Structure",
            description="Map a worker to their role and pay rate.",
            schema=ContractorSalaryStructureForm,
            submit_label="Save Structure",
            success_title="Salary Structure Saved",
        ),
        FormDefinition(
            slug="salary-sheet",
            tab_label="Salary Sheet",
            title="Contractor Salary Sheet",
            description="Calculate monthly payout for a contractor.",
            schema=ContractorSalarySheetForm,
            submit_label="Process Sheet",
            success_title="Salary Sheet Processed",
            reset_on_submit=False,
        ),
        FormDefinition(
            slug="advance-memo",
            tab_label="Advance Memo",
            title="Contractor Advance Memo",
            description="Record an advance given to a contractor for their labor.",
            schema=ContractorAdvanceMemoForm,
            submit_label="Save Memo",
            success_title="Advance Memo Saved",
        ),
        FormDefinition(
            slug="voucher-payment",
            tab_label="Voucher Payment",
            title="New Contractor Payment",
            description="Record a payment made to a contractor.",
            schema=ContractorPaymentForm,
            submit_label="Save Payment",
            success_title="Contractor Payment Saved",
            display_fields=(DisplayField("Voucher No", AUTO),),
        ),
    ),
)
