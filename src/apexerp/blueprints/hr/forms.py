"""Employee master, salary set-up and payroll forms."""

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
    integer,
    lenient_number,
    number,
    required_text,
)

today = datetime.date.today
MONTH = {"widget": "month"}


class EmployeeForm(FormSchema):
    emp_code: required_text("Employee code is required.") = Field("", title="Emp Code")
    name: required_text("Employee name is required.") = Field("", title="Name")
    designation: required_text("Designation is required.") = Field("", title="Designation")
    mobile: required_text("Mobile number must be at least 10 digits.", min_length=10) = Field(
        "", title="Mobile"
    )
    joining_date: calendar_date("Joining date is required.") = Field(
        default_factory=today, title="Joining Date"
    )
    basic_salary: number(ge=0, ge_message="Basic salary must be positive.") = Field(
        0, title="Basic Salary"
    )
    bank_details: required_text("Bank details are required.") = Field(
        "", title="Bank Details", json_schema_extra={"placeholder": "Bank Name, Account No, IFSC"}
    )


class SalaryHeadForm(FormSchema):
    head_name: required_text("Head name is required.") = Field(
        "", title="Head Name", json_schema_extra={"placeholder": "e.g. HRA, PF"}
    )
    type: choice("Earning", "Deduction") = Field("Earning", title="Type")


class SalaryStructureForm(FormSchema):
    """Pay components for one employee from an effective date."""

    emp_name: required_text("Employee name is required.") = Field(
        "", title="Employee Name", json_schema_extra={"placeholder": "Select Employee"}
    )
    effective_date: calendar_date("Effective date is required.") = Field(
        default_factory=today, title="Effective Date"
    )
    basic: number(ge=0) = Field(0, title="Basic")
    hra: number(ge=0) = Field(0, title="HRA")
    da: number(ge=0) = Field(0, title="DA")
    pf_percent: number(ge=0, le=100, le_message="PF % cannot exceed 100.") = Field(
        0, title="PF %"
    )

    DERIVED_FIELDS = {"gross": "Gross Salary", "pf_amount": "PF Deduction"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        basic = lenient_number(values.get("basic"))
        gross = basic + lenient_number(values.get("hra")) + lenient_number(values.get("da"))
        return {
            "gross": gross,
            "pf_amount": basic * lenient_number(values.get("pf_percent")) / 100,
        }


class SalarySheetForm(FormSchema):
    month: calendar_month() = Field(default_factory=today, title="Month", json_schema_extra=MONTH)
    total_days: integer(ge=1, le=31, le_message="A month has at most 31 days.") = Field(
        30, title="Total Days"
    )
    present_days: integer(ge=0) = Field(30, title="Present Days")

    def cross_field_errors(self) -> dict[str, str]:
        if self.present_days > self.total_days:
            return {"present_days": "Present days cannot be more than total days"}
        return {}


class AdvanceMemoForm(FormSchema):
    emp_name: required_text("Employee name is required.") = Field(
        "", title="Employee Name", json_schema_extra={"placeholder": "Select Employee"}
    )
    date: calendar_date() = Field(default_factory=today, title="Date")
    amount: number(ge=1) = Field(0, title="Amount")
    purpose: required_text("Purpose is required.") = Field("", title="Purpose")
    recovery_month: calendar_month() = Field(
        default_factory=today, title="Recovery Start Month", json_schema_extra=MONTH
    )


MODULE = ModuleDefinition(
    slug="hr",
    title="HR Management",
    nav_label="HR",
    icon="users",
    description="Staff records, salary structures and monthly payroll.",
    forms=(
        FormDefinition(
            slug="employee-master",
            tab_label="Employee Master",
            title="New Employee",
            description="Add a new staff member to the system.",
            schema=EmployeeForm,
            submit_label="Save Employee",
            success_title="Employee Saved",
        ),
        FormDefinition(
            slug="salary-head",
            tab_label="Salary Head",
            title="Salary Head Master",
            description="Define salary components like HRA, PF, etc.",
            schema=SalaryHeadForm,
            submit_label="Save Head",
            success_title="Salary Head Saved",
        ),
        FormDefinition(
            slug="salary-structure",
            tab_label="Salary Structure",
            title="Employee Salary Structure",
            description="Assign pay structure to an employee.",
            schema=SalaryStructureForm,
            submit_label="Save Structure",
            success_title="Salary Structure Saved",
        ),
        FormDefinition(
            slug="salary-sheet",
            tab_label="Salary Sheet",
            title="Employee Salary Sheet",
            description="Process monthly payroll.",
            schema=SalarySheetForm,
            submit_label="Process Payroll",
            success_title="Salary Sheet Processed",
            reset_on_submit=False,
            display_fields=(
                DisplayField("Calculated Gross", "50000.00"),
                DisplayField("Deductions", "5000.00"),
                DisplayField("Net Pay", "45000.00"),
            ),
        ),
        FormDefinition(
            slug="advance-memo",
            tab_label="Advance Memo",
            title="Employee Advance Memo",
            description="Record a loan or advance given to an employee.",
            schema=AdvanceMemoForm,
            submit_label="Save Memo",
            success_title="Advance Memo Saved",
        ),
    ),
)
