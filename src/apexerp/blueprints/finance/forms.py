"""Journal voucher form."""

import datetime

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    calendar_date,
    number,
    required_text,
)


class JournalVoucherForm(FormSchema):
    date: calendar_date("A date is required.") = Field(default_factory=datetime.date.today, title="Date")
    debit_account: required_text("Debit account is required.") = Field(
        "", title="Debit Account", json_schema_extra={"placeholder": "e.g. Rent Expense"}
    )
    credit_account: required_text("Credit account is required.") = Field(
        "", title="Credit Account", json_schema_extra={"placeholder": "e.g. Cash"}
    )
    amount: number(ge=0.01, ge_message="Amount must be greater than 0.") = Field(
        0, title="Amount", json_schema_extra={"placeholder": "0.00"}
    )
    narration: required_text("Narration is required.") = Field(
        "",
        title="Narration",
        json_schema_extra={
            "widget": "textarea",
            "placeholder": "Enter a brief description of the transaction",
        },
    )


MODULE = ModuleDefinition(
    slug="finance",
    title="Finance Management",
    nav_label="Finance",
    icon="landmark",
    description="Adjustment entries between accounts.",
    forms=(
        FormDefinition(
            slug="journal-voucher",
            tab_label="Journal Voucher",
            title="New Journal Voucher",
            description="Create an adjustment entry for your accounts.",
            schema=JournalVoucherForm,
            submit_label="Save Journal Voucher",
            success_title="Journal Voucher Saved",
            success_description="The new journal voucher has been successfully saved.",
            display_fields=(DisplayField("Journal No", "Auto-generated"),),
        ),
    ),
)
