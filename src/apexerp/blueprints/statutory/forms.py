"""GST, TDS/TCS, registers, cheque books and the balance sheet."""

import datetime
from typing import Any, Mapping

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    SampleTable,
    calendar_date,
    calendar_month,
    choice,
    exact_text,
    integer,
    lenient_number,
    number,
    optional_text,
    required_text,
)

today = datetime.date.today
MONTH = {"widget": "month"}


def percent(**kwargs: Any) -> Any:
    return number(ge=0, le=100, **kwargs)


def _percent_of(values: Mapping[str, Any], amount_key: str, rate_key: str) -> float:
    return lenient_number(values.get(amount_key)) * lenient_number(values.get(rate_key)) / 100


class GSTTaxationForm(FormSchema):
    hsn_code: required_text("HSN Code is required.") = Field("", title="HSN Code")
    description: required_text("Description is required.") = Field("", title="Description")
    igst: percent() = Field(0, title="IGST %")
    cgst: percent() = Field(0, title="CGST %")
    sgst: percent() = Field(0, title="SGST %")


class GSTR1UploadForm(FormSchema):
    month: calendar_month() = Field(default_factory=today, title="Month", json_schema_extra=MONTH)
    invoice_no: required_text("Invoice number is required.") = Field("", title="Invoice No")
    customer_gstin: exact_text(15, "Must be 15 characters.") = Field("", title="Customer GSTIN")
    taxable_value: number(ge=0) = Field(0, title="Taxable Value")
    tax_amount: number(ge=0) = Field(0, title="Tax Amount")
    state: required_text("State is required.") = Field("", title="State")

    DERIVED_FIELDS = {"invoice_value": "Invoice Value"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "invoice_value": lenient_number(values.get("taxable_value"))
            + lenient_number(values.get("tax_amount"))
        }


class GST2AReconciliationForm(FormSchema):
    month: calendar_month() = Field(default_factory=today, title="Month", json_schema_extra=MONTH)
    vendor_gstin: exact_text(15, "Must be 15 characters.") = Field("", title="Vendor GSTIN")
    total_itc: number(ge=0) = Field(0, title="Total Input Tax Credit (ITC)")
    matched_amount: number(ge=0) = Field(0, title="Matched Amount")

    DERIVED_FIELDS = {"mismatch": "Mismatch Amount"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "mismatch": lenient_number(values.get("total_itc"))
            - lenient_number(values.get("matched_amount"))
        }


class GSTChallanForm(FormSchema):
    cpin: required_text("CPIN is required.") = Field("", title="CPIN")
    date: calendar_date() = Field(default_factory=today, title="Date")
    bank: required_text("Bank is required.") = Field("", title="Bank")
    tax_type: choice("CGST", "SGST", "IGST") = Field("CGST", title="Tax Type")
    amount: number(ge=0.01, ge_message="Amount must be greater than 0.") = Field(0, title="Amount")


class TDSForm(FormSchema):
    section: required_text("Section is required.") = Field(
        "194C", title="Section", json_schema_extra={"placeholder": "e.g., 194C"}
    )
    deductee_name: required_text("Deductee name is required.") = Field("", title="Deductee Name")
    payment_amount: number(ge=0) = Field(0, title="Payment Amount")
    tds_rate: percent() = Field(1, title="TDS Rate %")
    certificate_no: optional_text() = Field("", title="Certificate No")

    DERIVED_FIELDS = {"tds_amount": "TDS Amount"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {"tds_amount": _percent_of(values, "payment_amount", "tds_rate")}


class TCSForm(FormSchema):
    customer_name: required_text("Customer name is required.") = Field("", title="Customer Name")
    sale_value: number(ge=0) = Field(0, title="Sale Value")
    tcs_rate: percent() = Field(0.1, title="TCS Rate %")

    DERIVED_FIELDS = {"tcs_amount": "TCS Amount"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {"tcs_amount": _percent_of(values, "sale_value", "tcs_rate")}


class DateRange(FormSchema):
    start_date: calendar_date("A start date is required.") = Field(title="From")
    end_date: calendar_date("An end date is required.") = Field(title="To")


class GSTRRegisterForm(FormSchema):
    date_range: DateRange = Field(title="Date range")
    transaction_type: choice("B2B", "B2C") = Field("B2B", title="Transaction Type")

    def cross_field_errors(self) -> dict[str, str]:
        if self.date_range.end_date < self.date_range.start_date:
            return {"date_range.end_date": "End date cannot be before start date."}
        return {}


class ChequeBookForm(FormSchema):
    bank_account: required_text("Bank account is required.") = Field(
        "", title="Bank Account", json_schema_extra={"placeholder": "Select Account"}
    )
    start_leaf_no: integer(ge=1) = Field(title="Start Leaf No")
    end_leaf_no: integer(ge=1) = Field(title="End Leaf No")

    def cross_field_errors(self) -> dict[str, str]:
        if self.end_leaf_no < self.start_leaf_no:
            return {"end_leaf_no": "End leaf no cannot be before start leaf no."}
        return {}


class BalanceSheetForm(FormSchema):
    as_on_date: calendar_date() = Field(default_factory=today, title="As On Date")


CHEQUE_TRACKER = SampleTable(
    title="Cheque Status Tracker",
    headers=("Leaf No", "Status", "Issued To", "Date"),
    rows=(
        ("1001", "Used", "ABC Corp", "2023-05-15"),
        ("1002", "Cancelled", "-", "2023-05-16"),
        ("1003", "Blank", "-", "-"),
    ),
)


MODULE = ModuleDefinition(
    slug="statutory",
    title="Statutory Management",
    nav_label="Statutory",
    icon="scroll-text",
    description="GST returns, TDS/TCS, registers, cheque books and statements.",
    forms=(
        FormDefinition(
            slug="gst-taxation",
            tab_label="GST Master",
            title="GST Taxation Master",
            description="Set up tax rules for HSN codes.",
            schema=GSTTaxationForm,
            submit_label="Save Rule",
            success_title="GST Rule Saved",
        ),
        FormDefinition(
            slug="gstr1-upload",
            tab_label="GSTR-1",
            title="GSTR-1 Sales Upload",
            description="Prepare sales data for GSTR-1 filing.",
            schema=GSTR1UploadForm,
            submit_label="Add to GSTR-1",
            success_title="GSTR-1 Entry Saved",
        ),
        FormDefinition(
            slug="gst2a-recon",
            tab_label="GST2A Recon",
            title="GST2A Reconciliation",
            description="Compare purchase records with the GST portal data.",
            schema=GST2AReconciliationForm,
            submit_label="Save Reconciliation",
            success_title="Reconciliation Saved",
        ),
        FormDefinition(
            slug="gst-challan",
            tab_label="GST Challan",
            title="GST Deposit Challan",
            description="Record a GST payment challan.",
            schema=GSTChallanForm,
            submit_label="Save Challan",
            success_title="Challan Saved",
            display_fields=(DisplayField("Challan No", "Auto-generated"),),
        ),
        FormDefinition(
            slug="tds-trace",
            tab_label="TDS",
            title="TDS Trace & Details",
            description="Track tax deducted at source.",
            schema=TDSForm,
            submit_label="Save TDS Record",
            success_title="TDS Record Saved",
        ),
        FormDefinition(
            slug="tcs-details",
            tab_label="TCS",
            title="TCS Details",
            description="Track tax collected at source.",
            schema=TCSForm,
            submit_label="Save TCS Record",
            success_title="TCS Record Saved",
        ),
        FormDefinition(
            slug="gstr-register",
            tab_label="GSTR Register",
            title="GSTR1 & GSTR2 Register",
            description="View a detailed tax ledger.",
            schema=GSTRRegisterForm,
            submit_label="Generate Register",
            success_title="Register Generated",
            reset_on_submit=False,
            display_fields=(DisplayField("Total Tax Liability", "12,345.67"),),
        ),
        FormDefinition(
            slug="cheque-book",
            tab_label="Cheque Book",
            title="Add New Cheque Book",
            schema=ChequeBookForm,
            submit_label="Add Cheque Book",
            success_title="Cheque Book Added",
            reset_on_submit=False,
            tables=(CHEQUE_TRACKER,),
        ),
        FormDefinition(
            slug="balance-sheet",
            tab_label="Balance Sheet",
            title="Balance Sheet",
            description="Generate a financial statement.",
            schema=BalanceSheetForm,
            submit_label="Generate",
            success_title="Balance Sheet Generated",
            reset_on_submit=False,
            display_fields=(
                DisplayField("Assets Total", "5,000,000.00"),
                DisplayField("Liabilities Total", "2,500,000.00"),
                DisplayField("Capital Account", "2,000,000.00"),
                DisplayField("Current Assets", "500,000.00"),
            ),
        ),
    ),
)
