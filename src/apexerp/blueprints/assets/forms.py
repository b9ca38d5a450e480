"""Fixed asset register: additions, allocation, sale and depreciation."""

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
    exact_text,
    lenient_number,
    number,
    required_text,
)

SELECT_ASSET = {"placeholder": "Select Asset"}


def _current_year() -> str:
    return str(date.today().year)


class AssetForm(FormSchema):
    name: required_text("Asset name is required.") = Field(
        "", title="Name", json_schema_extra={"placeholder": "e.g. Dell Laptop"}
    )
    group: choice("IT", "Plant", "Furniture") = Field(
        "Plant",
        title="Group",
        json_schema_extra={"choice_labels": {"Plant": "Plant & Machinery"}},
    )
    purchase_date: calendar_date() = Field(default_factory=date.today, title="Purchase Date")
    value: number(ge=0, ge_message="Value cannot be negative.") = Field(0, title="Value")


class AssetAdditionForm(FormSchema):
    asset_ref: required_text("Asset reference is required.") = Field(
        "", title="Asset Ref", json_schema_extra=SELECT_ASSET
    )
    invoice_ref: required_text("Invoice reference is required.") = Field(
        "", title="Invoice Ref", json_schema_extra={"placeholder": "Purchase Invoice No"}
    )
    installation_date: calendar_date() = Field(
        default_factory=date.today, title="Installation Date"
    )
    depreciation_rate: number(
        ge=0,
        le=100,
        ge_message="Rate must be positive.",
        le_message="Rate cannot exceed 100.",
    ) = Field(15, title="Depreciation Rate (%)")


class AssetAllocationForm(FormSchema):
    asset_tag: required_text("Asset tag is required.") = Field(
        "", title="Asset Tag", json_schema_extra=SELECT_ASSET
    )
    employee_name: required_text("Employee name is required.") = Field(
        "", title="Employee Name", json_schema_extra={"placeholder": "Select Employee"}
    )
    department: required_text("Department is required.") = Field(
        "", title="Department", json_schema_extra={"placeholder": "e.g. IT, Sales"}
    )
    date_assigned: calendar_date() = Field(default_factory=date.today, title="Date Assigned")


class AssetSaleForm(FormSchema):
    asset_tag: required_text("Asset tag is required.") = Field(
        "", title="Asset Tag", json_schema_extra=SELECT_ASSET
    )
    sale_date: calendar_date() = Field(default_factory=date.today, title="Sale Date")
    sale_value: number(ge=0) = Field(0, title="Sale Value")
    book_value: number(ge=0) = Field(0, title="Book Value")

    DERIVED_FIELDS = {"gain_loss": "Gain / (Loss) on Sale"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "gain_loss": lenient_number(values.get("sale_value"))
            - lenient_number(values.get("book_value"))
        }


class DepreciationVoucherForm(FormSchema):
    """Year-end depreciation; closing balance is opening less the charge."""

    year: exact_text(4, "Enter a valid year.") = Field(
        default_factory=_current_year, title="Year", json_schema_extra={"placeholder": "YYYY"}
    )
    asset_tag: required_text("Asset tag is required.") = Field(
        "", title="Asset Tag", json_schema_extra=SELECT_ASSET
    )
    opening_balance: number() = Field(0, title="Opening Balance")
    depreciation_amount: number() = Field(0, title="Depreciation Amount")

    DERIVED_FIELDS = {"closing_balance": "Closing Balance"}

    @classmethod
    def compute_derived(cls, values: Mapping[str, Any]) -> dict[str, float]:
        return {
            "closing_balance": lenient_number(values.get("opening_balance"))
            - lenient_number(values.get("depreciation_amount"))
        }


MODULE = ModuleDefinition(
    slug="assets",
    title="Asset Management",
    nav_label="Assets",
    icon="briefcase",
    description="Fixed assets from purchase through disposal.",
    forms=(
        FormDefinition(
            slug="asset-master",
            tab_label="Asset Master",
            title="New Fixed Asset",
            description="Add a new asset to the master list.",
            schema=AssetForm,
            submit_label="Save Asset",
            success_title="Asset Saved",
            display_fields=(DisplayField("Asset Tag", "Auto-generated"),),
        ),
        FormDefinition(
            slug="asset-addition",
            tab_label="Asset Addition",
            title="Asset Addition Memo",
            description="Log the addition of a new asset.",
            schema=AssetAdditionForm,
            submit_label="Save Memo",
            success_title="Asset Addition Memo Saved",
        ),
        FormDefinition(
            slug="asset-allocation",
            tab_label="Asset Allocation",
            title="Asset Allocation",
            description="Assign an asset to a user or department.",
            schema=AssetAllocationForm,
            submit_label="Allocate Asset",
            success_title="Asset Allocated",
        ),
        FormDefinition(
            slug="asset-sale",
            tab_label="Asset Sale",
            title="Asset Sale Memo",
            description="Record the disposal or sale of an asset.",
            schema=AssetSaleForm,
            submit_label="Record Sale",
            success_title="Asset Sale Recorded",
        ),
        FormDefinition(
            slug="asset-depreciation",
            tab_label="Asset Depreciation",
            title="Asset Depreciation Voucher",
            description="Perform year-end depreciation calculation.",
            schema=DepreciationVoucherForm,
            submit_label="Save Voucher",
            success_title="Depreciation Voucher Saved",
        ),
    ),
)
