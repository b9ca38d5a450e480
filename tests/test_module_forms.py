"""Validation rules and derived figures of the individual ERP forms."""

from datetime import date

import pytest

from apexerp.blueprints.assets.forms import (
    AssetAdditionForm,
    AssetSaleForm,
    DepreciationVoucherForm,
)
from apexerp.blueprints.contractors.forms import (
    ContractorEmployeeForm,
    ContractorSalarySheetForm,
)
from apexerp.blueprints.hr.forms import EmployeeForm, SalarySheetForm, SalaryStructureForm
from apexerp.blueprints.inventory.forms import StockTransferForm
from apexerp.blueprints.logistics.forms import FreightBillForm
from apexerp.blueprints.maintenance.forms import CalibrationReportForm, RectificationMemoForm
from apexerp.blueprints.production.forms import ExternalGRNForm
from apexerp.blueprints.purchase.forms import IndentForm
from apexerp.blueprints.sales.forms import InquiryForm
from apexerp.blueprints.settings.forms import TriggerEngineForm, UserRoleForm
from apexerp.blueprints.statutory.forms import (
    ChequeBookForm,
    GST2AReconciliationForm,
    GSTR1UploadForm,
    TCSForm,
    TDSForm,
)
from apexerp.forms import FormSubmission


def _validate(schema, payload):
    submission = FormSubmission.from_json(schema, payload)
    submission.validate()
    return submission


@pytest.mark.parametrize(
    ("rate", "message"),
    [(-1, "Rate must be positive."), (101, "Rate cannot exceed 100.")],
)
def test_depreciation_rate_bounds(rate, message):
    submission = _validate(
        AssetAdditionForm,
        {"asset_ref": "AST-1", "invoice_ref": "INV-9", "depreciation_rate": rate},
    )
    assert submission.errors == {"depreciation_rate": [message]}


@pytest.mark.parametrize("rate", [0, 15, 100])
def test_depreciation_rate_accepts_bounds(rate):
    submission = _validate(
        AssetAdditionForm,
        {"asset_ref": "AST-1", "invoice_ref": "INV-9", "depreciation_rate": rate},
    )
    assert submission.errors == {}


def test_depreciation_year_defaults_to_current_year():
    assert DepreciationVoucherForm.initial_values()["year"] == str(date.today().year)
    submission = _validate(DepreciationVoucherForm, {"asset_tag": "AST-1", "year": "24"})
    assert submission.errors == {"year": ["Enter a valid year."]}


@pytest.mark.parametrize("aadhar", ["12345678901", "1234567890123", ""])
def test_aadhar_must_be_twelve_characters(aadhar):
    submission = _validate(
        ContractorEmployeeForm,
        {"contractor_firm": "BuildCo", "worker_name": "Ravi", "aadhar_no": aadhar},
    )
    assert submission.errors == {"aadhar_no": ["Aadhar number must be 12 digits."]}


def test_contractor_employee_defaults_to_unskilled():
    submission = _validate(
        ContractorEmployeeForm,
        {"contractor_firm": "BuildCo", "worker_name": "Ravi", "aadhar_no": "123456789012"},
    )
    assert submission.errors == {}
    assert submission.cleaned["skill_level"] == "Unskilled"


@pytest.mark.parametrize(
    ("field", "schema", "base"),
    [
        ("customer_gstin", GSTR1UploadForm, {"invoice_no": "INV-1", "state": "Kerala"}),
        ("vendor_gstin", GST2AReconciliationForm, {}),
    ],
)
def test_gstin_must_be_fifteen_characters(field, schema, base):
    short = _validate(schema, dict(base, **{field: "27AAPFU0939F1Z"}))
    exact = _validate(schema, dict(base, **{field: "27AAPFU0939F1ZV"}))

    assert short.errors == {field: ["Must be 15 characters."]}
    assert exact.errors == {}


def test_mobile_number_needs_ten_digits():
    submission = _validate(
        EmployeeForm,
        {
            "emp_code": "E-1",
            "name": "Asha",
            "designation": "Fitter",
            "mobile": "98765",
            "bank_details": "SBI 0001 SBIN000001",
        },
    )
    assert submission.errors == {"mobile": ["Mobile number must be at least 10 digits."]}


def test_grn_passed_cannot_exceed_received():
    submission = _validate(
        ExternalGRNForm,
        {"challan_ref": "CHN-1", "received_qty": 10, "passed_qty": 12, "rejected_qty": 0},
    )
    assert submission.errors == {
        "passed_qty": ["Passed quantity cannot exceed received quantity."],
        "rejected_qty": ["Passed and rejected quantities cannot exceed received quantity."],
    }


def test_grn_passed_and_rejected_within_received():
    over = _validate(
        ExternalGRNForm,
        {"challan_ref": "CHN-1", "received_qty": 10, "passed_qty": 8, "rejected_qty": 3},
    )
    balanced = _validate(
        ExternalGRNForm,
        {"challan_ref": "CHN-1", "received_qty": 10, "passed_qty": 8, "rejected_qty": 2},
    )

    assert list(over.errors) == ["rejected_qty"]
    assert balanced.errors == {}


def test_present_days_cannot_exceed_total_days():
    submission = _validate(
        SalarySheetForm, {"month": "2024-02", "total_days": 29, "present_days": 30}
    )
    assert submission.errors == {"present_days": ["Present days cannot be more than total days"]}


def test_salary_sheet_total_days_limits():
    submission = _validate(SalarySheetForm, {"month": "2024-02", "total_days": 32})
    assert submission.errors["total_days"] == ["A month has at most 31 days."]


def test_stock_transfer_needs_distinct_warehouses():
    submission = _validate(
        StockTransferForm,
        {"from_warehouse": "Main", "to_warehouse": " main ", "item": "Bolts", "qty": 5},
    )
    assert submission.errors == {
        "to_warehouse": ["Destination must differ from the source warehouse."]
    }


def test_cheque_leaves_are_whole_and_ordered():
    fractional = _validate(
        ChequeBookForm, {"bank_account": "HDFC", "start_leaf_no": "1001.5", "end_leaf_no": 1050}
    )
    reversed_leaves = _validate(
        ChequeBookForm, {"bank_account": "HDFC", "start_leaf_no": 1050, "end_leaf_no": 1001}
    )

    assert fractional.errors == {"start_leaf_no": ["Enter a whole number."]}
    assert reversed_leaves.errors == {
        "end_leaf_no": ["End leaf no cannot be before start leaf no."]
    }


def test_rectification_cost_is_optional():
    submission = _validate(
        RectificationMemoForm,
        {"tool_ref": "TL-1", "technician": "Mohan", "issue": "Belt replaced", "cost": ""},
    )
    assert submission.errors == {}
    assert submission.cleaned["cost"] is None


def test_trigger_engine_gateway_must_be_http_url():
    bad = _validate(TriggerEngineForm, {"whatsapp_gateway": "gateway.local"})
    good = _validate(TriggerEngineForm, {"whatsapp_gateway": "https://gw.example.com/send"})

    assert bad.errors == {"whatsapp_gateway": ["Enter a valid http(s) URL."]}
    assert good.errors == {}
    assert good.cleaned["events"] == {
        "new_sales_order": True,
        "po_raised": True,
        "production_completed": False,
    }


def test_user_role_defaults_to_viewer():
    assert UserRoleForm.initial_values() == {"role": "viewer"}
    assert _validate(UserRoleForm, {"role": "owner"}).errors == {
        "role": ["Choose one of: admin, manager, editor, viewer."]
    }


def test_line_items_required_for_json_payloads():
    submission = _validate(
        IndentForm, {"request_date": "2024-05-01", "department": "Stores", "items": []}
    )
    assert submission.errors == {"items": ["Please add at least one item."]}


@pytest.mark.parametrize(
    ("schema", "values", "expected"),
    [
        (
            InquiryForm,
            {"items": [{"quantity": "2", "target_price": "10.5"}, {"quantity": "3", "target_price": "x"}]},
            {"estimated_total": "21.00"},
        ),
        (
            IndentForm,
            {"items": [{"requested_qty": "4"}, {"requested_qty": "6"}, "junk"]},
            {"total_requested": "10.00"},
        ),
        (
            SalaryStructureForm,
            {"basic": "10000", "hra": "2000", "da": "1000", "pf_percent": "12"},
            {"gross": "13000.00", "pf_amount": "1200.00"},
        ),
        (ContractorSalarySheetForm, {"days_worked": "20", "overtime_hours": "5"}, {"total_payable": "10500.00"}),
        (FreightBillForm, {"freight_amount": "1200", "gst": "216"}, {"total_payable": "1416.00"}),
        (AssetSaleForm, {"sale_value": "800", "book_value": "1000"}, {"gain_loss": "-200.00"}),
        (DepreciationVoucherForm, {"opening_balance": "5000", "depreciation_amount": "750"}, {"closing_balance": "4250.00"}),
        (CalibrationReportForm, {"standard_value": "10", "actual_value": "10.25"}, {"deviation": "0.25"}),
        (GSTR1UploadForm, {"taxable_value": "1000", "tax_amount": "180"}, {"invoice_value": "1180.00"}),
        (GST2AReconciliationForm, {"total_itc": "500", "matched_amount": "450"}, {"mismatch": "50.00"}),
        (TDSForm, {"payment_amount": "50000", "tds_rate": "1"}, {"tds_amount": "500.00"}),
        (TCSForm, {"sale_value": "100000", "tcs_rate": "0.1"}, {"tcs_amount": "100.00"}),
    ],
)
def test_derived_figures(schema, values, expected):
    assert schema.derived(values) == expected


def test_derived_figures_tolerate_blank_input():
    assert ContractorSalarySheetForm.derived({}) == {"total_payable": "0.00"}
    assert InquiryForm.derived({"items": None}) == {"estimated_total": "0.00"}


@pytest.mark.parametrize("items", [5, "rows", {"0": {"quantity": "2"}}])
@pytest.mark.parametrize(
    "schema, key", [(InquiryForm, "estimated_total"), (IndentForm, "total_requested")]
)
def test_derived_figures_ignore_non_list_items(schema, key, items):
    assert schema.derived({"items": items}) == {key: "0.00"}
