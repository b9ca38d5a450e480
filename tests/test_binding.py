"""Binding raw submissions onto schemas and editing line-item rows."""

from datetime import date

import pytest
from pydantic import Field

from apexerp.blueprints.maintenance.forms import MaintenanceChartForm
from apexerp.blueprints.purchase.forms import IndentForm
from apexerp.blueprints.sales.forms import InquiryForm
from apexerp.forms import FormSchema, FormSubmission, calendar_date, unflatten
from apexerp.forms.binding import ROOT_ERROR_KEY, parse_row_action
from apexerp.forms.fields import REQUIRED_MESSAGE


class Window(FormSchema):
    opens: calendar_date("Opening date is required.") = Field(title="Opens")


def test_unflatten_builds_lists_and_groups():
    tree = unflatten(
        {
            "name": "Acme",
            "items.0.item_name": "Bolts",
            "items.3.item_name": "Nuts",
            "tasks.greasing": "on",
        }
    )

    assert tree == {
        "name": "Acme",
        "items": [{"item_name": "Bolts"}, {"item_name": "Nuts"}],
        "tasks": {"greasing": "on"},
    }


def test_unflatten_orders_rows_by_index():
    tree = unflatten({"items.10.q": "b", "items.2.q": "a"})
    assert tree["items"] == [{"q": "a"}, {"q": "b"}]


def test_unflatten_drops_bare_numeric_keys():
    assert unflatten({"0": "x", "1.name": "y", "name": "n"}) == {"name": "n"}


def test_html_binding_with_only_numeric_keys_still_binds():
    submission = FormSubmission.from_form(InquiryForm, {"0": "x"})

    assert not submission.validate()
    assert submission.errors["customer_name"] == ["Customer name is required."]


def test_missing_key_uses_generic_required_message():
    submission = FormSubmission.from_json(Window, {})
    assert not submission.validate()
    assert submission.errors == {"opens": [REQUIRED_MESSAGE]}


def test_html_binding_fills_absent_checkboxes_and_lists():
    submission = FormSubmission.from_form(MaintenanceChartForm, {"tool_ref": "TL-1"})

    assert submission.values["tasks"] == {
        "greasing": False,
        "cleaning": False,
        "inspection": False,
    }
    submission.validate()
    assert "tasks" not in submission.errors


def test_html_binding_without_rows_reports_empty_table():
    submission = FormSubmission.from_form(
        IndentForm, {"request_date": "2024-05-01", "department": "Stores", "priority": "Low"}
    )

    assert submission.values["items"] == []
    assert not submission.validate()
    assert submission.errors["items"] == ["Please add at least one item."]


def test_row_errors_are_keyed_by_position():
    submission = FormSubmission.from_form(
        IndentForm,
        {
            "request_date": "2024-05-01",
            "department": "Stores",
            "priority": "Low",
            "items.0.item_name": "Bolts",
            "items.0.current_stock": "4",
            "items.0.requested_qty": "2",
            "items.1.item_name": "",
            "items.1.current_stock": "-1",
            "items.1.requested_qty": "0",
        },
    )

    assert not submission.validate()
    assert submission.errors == {
        "items.1.item_name": ["Item name is required."],
        "items.1.current_stock": ["Stock cannot be negative."],
        "items.1.requested_qty": ["Quantity must be at least 1."],
    }
    assert submission.has_errors_under("items")
    assert not submission.has_errors_under("department")


def test_defaults_fill_blank_values_only():
    blank = FormSubmission.from_form(
        InquiryForm, {"sales_person": ""}, defaults={"sales_person": "John Doe"}
    )
    typed = FormSubmission.from_form(
        InquiryForm, {"sales_person": "Asha"}, defaults={"sales_person": "John Doe"}
    )

    assert blank.values["sales_person"] == "John Doe"
    assert typed.values["sales_person"] == "Asha"


def test_blank_submission_uses_schema_defaults():
    submission = FormSubmission.blank(InquiryForm, {"sales_person": "John Doe"})

    assert submission.values["status"] == "New"
    assert submission.values["sales_person"] == "John Doe"
    assert submission.values["inquiry_date"] == date.today()
    assert submission.rows("items") == [{"item_name": "", "quantity": 1, "target_price": 0}]
    assert submission.errors == {}


def test_cleaned_requires_successful_validation():
    submission = FormSubmission.blank(InquiryForm)
    with pytest.raises(RuntimeError):
        submission.cleaned


def test_display_formats_values_for_inputs():
    submission = FormSubmission(
        schema=InquiryForm,
        values={"inquiry_date": date(2024, 5, 17), "items": [{"quantity": 2.0}], "status": None},
    )

    assert submission.display("inquiry_date", "date") == "2024-05-17"
    assert submission.display("inquiry_date", "month") == "2024-05"
    assert submission.display("items.0.quantity", "number") == "2"
    assert submission.display("items.5.quantity", "number") == ""
    assert submission.display("status") == ""


@pytest.mark.parametrize(
    ("action", "expected"),
    [
        ("add_row:items", ("add_row", "items", None)),
        ("remove_row:items:2", ("remove_row", "items", 2)),
    ],
)
def test_parse_row_action(action, expected):
    assert parse_row_action(action) == expected


@pytest.mark.parametrize("action", ["", "add_row", "remove_row:items", "remove_row:items:x", "drop:items"])
def test_parse_row_action_rejects_unknown_commands(action):
    with pytest.raises(ValueError):
        parse_row_action(action)


def test_add_and_remove_rows():
    submission = FormSubmission.blank(IndentForm)

    assert submission.apply_action("add_row:items")
    assert len(submission.rows("items")) == 2
    submission.values["items"][0]["item_name"] = "First"

    assert submission.apply_action("remove_row:items:0")
    assert len(submission.rows("items")) == 1
    assert submission.rows("items")[0]["item_name"] == ""


def test_last_row_is_kept():
    submission = FormSubmission.blank(IndentForm)

    assert not submission.remove_row("items", 0)
    assert not submission.remove_row("items", 7)
    assert len(submission.rows("items")) == 1


def test_row_actions_need_a_line_item_field():
    submission = FormSubmission.blank(IndentForm)
    with pytest.raises(KeyError):
        submission.apply_action("add_row:department")


def test_cross_field_errors_only_after_fields_parse():
    from apexerp.blueprints.production.forms import RoutecardForm

    bad_dates = FormSubmission.from_json(
        RoutecardForm,
        {"batch_no": "B-1", "product": "Gear", "start_date": "2024-05-10", "end_date": "2024-05-01"},
    )
    missing_product = FormSubmission.from_json(
        RoutecardForm,
        {"batch_no": "B-1", "start_date": "2024-05-10", "end_date": "2024-05-01"},
    )

    assert not bad_dates.validate()
    assert bad_dates.errors == {"end_date": ["End date cannot be before start date."]}
    assert not missing_product.validate()
    assert "end_date" not in missing_product.errors


def test_root_error_key_is_stable():
    assert ROOT_ERROR_KEY == "__root__"
