"""Flask CLI commands."""

from __future__ import annotations

import json


def test_forms_lists_every_module(runner):
    result = runner.invoke(args=["apexerp-forms"])

    assert result.exit_code == 0
    assert "sales: Sales Management" in result.output
    assert "journal-voucher" in result.output
    assert "Users & Roles" in result.output


def test_forms_filters_by_module(runner):
    result = runner.invoke(args=["apexerp-forms", "--module", "finance"])

    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "finance: Finance Management"
    assert "inquiry" not in result.output


def test_forms_rejects_unknown_module(runner):
    result = runner.invoke(args=["apexerp-forms", "--module", "payroll"])

    assert result.exit_code != 0
    assert "payroll" in result.output


def test_check_accepts_valid_submission(runner):
    payload = {"customer_name": "Acme", "items": [{"item_name": "Gear", "quantity": 2, "target_price": 5}]}

    result = runner.invoke(args=["apexerp-check", "sales", "inquiry", "--data", json.dumps(payload)])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("Inquiry Saved\n")
    assert '"sales_person": "John Doe"' in result.output
    assert '"estimated_total": "10.00"' in result.output


def test_check_reports_errors(runner):
    result = runner.invoke(
        args=["apexerp-check", "assets", "asset-addition", "--data", '{"depreciation_rate": 150}']
    )

    assert result.exit_code == 1
    assert "depreciation_rate: Rate cannot exceed 100." in result.output
    assert "asset_ref: Asset reference is required." in result.output


def test_check_rejects_bad_json(runner):
    result = runner.invoke(args=["apexerp-check", "sales", "inquiry", "--data", "{not json"])

    assert result.exit_code == 2
    assert "Invalid JSON" in result.output


def test_check_rejects_unknown_form(runner):
    result = runner.invoke(args=["apexerp-check", "sales", "quotation"])

    assert result.exit_code == 2
