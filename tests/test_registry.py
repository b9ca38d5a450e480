"""Module and form definitions and the module registry."""

import pytest
from pydantic import Field

from apexerp.forms import (
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    get_form,
    get_module,
    iter_modules,
    register_module,
    required_text,
)


class NoteForm(FormSchema):
    text: required_text("Text is required.") = Field("", title="Text")


def _definition(slug: str, **overrides) -> FormDefinition:
    values = dict(
        slug=slug,
        tab_label=slug.title(),
        title=f"{slug.title()} Form",
        schema=NoteForm,
        submit_label="Save",
        success_title="Saved",
    )
    values.update(overrides)
    return FormDefinition(**values)


def test_module_requires_forms():
    with pytest.raises(ValueError):
        ModuleDefinition(slug="empty", title="Empty", nav_label="Empty", icon="x", forms=())


def test_module_rejects_duplicate_form_slugs():
    with pytest.raises(ValueError, match="Duplicate form slug"):
        ModuleDefinition(
            slug="dupes",
            title="Dupes",
            nav_label="Dupes",
            icon="x",
            forms=(_definition("note"), _definition("note")),
        )


def test_form_lookup_and_default():
    module = ModuleDefinition(
        slug="notes",
        title="Notes",
        nav_label="Notes",
        icon="x",
        forms=(_definition("first"), _definition("second")),
    )

    assert module.default_form.slug == "first"
    assert module.form("second").title == "Second Form"
    with pytest.raises(KeyError):
        module.form("third")


def test_success_message_joins_description():
    assert _definition("a").success_message == "Saved"
    assert (
        _definition("b", success_description="All done.").success_message == "Saved. All done."
    )


def test_defaults_from_config_skips_missing_keys():
    definition = _definition(
        "c", config_defaults=(("owner", "CURRENT_USER_NAME"), ("team", "TEAM_NAME"))
    )
    assert definition.defaults_from({"CURRENT_USER_NAME": "Asha"}) == {"owner": "Asha"}


def test_register_module_is_idempotent_per_object():
    module = ModuleDefinition(
        slug="registry-probe", title="Probe", nav_label="Probe", icon="x", forms=(_definition("p"),)
    )
    impostor = ModuleDefinition(
        slug="registry-probe", title="Other", nav_label="Other", icon="x", forms=(_definition("p"),)
    )

    assert register_module(module) is module
    assert register_module(module) is module
    with pytest.raises(ValueError):
        register_module(impostor)
    assert get_module("registry-probe") is module


def test_builtin_modules_are_registered(app):
    slugs = {module.slug for module in iter_modules()}

    assert {
        "sales",
        "purchase",
        "production",
        "logistics",
        "inventory",
        "finance",
        "hr",
        "contractors",
        "quality",
        "maintenance",
        "assets",
        "statutory",
        "settings",
    } <= slugs
    assert get_form("sales", "inquiry").title == "New Inquiry"
    assert len(get_module("production").forms) == 10


def test_unknown_lookups_raise_key_error(app):
    with pytest.raises(KeyError):
        get_module("payroll")
    with pytest.raises(KeyError):
        get_form("sales", "quotation")
