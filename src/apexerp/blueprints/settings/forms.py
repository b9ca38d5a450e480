"""Notification triggers and role assignment."""

from pydantic import Field

from ...forms import (
    DisplayField,
    FormDefinition,
    FormSchema,
    ModuleDefinition,
    checkbox,
    choice,
    optional_text,
    optional_url,
)


class NotificationEvents(FormSchema):
    new_sales_order: checkbox() = Field(True, title="New Sales Order")
    po_raised: checkbox() = Field(True, title="Purchase Order Raised")
    production_completed: checkbox() = Field(False, title="Production Order Completed")


class TriggerEngineForm(FormSchema):
    smtp_host: optional_text() = Field(
        "", title="SMTP Host", json_schema_extra={"placeholder": "smtp.example.com"}
    )
    whatsapp_gateway: optional_url() = Field(
        "",
        title="WhatsApp Gateway URL",
        json_schema_extra={"widget": "url", "placeholder": "https://your-gateway.example.com"},
    )
    events: NotificationEvents = Field(
        default_factory=NotificationEvents, title="Notification Events"
    )


class UserRoleForm(FormSchema):
    role: choice("admin", "manager", "editor", "viewer") = Field(
        "viewer",
        title="Role",
        json_schema_extra={
            "placeholder": "Select role",
            "choice_labels": {
                "admin": "Admin",
                "manager": "Manager",
                "editor": "Editor",
                "viewer": "Viewer",
            },
        },
    )


MODULE = ModuleDefinition(
    slug="settings",
    title="Settings",
    nav_label="Settings",
    icon="settings",
    description="Notification triggers and role-based access.",
    forms=(
        FormDefinition(
            slug="trigger-engine",
            tab_label="Trigger Engine",
            title="Trigger Engine",
            description=(
                "Configure automated notifications via WhatsApp and Email for "
                "status changes and reminders."
            ),
            schema=TriggerEngineForm,
            submit_label="Save Changes",
            success_title="Settings Saved",
            reset_on_submit=False,
        ),
        FormDefinition(
            slug="users-roles",
            tab_label="Users & Roles",
            title="Users & Roles",
            description="Manage user access and permissions with Role-Based Access Control.",
            schema=UserRoleForm,
            submit_label="Update Role",
            success_title="Role Updated",
            reset_on_submit=False,
            display_fields=(DisplayField("User", "Olivia Martin"),),
        ),
    ),
)
