"""Blueprint factory that turns a module definition into a tabbed page."""

from __future__ import annotations

from flask import (
    Blueprint,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)
from werkzeug.exceptions import BadRequest, NotFound

from ..forms import FormDefinition, FormSubmission, ModuleDefinition, describe_fields, register_module
from ..forms.binding import ROOT_ERROR_KEY
from ..logging_config import get_logger

logger = get_logger(__name__)

ACTION_FIELD = "_action"
SUBMIT_ACTION = "submit"


def _prefers_json_response() -> bool:
    # ``best`` is None for a missing Accept header, so browsers and bare
    # test clients fall through to HTML.
    return request.is_json or request.accept_mimetypes.best == "application/json"


def _lookup(module: ModuleDefinition, form_slug: str) -> FormDefinition:
    try:
        return module.form(form_slug)
    except KeyError:
        raise NotFound(f"{module.title} has no form {form_slug!r}") from None


def _render(
    module: ModuleDefinition,
    definition: FormDefinition,
    submission: FormSubmission,
    status: int = 200,
):
    return (
        render_template(
            "tabbed/page.html",
            module=module,
            active=definition,
            submission=submission,
            fields=describe_fields(definition.schema),
            derived_labels=definition.schema.DERIVED_FIELDS,
        ),
        status,
    )


def _bind(definition: FormDefinition) -> FormSubmission:
    defaults = definition.defaults_from(current_app.config)
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise BadRequest("Request body must be a JSON object.")
        return FormSubmission.from_json(definition.schema, payload, defaults=defaults)
    return FormSubmission.from_form(definition.schema, request.form, defaults=defaults)


def build_blueprint(module: ModuleDefinition, import_name: str) -> Blueprint:
    """Register ``module`` and return a blueprint serving its tabs.

    Routes (relative to ``/<module.slug>``)::

        GET  /                      page with ?tab=<form> selected
        POST /<form>                submit, or add/remove a line-item row
        POST /<form>/preview        derived figures for unsaved values
        GET  /<form>/schema         field description as JSON
    """

    register_module(module)
    bp = Blueprint(module.slug, import_name, url_prefix=f"/{module.slug}")

    @bp.get("/")
    def index():
        """Show the module page with the requested tab open."""

        tab = request.args.get("tab") or module.default_form.slug
        definition = _lookup(module, tab)
        submission = FormSubmission.blank(
            definition.schema, definition.defaults_from(current_app.config)
        )
        return _render(module, definition, submission)

    @bp.post("/<form_slug>")
    def submit(form_slug: str):
        """Validate a submission and confirm or re-display it with errors."""

        definition = _lookup(module, form_slug)
        try:
            submission = _bind(definition)
        except BadRequest as exc:
            return jsonify({"errors": {ROOT_ERROR_KEY: [exc.description]}}), 400

        action = SUBMIT_ACTION if request.is_json else request.form.get(ACTION_FIELD, SUBMIT_ACTION)
        if action != SUBMIT_ACTION:
            try:
                submission.apply_action(action)
            except (KeyError, ValueError):
                raise BadRequest(f"Unsupported action {action!r}") from None
            return _render(module, definition, submission)

        if not submission.validate():
            logger.debug(
                "Form rejected",
                extra={
                    "module_slug": module.slug,
                    "form_slug": definition.slug,
                    "error_fields": sorted(submission.errors),
                },
            )
            if _prefers_json_response():
                return jsonify({"errors": submission.errors}), 400
            return _render(module, definition, submission, status=400)

        payload = submission.cleaned
        logger.info(
            "Form submitted",
            extra={"module_slug": module.slug, "form_slug": definition.slug, "payload": payload},
        )

        if _prefers_json_response():
            return (
                jsonify(
                    {
                        "status": "ok",
                        "title": definition.success_title,
                        "data": payload,
                        "derived": submission.derived,
                    }
                ),
                201,
            )

        flash(definition.success_message, "success")
        if definition.reset_on_submit:
            return redirect(url_for(f"{module.slug}.index", tab=definition.slug))
        return _render(module, definition, submission)

    @bp.post("/<form_slug>/preview")
    def preview(form_slug: str):
        """Return derived figures for the current, possibly invalid, values."""

        definition = _lookup(module, form_slug)
        try:
            submission = _bind(definition)
        except BadRequest as exc:
            return jsonify({"errors": {ROOT_ERROR_KEY: [exc.description]}}), 400
        return jsonify(
            {
                "derived": submission.derived,
                "labels": definition.schema.DERIVED_FIELDS,
            }
        )

    @bp.get("/<form_slug>/schema")
    def schema(form_slug: str):
        """Describe a form's fields for API clients."""

        definition = _lookup(module, form_slug)
        return jsonify(
            {
                "module": module.slug,
                "form": definition.slug,
                "title": definition.title,
                "submit_label": definition.submit_label,
                "reset_on_submit": definition.reset_on_submit,
                "fields": [view.to_dict() for view in describe_fields(definition.schema)],
                "derived": definition.schema.DERIVED_FIELDS,
            }
        )

    return bp


__all__ = ["build_blueprint"]
