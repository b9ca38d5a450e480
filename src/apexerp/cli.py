"""Flask CLI commands for ApexERP."""

from __future__ import annotations

import json

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("apexerp-forms")
    @click.option("--module", "module_slug", default=None, help="Only list one module")
    def apexerp_forms(module_slug: str | None) -> None:
        """List registered modules and their forms."""

        from .forms import get_module, iter_modules

        if module_slug:
            try:
                modules = [get_module(module_slug)]
            except KeyError as exc:
                raise click.BadParameter(str(exc.args[0]), param_hint="--module") from None
        else:
            modules = list(iter_modules())

        for module in modules:
            click.echo(f"{module.slug}: {module.title}")
            for definition in module.forms:
                click.echo(f"  {definition.slug:<28} {definition.tab_label}")

    @app.cli.command("apexerp-check")
    @click.argument("module_slug")
    @click.argument("form_slug")
    @click.option("--data", "raw_data", default="{}", help="Submission as a JSON object")
    def apexerp_check(module_slug: str, form_slug: str, raw_data: str) -> None:
        """Validate a JSON submission against one form."""

        from .forms import FormSubmission, get_form

        try:
            definition = get_form(module_slug, form_slug)
        except KeyError as exc:
            raise click.BadParameter(str(exc.args[0])) from None

        try:
            payload = json.loads(raw_data)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Invalid JSON: {exc.msg}", param_hint="--data") from None
        if not isinstance(payload, dict):
            raise click.BadParameter("Expected a JSON object", param_hint="--data")

        submission = FormSubmission.from_json(
            definition.schema, payload, defaults=definition.defaults_from(app.config)
        )
        if not submission.validate():
            for field_path, messages in sorted(submission.errors.items()):
                for message in messages:
                    click.echo(f"{field_path}: {message}", err=True)
            raise click.exceptions.Exit(1)

        click.echo(definition.success_title)
        click.echo(json.dumps(submission.cleaned, indent=2, sort_keys=True))
        derived = submission.derived
        if derived:
            click.echo(json.dumps(derived, indent=2, sort_keys=True))
