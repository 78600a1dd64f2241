"""
GR Document Engine -- CLI Interface
===================================
Main entry point for the GR document generation engine.

Commands:
  list-templates -- List document templates, optionally by wizard entry point
  show-template  -- Show a template's sections, requirements and formats
  generate       -- Generate a document from a workspace export
  filename       -- Print the export filename for a document
  policy         -- Display the current generation policy
"""

from __future__ import annotations

import sys
from datetime import date
from typing import Any

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from grdocs import __version__
from grdocs._icons import ICON_CHECK, ICON_CROSS, ICON_DOC, ICON_SLIDE, ICON_WARN
from grdocs.audit_logger import AuditLogger
from grdocs.exporter import export_markdown, export_stem
from grdocs.formatting import generate_export_filename
from grdocs.generator import generate as generate_sections
from grdocs.policy_engine import GenerationPolicy
from grdocs.registry import get_schema, list_available, list_templates
from grdocs.renderer import DocumentRenderer
from grdocs.schema import EntryPoint, ExportFormat, UnknownTemplateError
from grdocs.schema_loader import build_context, load_workspace
from grdocs.validator import ContextValidator

console = Console()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_overrides(pairs: tuple[str, ...]) -> dict[str, Any]:
    """
    Turn repeated `key=value` options into a config mapping.

    Values are read as YAML scalars (`false` -> False, `3` -> 3).
    Dotted keys build nested groups: `kpiToggles.media=false`.
    """
    config: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--set")
        key, raw = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise click.BadParameter(f"Empty key in '{pair}'", param_hint="--set")
        try:
            value = yaml.safe_load(raw) if raw.strip() else None
        except yaml.YAMLError:
            value = raw
        if isinstance(value, (dict, list)):
            value = raw

        target = config
        *groups, leaf = key.split(".")
        for group in groups:
            target = target.setdefault(group, {})
        target[leaf] = value
    return config


def _schema_or_exit(template_id: str):
    try:
        return get_schema(template_id)
    except UnknownTemplateError as e:
        console.print(f"[red]{ICON_CROSS} {e}[/red]")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI Group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(__version__, prog_name="grdocs")
def main():
    """GR Document Engine -- template-driven generation of GR documents"""
    pass


# ---------------------------------------------------------------------------
# list-templates
# ---------------------------------------------------------------------------

@main.command("list-templates")
@click.option("--entry-point", "-e", default=None,
              type=click.Choice([e.value for e in EntryPoint]),
              help="Only templates offered from this wizard entry point.")
def list_templates_cmd(entry_point: str | None):
    """List available document templates."""
    schemas = list_available(entry_point) if entry_point else list_templates()

    title = "Document Templates"
    if entry_point:
        title += f" ({entry_point})"

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Sections", style="yellow", justify="right")
    table.add_column("Formats", style="magenta")
    table.add_column("Entry Points", style="dim")

    for schema in schemas:
        table.add_row(
            schema.id.value,
            schema.name,
            str(len(schema.sections)),
            ", ".join(sorted(f.value for f in schema.export_formats)),
            ", ".join(sorted(e.value for e in schema.available_from)),
        )

    console.print(table)


# ---------------------------------------------------------------------------
# show-template
# ---------------------------------------------------------------------------

@main.command("show-template")
@click.argument("template_id")
def show_template(template_id: str):
    """Show a template's sections, requirements and export formats."""
    schema = _schema_or_exit(template_id)

    requirements = [
        name for name, flag in (
            ("addressee", schema.requires_addressee),
            ("initiative", schema.requires_initiative),
            ("period", schema.requires_period),
        ) if flag
    ]
    icon = ICON_SLIDE if schema.is_slide_deck else ICON_DOC

    console.print()
    console.print(Panel(
        f"{schema.description}\n\n"
        f"Requires:  {', '.join(requirements) or 'nothing'}\n"
        f"Formats:   {', '.join(sorted(f.value for f in schema.export_formats))}\n"
        f"Offered:   {', '.join(sorted(e.value for e in schema.available_from))}",
        title=f"{icon} {schema.name} ({schema.id.value})",
        border_style="blue",
    ))

    table = Table(title="Sections")
    table.add_column("#", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Required")
    for i, section in enumerate(schema.sections, 1):
        table.add_row(
            str(i),
            section.key,
            section.title,
            ICON_CHECK if section.required else "-",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

@main.command()
@click.option("--workspace", "-w", required=True, type=click.Path(exists=True),
              help="Path to workspace YAML export.")
@click.option("--template", "-t", "template_id", required=True,
              help="Template id (see list-templates).")
@click.option("--company", "-c", default=None, help="Company id (default: the user's company).")
@click.option("--user", "-u", default=None, help="User id (default: first user).")
@click.option("--initiative", "-i", default=None, help="Initiative id.")
@click.option("--addressee", "-s", default=None, help="Stakeholder id to address the document to.")
@click.option("--period", "-p", default=None, help="Reporting period, e.g. 2026-02 or Q1-2026.")
@click.option("--date", "current_date", default=None,
              help="Document date, ISO format (default: today).")
@click.option("--set", "overrides", multiple=True,
              help="Template option as key=value; repeatable.")
@click.option("--output", "-o", default=None, type=click.Path(),
              help="Output directory (default: from policy).")
@click.option("--force", is_flag=True, help="Generate even if policy blocks the context.")
def generate(
    workspace: str,
    template_id: str,
    company: str | None,
    user: str | None,
    initiative: str | None,
    addressee: str | None,
    period: str | None,
    current_date: str | None,
    overrides: tuple[str, ...],
    output: str | None,
    force: bool,
):
    """Generate a document from a workspace export."""
    schema = _schema_or_exit(template_id)

    try:
        ws = load_workspace(workspace)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]{ICON_CROSS} Workspace load failed:[/red] {e}")
        sys.exit(1)

    config = parse_overrides(overrides)
    current_date = current_date or date.today().isoformat()

    try:
        ctx = build_context(
            ws,
            schema.id,
            current_date=current_date,
            company_id=company,
            user_id=user,
            initiative_id=initiative,
            addressee_stakeholder_id=addressee,
            period=period,
            config=config,
        )
        schema = schema.without_optional(ctx.config.disabled_sections())
    except ValueError as e:
        console.print(f"[red]{ICON_CROSS} Context assembly failed:[/red] {e}")
        sys.exit(1)

    # Pre-generation check
    policy = GenerationPolicy()
    report = ContextValidator(policy).validate(schema, ctx)

    if report.is_blocked and not force:
        console.print()
        console.print(Panel(
            report.summary(),
            title=f"{ICON_WARN}  GENERATION BLOCKED",
            border_style="red",
        ))
        console.print("[red]Resolve errors or use --force to override.[/red]")
        sys.exit(1)

    if report.errors or report.warnings:
        console.print()
        console.print(Panel(
            report.summary(),
            title="CONTEXT CHECK",
            border_style="yellow",
        ))

    sections = generate_sections(schema, ctx)
    document = DocumentRenderer().render(schema, sections, ctx)

    out_dir = output or policy.output_dir()
    filename = export_stem(schema.id, ctx.company.name, ctx.current_date)
    md_path = export_markdown(document, filename, out_dir)
    console.print(f"\n[green]{ICON_CHECK}[/green] {schema.name}: {len(sections)} sections")
    console.print(f"[green]{ICON_CHECK}[/green] Markdown: {md_path}")

    if policy.should_audit():
        try:
            audit = AuditLogger(policy.logs_dir())
            log_path = audit.log_generation(
                template_id=schema.id.value,
                context=ctx,
                sections=sections,
                findings=audit.findings_to_dicts(report.findings),
                forced=force and report.is_blocked,
                policy_snapshot={"version": policy.version, "path": str(policy.path)},
                output_file=str(md_path),
            )
            console.print(f"[dim]Audit: {log_path}[/dim]")
        except OSError as e:
            console.print(f"[yellow]{ICON_WARN}[/yellow] Audit record not written: {e}")


# ---------------------------------------------------------------------------
# filename
# ---------------------------------------------------------------------------

@main.command("filename")
@click.argument("template_id")
@click.argument("company_name")
@click.argument("date_value")
@click.argument("fmt", type=click.Choice([f.value for f in ExportFormat]))
def filename_cmd(template_id: str, company_name: str, date_value: str, fmt: str):
    """Print the export filename for a document."""
    try:
        click.echo(generate_export_filename(template_id, company_name, date_value, fmt))
    except UnknownTemplateError as e:
        console.print(f"[red]{ICON_CROSS} {e}[/red]")
        sys.exit(1)


# ---------------------------------------------------------------------------
# policy
# ---------------------------------------------------------------------------

@main.command("policy")
def policy_cmd():
    """Display the current generation policy."""
    policy = GenerationPolicy()
    console.print()
    console.print(Panel(
        policy.summary(),
        title=f"GENERATION POLICY v{policy.version}",
        border_style="blue",
    ))


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
