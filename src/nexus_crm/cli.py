"""Nexus CRM command-line interface.

Usage:
    nexus-crm brief CONTACTS_JSON          - Morning relationship briefing
    nexus-crm contacts CONTACTS_JSON       - Search, filter and sort contacts
    nexus-crm topics CONTACTS_JSON ID      - Discussion topics for a contact

Options:
    --json                                 - Output in JSON format for scripting
"""

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import click
from pydantic import TypeAdapter
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config.settings import Settings
from .contacts.models import Contact
from .contacts.ranking import ALL_CATEGORIES, SortKey
from .contacts.schedule import describe_last_interaction, is_overdue
from .exceptions import ContactNotFoundError
from .session import CRMSession
from .utils.log_setup import configure_logging

console = Console()

_contacts_adapter = TypeAdapter(List[Contact])


def load_contacts(path: Path) -> List[Contact]:
    """Read a JSON array of contacts."""
    return _contacts_adapter.validate_json(path.read_bytes())


def output_json(data: Any) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=2, default=str))


def _contact_row(contact: Contact) -> Dict[str, Any]:
    return {
        "id": contact.id,
        "name": contact.display_name,
        "category": contact.category,
        "company": contact.company,
        "next_catch_up_date": contact.next_catch_up_date,
        "last_interaction": describe_last_interaction(contact),
    }


def _session(ctx: click.Context, contacts_file: Path) -> CRMSession:
    settings: Settings = ctx.obj["settings"]
    return CRMSession.from_settings(settings, load_contacts(contacts_file))


@click.group()
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def cli(ctx: click.Context, json_output: bool) -> None:
    """Nexus CRM - catch-ups and relationship insights."""
    settings = Settings()
    configure_logging(settings.log_level, settings.log_format)
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("contacts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def brief(ctx: click.Context, contacts_file: Path) -> None:
    """Run the daily sync and show the briefing."""
    session = _session(ctx, contacts_file)
    briefing = asyncio.run(session.open_dashboard())
    store = session.aggregator.store

    if ctx.obj["json"]:
        output_json(
            {
                "total_contacts": briefing.total_contacts,
                "catch_ups_due": briefing.catch_ups_due,
                "update_count": briefing.update_count,
                "upcoming": [_contact_row(c) for c in briefing.upcoming],
                "insights": [
                    {"contact_id": c.id, **store.get_result(c.id).model_dump(mode="json")}
                    for c in briefing.insight_worthy
                    if store.get_result(c.id) is not None
                ],
            }
        )
        return

    console.print()
    console.print(
        Panel(
            f"[bold]Total network:[/bold] {briefing.total_contacts}\n"
            f"[bold]Catch-ups due:[/bold] {briefing.catch_ups_due}\n"
            f"[bold]Today's updates:[/bold] {briefing.update_count}",
            title="[bold blue]Daily Briefing[/bold blue]",
            border_style="blue",
            box=box.ROUNDED,
        )
    )

    console.print("\n[bold cyan]Upcoming Catch-ups:[/bold cyan]")
    if not briefing.upcoming:
        console.print("  [dim]Nothing scheduled.[/dim]")
    for contact in briefing.upcoming:
        style = "red" if is_overdue(contact) else "white"
        console.print(
            f"  [{style}]{contact.next_catch_up_date}[/] {contact.display_name} "
            f"[dim]{contact.company or contact.category}[/dim]"
        )

    console.print("\n[bold cyan]Network Insights:[/bold cyan]")
    if not briefing.insight_worthy:
        console.print("  [dim]No updates today.[/dim]")
    for contact in briefing.insight_worthy:
        record = store.get_result(contact.id)
        if record is None:
            continue
        console.print(f"  [bold]{contact.display_name}[/bold] ({contact.sync_platform.value})")
        console.print(f"    {record.summary}")
        for suggestion in record.suggestions:
            console.print(f"    [dim]-[/dim] {suggestion}")
    console.print()


@cli.command()
@click.argument("contacts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--query", "-q", default="", help="Search first name, last name and company")
@click.option("--category", "-c", default=ALL_CATEGORIES, help="Category filter")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([k.value for k in SortKey]),
    default=SortKey.LAST_NAME.value,
)
@click.pass_context
def contacts(
    ctx: click.Context,
    contacts_file: Path,
    query: str,
    category: str,
    sort_key: str,
) -> None:
    """List contacts."""
    session = _session(ctx, contacts_file)
    rows = [_contact_row(c) for c in session.list_contacts(query, category, SortKey(sort_key))]

    if ctx.obj["json"]:
        output_json(rows)
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Company", style="dim")
    table.add_column("Next catch-up")
    table.add_column("Last interaction", style="dim")
    for row in rows:
        table.add_row(
            row["name"],
            row["category"],
            row["company"] or "",
            str(row["next_catch_up_date"] or ""),
            row["last_interaction"],
        )
    console.print(table)


@cli.command()
@click.argument("contacts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("contact_id")
@click.pass_context
def topics(ctx: click.Context, contacts_file: Path, contact_id: str) -> None:
    """Suggest discussion topics for a scheduled catch-up."""
    session = _session(ctx, contacts_file)
    try:
        result = asyncio.run(session.discussion_topics(contact_id, today=date.today()))
    except ContactNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc

    if ctx.obj["json"]:
        output_json(result)
        return

    if not result:
        console.print("[dim]No catch-up scheduled; nothing to prepare.[/dim]")
    for topic in result:
        console.print(f"  [dim]-[/dim] {topic}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
