"""CLI interface for the pitch document composer."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
import typer

# Load environment variables from .env file
load_dotenv()
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from pitchkit.composition import DocumentAssembler, FinancialProjectionCalculator, SectionComposer
from pitchkit.composition.industry import lookup_defaults
from pitchkit.composition.seller_context import SellerContextResolver
from pitchkit.composition.skeletons import get_section_name
from pitchkit.models import (
    CompositionSettings,
    DocumentLevel,
    PitchInputs,
    ReviewAnalytics,
    SectionFlags,
)

# Initialize CLI app
app = typer.Typer(
    name="pitchkit",
    help="Compose outreach sequences, one-pagers and slide decks for local businesses",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Set up logging with rich formatting."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_json(path: Path, what: str) -> Any:
    """Read a JSON file, exiting with an error message if it is missing or malformed."""
    if not path.exists():
        console.print(f"[red]{what} file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Failed to load {what.lower()} file: {e}[/red]")
        raise typer.Exit(1)


def _load_inputs(path: Path) -> PitchInputs:
    data = _load_json(path, "Input")
    try:
        return PitchInputs.model_validate(data)
    except ValueError as e:
        console.print(f"[red]Invalid business record: {e}[/red]")
        raise typer.Exit(1)


def _parse_level(level: str) -> DocumentLevel:
    try:
        return DocumentLevel.parse(level)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def compose(
    input_file: str = typer.Argument(..., help="Business record (JSON)"),
    level: str = typer.Option(
        "deck", "--level", "-l", help="Document level: outreach, one_pager, deck (or 1, 2, 3)"
    ),
    seller_profile: Optional[str] = typer.Option(
        None, "--seller-profile", "-s", help="Seller profile (JSON)"
    ),
    review_analytics: Optional[str] = typer.Option(
        None, "--review-analytics", "-r", help="Review analytics with pitch metrics (JSON)"
    ),
    icp_id: Optional[str] = typer.Option(
        None, "--icp-id", help="Ideal customer profile to target from the seller profile"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file path for the composed document (JSON)"
    ),
    pptx: Optional[str] = typer.Option(
        None, "--pptx", help="Also export the document as a PowerPoint file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    Compose a pitch document for one business.

    Example:
        pitchkit compose business.json --level deck --seller-profile seller.json -o deck.json
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    selected_level = _parse_level(level)
    inputs = _load_inputs(Path(input_file))

    profile = _load_json(Path(seller_profile), "Seller profile") if seller_profile else None

    analytics = None
    if review_analytics:
        try:
            analytics = ReviewAnalytics.model_validate(
                _load_json(Path(review_analytics), "Review analytics")
            )
        except ValueError as e:
            console.print(f"[red]Invalid review analytics: {e}[/red]")
            raise typer.Exit(1)

    console.print(
        Panel.fit(
            f"[bold blue]Composing {selected_level.value.replace('_', ' ')}[/bold blue]\n"
            f"Business: {inputs.display_name}",
            title="Pitch Composer",
        )
    )

    assembler = DocumentAssembler(settings=CompositionSettings.from_env())
    try:
        document = assembler.assemble(
            selected_level,
            inputs,
            seller_profile=profile,
            review_analytics=analytics,
            icp_id=icp_id,
        )
    except Exception as e:
        console.print(f"[red]Composition failed: {e}[/red]")
        if verbose:
            logger.exception("Composition error")
        raise typer.Exit(1)

    table = Table(title=f"Sections ({document.total})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Section", style="white")
    table.add_column("Title", style="green", max_width=50)
    for section in document.sections:
        table.add_row(section.label, section.id.value, str(section.data.get("title", "")))
    console.print(table)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(document.model_dump(mode="json"), f, default=str, indent=2)
        console.print(f"\n[green]Document saved to: {output_path}[/green]")

    if pptx:
        from pitchkit.export import PPTXExporter

        result = PPTXExporter().export(document, Path(pptx))
        if not result.success:
            for error in result.errors:
                console.print(f"[red]{error}[/red]")
            raise typer.Exit(1)
        for warning in result.warnings:
            console.print(f"[yellow]{warning}[/yellow]")
        console.print(
            f"[green]PowerPoint saved to: {result.output_path}[/green] "
            f"({result.page_count} slides, {result.file_size_bytes:,} bytes)"
        )


@app.command()
def plan(
    level: str = typer.Option(
        "deck", "--level", "-l", help="Document level: outreach, one_pager, deck (or 1, 2, 3)"
    ),
    trigger: bool = typer.Option(False, "--trigger/--no-trigger", help="A trigger event is available"),
    reviews: bool = typer.Option(False, "--reviews/--no-reviews", help="Review analytics are available"),
    market: bool = typer.Option(False, "--market/--no-market", help="Market data is available"),
):
    """
    Show the numbered section plan for a level and set of data flags.

    Example:
        pitchkit plan --level deck --trigger --market
    """
    selected_level = _parse_level(level)
    flags = SectionFlags(
        has_trigger_event=trigger,
        has_review_analytics=reviews,
        has_market_data=market,
    )

    sections = SectionComposer().plan(selected_level, flags)

    table = Table(title=f"{selected_level.value.replace('_', ' ').title()} plan")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Section", style="white")
    table.add_column("Name", style="green")
    for section in sections:
        table.add_row(section.label, section.id.value, get_section_name(selected_level, section.id))
    console.print(table)


@app.command()
def project(
    input_file: str = typer.Argument(..., help="Business record (JSON)"),
    seller_profile: Optional[str] = typer.Option(
        None, "--seller-profile", "-s", help="Seller profile (JSON), used for the monthly price"
    ),
):
    """
    Show the six-month revenue and ROI projection for a business.

    Example:
        pitchkit project business.json
    """
    inputs = _load_inputs(Path(input_file))
    settings = CompositionSettings.from_env()

    monthly_cost = None
    if seller_profile:
        profile = _load_json(Path(seller_profile), "Seller profile")
        monthly_cost = SellerContextResolver(settings.platform).resolve(None, profile).monthly_price

    industry_defaults = lookup_defaults(inputs.industry, inputs.sub_industry, inputs.naics_code)
    projection = FinancialProjectionCalculator(settings.projection).compute(
        inputs, industry_defaults, monthly_cost
    )

    lines = [
        f"[bold]{inputs.display_name}[/bold] ({projection.industry})",
        "",
        f"Monthly customers: {projection.monthly_customers:,.0f}",
        f"Average ticket: ${projection.avg_ticket:,.2f}",
        f"Repeat rate: {projection.repeat_rate:g}%",
        f"Growth rate: {projection.growth_rate:g}%",
        "",
        f"New customers / month: {projection.new_customers:,}",
        f"Monthly incremental revenue: ${projection.monthly_incremental_revenue:,.0f}",
        f"Six-month revenue: ${projection.six_month_revenue:,.0f}",
        f"Six-month cost: ${projection.six_month_cost:,.0f}",
        f"[bold green]ROI: {projection.roi:,}%[/bold green]",
    ]
    if projection.defaulted_fields:
        lines.append(f"\n[yellow]Defaults used for: {', '.join(projection.defaulted_fields)}[/yellow]")

    console.print(Panel("\n".join(lines), title="Projected ROI", expand=False))


if __name__ == "__main__":
    app()
