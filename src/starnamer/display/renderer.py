"""Rich-based display renderer."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.loader import LoadState
from starnamer.astronomy.models import CatalogRecord
from starnamer.display.formatters import (
    format_confidence,
    format_distance,
    format_load_state,
    format_magnitude,
    format_source,
    format_swatch,
)
from starnamer.suggestions.emotions import Emotion, display_name
from starnamer.suggestions.models import EmotionSuggestion


class DisplayRenderer:
    """Renders catalog and suggestion data to the terminal using Rich."""

    def __init__(self, console: Console | None = None):
        """Initialize renderer.

        Args:
            console: Rich console (creates one if not provided)
        """
        self.console = console or Console()

    def render_suggestions(
        self, emotion_key: str, suggestions: list[EmotionSuggestion]
    ) -> None:
        """Render a batch of suggestions.

        Args:
            emotion_key: Emotion the batch was resolved for
            suggestions: Suggestions in rank order
        """
        table = Table(title=f"Stars for {display_name(emotion_key)}")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Star", style="bold")
        table.add_column("Coordinates")
        table.add_column("Mag", justify="right")
        table.add_column("Source")
        table.add_column("Confidence", justify="right")

        for rank, suggestion in enumerate(suggestions, start=1):
            record = suggestion.catalog_ref
            table.add_row(
                str(rank),
                f"{format_swatch(record.visual.color)} {suggestion.display_name}",
                record.coordinates,
                format_magnitude(record.magnitude),
                format_source(suggestion.source),
                format_confidence(suggestion.confidence),
            )

        self.console.print(table)
        self.console.print()

        for rank, suggestion in enumerate(suggestions, start=1):
            self.console.print(f"[dim]{rank}.[/dim] {suggestion.description}")

    def render_stars(self, title: str, records: list[CatalogRecord]) -> None:
        """Render a list of catalog records.

        Args:
            title: Table title
            records: Records to show
        """
        table = Table(title=title)
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Coordinates")
        table.add_column("Mag", justify="right")
        table.add_column("Distance", justify="right")
        table.add_column("Spectral")

        for record in records:
            table.add_row(
                str(record.id),
                record.display_name,
                record.coordinates,
                format_magnitude(record.magnitude),
                format_distance(record.distance),
                record.spectral_class or "-",
            )

        self.console.print(table)

    def render_star_detail(self, record: CatalogRecord) -> None:
        """Render a single catalog record.

        Args:
            record: Record to show
        """
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="dim")
        table.add_column("Value")

        visual = record.visual
        table.add_row("Catalog ID", str(record.id))
        table.add_row("Coordinates", record.coordinates)
        table.add_row("Magnitude", format_magnitude(record.magnitude))
        table.add_row("Absolute magnitude", format_magnitude(record.absolute_magnitude))
        table.add_row("Distance", format_distance(record.distance))
        table.add_row("Spectral class", record.spectral_class or "-")
        table.add_row("Constellation", record.constellation or "-")
        table.add_row("Variable", "yes" if record.is_variable else "no")
        table.add_row("Color", f"{format_swatch(visual.color)} {visual.color}")

        self.console.print(Panel(table, title=f"[bold]{record.display_name}[/bold]"))

    def render_catalog_info(
        self,
        state: LoadState,
        index: CatalogIndex | None,
        malformed_rows: int,
        source: str,
        error: str | None = None,
    ) -> None:
        """Render catalog status.

        Args:
            state: Loader state
            index: Loaded index, if any
            malformed_rows: Rows skipped during parsing
            source: Catalog locator
            error: Load error message, if any
        """
        table = Table(title="Star Catalog", show_header=False, box=None)
        table.add_column("Label", style="dim")
        table.add_column("Value")

        table.add_row("Source", source)
        table.add_row("State", format_load_state(state))
        if index is not None:
            named = index.get_named_stars()
            table.add_row("Stars", f"{index.total_count():,}")
            table.add_row("Named stars", f"{index.named_count():,}")
            table.add_row("Variable stars", f"{len(index.get_variable_stars()):,}")
            if named:
                table.add_row("Brightest named", named[0].display_name)
        table.add_row("Malformed rows", f"{malformed_rows:,}")
        if error:
            table.add_row("Error", f"[red]{error}[/red]")

        self.console.print(table)

    def render_cache_stats(self, stats: dict) -> None:
        """Render proposal cache statistics."""
        table = Table(title="Proposal Cache", show_header=False, box=None)
        table.add_column("Label", style="dim")
        table.add_column("Value")

        table.add_row("Database", stats["db_path"])
        table.add_row("Entries", str(stats["total_entries"]))
        table.add_row("Emotions", str(stats["emotions"]))
        table.add_row("Oldest", stats["oldest_entry"] or "-")
        table.add_row("Newest", stats["newest_entry"] or "-")

        self.console.print(table)

    def render_emotions(self, emotions: tuple[Emotion, ...]) -> None:
        """Render the emotion categories."""
        table = Table(title="Emotion Categories")
        table.add_column("Key", style="cyan")
        table.add_column("Name")
        table.add_column("Description", style="dim")

        for emotion in emotions:
            table.add_row(
                emotion.key,
                f"{format_swatch(emotion.color)} {emotion.name}",
                emotion.description,
            )

        self.console.print(table)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[red]✗[/red] {message}")
