"""
Command-line interface for the asset copy pipeline.
"""

import os
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import PipelineConfig, ENV_VARS, find_config_file
from .entries import AssetEntry, ConfigError, describe_node
from .errors import PipelineError
from .manifest import ManifestLoader, AssetSource
from .pipeline import AssetPipeline, PipelineResult, EntryStatus

# Initialize typer app and rich console
app = typer.Typer(
    name="copy-asset",
    help="Copy and transform assets from a config directory to the destinations declared in the project manifest",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""
[bold]Examples:[/bold]
  [cyan]copy-asset run[/cyan]                                  Process ./pubspec.yaml from ./config
  [cyan]copy-asset run --config-dir assets/config[/cyan]       Use another config directory
  [cyan]copy-asset list --source build[/cyan]                  Show the build asset list

[bold]Environment Variables:[/bold]
  Use [cyan]copy-asset config --env-vars[/cyan] to see all available variables.
    """
)
console = Console()


@app.command()
def run(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", "-d", help="Directory holding the source assets"),
    manifest: Optional[Path] = typer.Option(None, "--manifest", "-m", help="Project manifest path"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Asset list to process: bundle or build"),
    project_dir: Optional[Path] = typer.Option(None, "--project-dir", help="Base directory for relative destinations"),
    strict: bool = typer.Option(False, "--strict", help="Exit with an error when any entry fails"),
    show_summary: bool = typer.Option(True, "--summary/--no-summary", help="Show execution summary")
):
    """Transform and copy assets declared in the manifest."""
    config = _load_config(config_file)
    _apply_cli_overrides(config, config_dir, manifest, source, project_dir)

    console.print(f"[bold blue]Processing assets from {config.config_dir}...[/bold blue]")

    try:
        result = AssetPipeline(config).run_manifest()
    except PipelineError as e:
        console.print(f"[red]Pipeline error:[/red] {e}")
        raise typer.Exit(1)

    if show_summary:
        _display_result(result)

    if result.errors:
        console.print(f"[yellow]Completed with {result.error_count} failed entries[/yellow]")
        if strict:
            raise typer.Exit(1)
    else:
        console.print(f"[green]✓[/green] {result.processed_count} assets processed")


@app.command(name="list")
def list_assets(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    manifest: Optional[Path] = typer.Option(None, "--manifest", "-m", help="Project manifest path"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Asset list to show: bundle or build")
):
    """Show the asset entries declared in the manifest."""
    config = _load_config(config_file)
    _apply_cli_overrides(config, None, manifest, source, None)

    try:
        loader = ManifestLoader(config.manifest_path)
        assets = loader.asset_list(config.asset_source)
    except PipelineError as e:
        console.print(f"[red]Manifest error:[/red] {e}")
        raise typer.Exit(1)

    if not assets:
        console.print("[yellow]No assets found in manifest[/yellow]")
        return

    table = Table(title=f"Assets in {config.manifest_path}")
    table.add_column("#", style="dim", width=3)
    table.add_column("Path", style="cyan")
    table.add_column("Destination", style="green")
    table.add_column("Transformer", style="magenta")
    table.add_column("Variants")

    for index, node in enumerate(assets):
        try:
            entry = AssetEntry.from_config(node)
        except ConfigError as e:
            table.add_row(str(index), describe_node(node), "", "[red]invalid[/red]", str(e))
            continue

        if entry.transformer is None:
            table.add_row(str(index), entry.source_path, entry.destination_path, "[dim]static[/dim]", "")
            continue

        variants = ", ".join(
            f"{v.suffix or '(base)'} {v.describe_size()}" for v in entry.transformer.variants
        )
        table.add_row(str(index), entry.source_path, entry.destination_path,
                      entry.transformer.kind, variants)

    console.print(table)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    validate_config: bool = typer.Option(False, "--validate", help="Validate configuration file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    env_vars: bool = typer.Option(False, "--env-vars", help="Show available environment variables")
):
    """Manage pipeline configuration."""
    if env_vars:
        _display_env_vars()
        return

    config = _load_config(config_file)

    if validate_config:
        errors = config.validate()
        if errors:
            console.print("[red]Configuration validation errors:[/red]")
            for error in errors:
                console.print(f"  [red]✗[/red] {error}")
            raise typer.Exit(1)
        console.print("[green]✓[/green] Configuration is valid")

    if show or not validate_config:
        _display_config(config)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]copy-asset[/bold] version [cyan]{__version__}[/cyan]")


def _load_config(config_file: Optional[Path]) -> PipelineConfig:
    """Load configuration from file or use defaults with environment variable support."""
    config = None

    if config_file:
        if not config_file.exists():
            console.print(f"[red]Configuration file not found:[/red] {config_file}")
            raise typer.Exit(1)
        config = PipelineConfig.from_file(config_file)
        console.print(f"[dim]Using configuration: {config_file}[/dim]")
    else:
        config_path = find_config_file()
        if config_path:
            console.print(f"[dim]Using configuration: {config_path}[/dim]")
            config = PipelineConfig.from_file(config_path)
        else:
            config = PipelineConfig()

    config = PipelineConfig._apply_env_overrides(config)

    env_vars_used = [key for key in os.environ if key in ENV_VARS]
    if env_vars_used:
        console.print(f"[dim]Environment overrides applied: {len(env_vars_used)} variables[/dim]")

    return config


def _apply_cli_overrides(config: PipelineConfig, config_dir: Optional[Path],
                         manifest: Optional[Path], source: Optional[str],
                         project_dir: Optional[Path]) -> None:
    """Command-line options win over file and environment settings."""
    if config_dir is not None:
        config.config_dir = str(config_dir)
    if manifest is not None:
        config.manifest_path = str(manifest)
    if project_dir is not None:
        config.project_dir = str(project_dir)
    if source is not None:
        try:
            config.asset_source = AssetSource(source.lower()).value
        except ValueError:
            console.print(f"[red]Unknown asset source:[/red] {source} (expected bundle or build)")
            raise typer.Exit(2)


def _display_result(result: PipelineResult) -> None:
    """Display pipeline execution summary."""
    console.print("\n[bold]Asset Transformation Summary[/bold]")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Execution time", f"{result.duration:.2f}s")
    table.add_row("Assets processed", str(result.processed_count))
    table.add_row("Static assets skipped", str(result.skipped_count))
    table.add_row("Errors", str(result.error_count))
    table.add_row("Files written", str(len(result.outputs)))
    console.print(table)

    if not result.entries:
        return

    entry_table = Table()
    entry_table.add_column("Entry", style="cyan")
    entry_table.add_column("Status", width=8)
    entry_table.add_column("Detail", style="dim")

    for entry_result in result.entries:
        if entry_result.status is EntryStatus.PROCESSED:
            status = "[green]✓[/green]"
            detail = f"{entry_result.kind}: {len(entry_result.outputs)} file(s)"
        elif entry_result.status is EntryStatus.SKIPPED:
            status = "[dim]-[/dim]"
            detail = "static asset"
        else:
            status = "[red]✗[/red]"
            detail = entry_result.error.message if entry_result.error else ""
        entry_table.add_row(entry_result.entry, status, detail)

    console.print(entry_table)


def _display_config(config: PipelineConfig) -> None:
    """Display configuration in a formatted table."""
    table = Table(title="Copy Asset Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Config Directory", config.config_dir)
    table.add_row("Manifest", config.manifest_path)
    table.add_row("Asset Source", config.asset_source)
    table.add_row("Project Directory", config.project_dir)
    table.add_row("Log Level", config.log_level)
    table.add_row("Resample Method", config.resample_method)

    console.print(table)


def _display_env_vars() -> None:
    """Display available environment variables for configuration."""
    table = Table(title="Copy Asset Environment Variables")
    table.add_column("Environment Variable", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Example", style="green")

    for var_name, (_, description, example) in ENV_VARS.items():
        table.add_row(var_name, description, example)

    console.print(table)
    console.print("\n[dim]Set these environment variables to override configuration file settings.[/dim]")


if __name__ == "__main__":
    app()
