"""Config subcommand group for configuration inspection."""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel

from scriptlib.config import get_config_file_path, get_settings
from scriptlib.errors import InvalidConfigError

app = typer.Typer(help="Configuration management")
console = Console()


@app.command()
def show(
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON instead of formatted panel"),
):
    """Show the effective configuration."""
    try:
        settings = get_settings(_force_reload=True)
    except ValidationError as e:
        console.print("[red]Configuration validation failed:[/red]")
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            console.print(f"  [yellow]{loc}:[/yellow] {error['msg']}")
        raise typer.Exit(code=1)
    except InvalidConfigError as e:
        console.print(f"[red]Configuration file could not be loaded:[/red] {e}")
        raise typer.Exit(code=1)

    data = settings.model_dump_json(indent=2)
    if json_output:
        typer.echo(data)
    else:
        panel = Panel(JSON(data), title=f"Configuration: {get_config_file_path()}", border_style="cyan")
        console.print(panel)


@app.command()
def path():
    """Print the default config file location."""
    typer.echo(str(get_config_file_path()))
