import asyncio
import base64
import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from nanobanana.config.logging_config import configure_logging, get_logger
from nanobanana.image.errors import GenerationError
from nanobanana.image.ingest import parse_data_url
from nanobanana.security.secret_helper import ApiKeyMissingError

console = Console()
log = get_logger(__name__)


@click.group()
def cli():
    """nanobanana CLI - Generate images with Google Nano Banana."""
    pass


@cli.command("generate")
@click.argument("prompt", type=str)
@click.option(
    "--image",
    default=None,
    help="Input image as data URL, base64 or http(s) URL. Switches to image-to-image mode.",
)
@click.option("--aspect-ratio", default=None, help="Aspect ratio, e.g. 16:9.")
@click.option(
    "--model-version",
    type=click.Choice(["2", "3"]),
    default="2",
    show_default=True,
    help="Nano Banana model version.",
)
@click.option("--config", "custom_config", default=None, help="Call-time generation config as JSON.")
@click.option(
    "--node-config",
    default="",
    help="Node-level generation config as JSON, applied after --config.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the generated image to this file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable DEBUG logging.")
def generate(
    prompt: str,
    image: Optional[str],
    aspect_ratio: Optional[str],
    model_version: str,
    custom_config: Optional[str],
    node_config: str,
    output: Optional[Path],
    verbose: bool,
):
    """Generate an image from PROMPT."""
    from nanobanana.nodes.nano_banana import GenerationMode, NanoBananaNode
    from nanobanana.workflows.processing_context import ProcessingContext

    if verbose:
        configure_logging(level="DEBUG")
        console.print("[cyan]🐛 Verbose logging enabled (DEBUG level)[/]")

    node = NanoBananaNode(
        mode=GenerationMode.IMAGE_TO_IMAGE if image else GenerationMode.TEXT_TO_IMAGE,
        model_version=model_version,
        custom_generation_config=node_config,
    )
    arguments = {"prompt": prompt}
    if image:
        arguments["image"] = image
    if aspect_ratio:
        arguments["aspectRatio"] = aspect_ratio
    if custom_config:
        arguments["customConfig"] = custom_config

    async def run() -> str:
        tool = await node.init(ProcessingContext())
        return await tool.invoke(arguments)

    try:
        result = asyncio.run(run())
    except (ApiKeyMissingError, GenerationError) as e:
        console.print(f"[red]Error: {e}[/]")
        sys.exit(1)

    part = parse_data_url(result)
    if part is None:
        console.print("[yellow]No image in response, raw response follows:[/]")
        click.echo(result)
        return

    if output is None:
        click.echo(result)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(base64.b64decode(part.data))
    console.print(f"[green]✅ Saved {part.mime_type} image to {output}[/]")


@cli.command("schema")
@click.option(
    "--mode",
    type=click.Choice(["text-to-image", "image-to-image"]),
    default="text-to-image",
    show_default=True,
)
def schema(mode: str):
    """Print the function-calling definition of the tool."""
    from nanobanana.agents.tools.nano_banana_tool import NanoBananaTool
    from nanobanana.image.types import GenerationConfig

    tool = NanoBananaTool(GenerationConfig(api_key=""), mode=mode)  # type: ignore[arg-type]
    click.echo(json.dumps(tool.tool_param(), indent=2))


@cli.command("settings")
def show_settings():
    """Show registered settings and secrets."""
    from nanobanana.config.environment import Environment
    from nanobanana.config.settings import get_secrets_registry, get_settings_registry

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Description", style="yellow")

    for setting in get_settings_registry():
        value = Environment.get(setting.env_var)
        table.add_row(setting.env_var, "" if value is None else str(value), setting.description)
    for secret in get_secrets_registry():
        masked_value = "****" if Environment.get(secret.env_var) else ""
        table.add_row(secret.env_var, masked_value, secret.description)

    console.print(table)


if __name__ == "__main__":
    cli()
