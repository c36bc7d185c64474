"""CLI entry point for mdseq."""

import asyncio
from pathlib import Path
from typing import Optional

import click

from md_outline import convert_to_outline, parse_outline, tree_to_markdown
from mdseq.logseq.graph import GraphPaths
from mdseq.models.config import DEFAULT_CONFIG_PATH, Config, ConversionConfig
from mdseq.services.conversion import ConversionService
from mdseq.services.messaging import ConsoleNotifier
from mdseq.services.presenter import ConsolePresenter
from mdseq.services.store import GraphDocumentStore
from mdseq.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration, by default from ~/.config/mdseq/config.yaml.

    Args:
        config_path: Explicit configuration file

    Returns:
        Validated Config instance

    Raises:
        click.ClickException: If config is missing or validation fails
    """
    path = config_path or DEFAULT_CONFIG_PATH

    try:
        config = Config.load(path)
        logger.info("config_loaded", path=str(path))
        return config
    except FileNotFoundError as e:
        logger.error("config_not_found", path=str(path))
        raise click.ClickException(str(e))
    except Exception as e:
        logger.error("config_validation_error", error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


def build_service(
    ctx: click.Context, page: Optional[str], raw: bool = False
) -> ConversionService:
    """
    Wire the graph store, console notifier and presenter for a page command.

    --graph on the command line takes precedence over the configuration file.

    Args:
        ctx: Click context holding the global options
        page: Page to convert (falls back to logseq.default_page)
        raw: Print results as plain text instead of panels

    Returns:
        ConversionService for the selected page
    """
    graph_override = ctx.obj.get("graph_path")
    if graph_override is not None:
        graph_path = graph_override
        default_page = None
        conversion = ConversionConfig()
    else:
        config = load_config(ctx.obj.get("config_path"))
        graph_path = Path(config.logseq.graph_path).expanduser()
        default_page = config.logseq.default_page
        conversion = config.conversion

    try:
        graph_paths = GraphPaths(graph_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    store = GraphDocumentStore(graph_paths, current_page=page or default_page)
    logger.info("store_initialized", graph_path=str(graph_path), page=store.current_page)

    return ConversionService(
        store=store,
        notifier=ConsoleNotifier(),
        presenter=ConsolePresenter(raw=raw),
        max_depth=conversion.max_depth,
    )


@click.group()
@click.version_option(version="0.1.0", prog_name="mdseq")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (default: ~/.config/mdseq/config.yaml)",
)
@click.option(
    "--graph",
    "graph_path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Logseq graph directory (bypasses the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], graph_path: Optional[Path]):
    """mdseq: Convert Logseq pages between Markdown and indented outline form."""
    configure_logging()

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["graph_path"] = graph_path


@cli.command("to-outline")
@click.argument("page", required=False)
@click.option("--replace", is_flag=True, help="Overwrite the page with the converted outline")
@click.option("--copy", "copy_result", is_flag=True, help="Copy the outline to the clipboard")
@click.option("--raw", is_flag=True, help="Print plain outline text instead of a panel")
@click.pass_context
def to_outline(ctx: click.Context, page: Optional[str], replace: bool, copy_result: bool, raw: bool):
    """
    Convert a page's Markdown text to indented outline form.

    Examples:
        mdseq to-outline "Meeting Notes"
        mdseq to-outline "Meeting Notes" --replace
        mdseq --graph ~/logseq to-outline Inbox --raw > outline.md
    """
    logger.info("to_outline_command_started", page=page, replace=replace)
    service = build_service(ctx, page, raw=raw)

    async def run() -> bool:
        converted = await service.process_current_page()
        if converted is None:
            return False
        if copy_result and not service.copy_result(converted):
            return False
        if replace:
            return await service.replace_current_page(converted)
        return True

    if not asyncio.run(run()):
        ctx.exit(1)

    logger.info("to_outline_command_completed", page=page)


@cli.command("to-markdown")
@click.argument("page", required=False)
@click.option("--copy", "copy_result", is_flag=True, help="Copy the Markdown to the clipboard")
@click.option("--raw", is_flag=True, help="Print plain Markdown instead of a panel")
@click.pass_context
def to_markdown(ctx: click.Context, page: Optional[str], copy_result: bool, raw: bool):
    """
    Flatten a page's block tree to Markdown.

    Examples:
        mdseq to-markdown "Meeting Notes"
        mdseq to-markdown "Meeting Notes" --copy
    """
    logger.info("to_markdown_command_started", page=page)
    service = build_service(ctx, page, raw=raw)

    async def run() -> bool:
        markdown = await service.convert_to_markdown()
        if markdown is None:
            return False
        if copy_result:
            return service.copy_result(markdown)
        return True

    if not asyncio.run(run()):
        ctx.exit(1)

    logger.info("to_markdown_command_completed", page=page)


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--reverse", is_flag=True, help="Read outline text and flatten it to Markdown")
def convert(input_file, reverse: bool):
    """
    Convert a Markdown file (or stdin) to outline form without a graph.

    Examples:
        mdseq convert notes.md > outline.md
        cat outline.md | mdseq convert --reverse
    """
    text = input_file.read()
    logger.info("convert_command_started", reverse=reverse, size=len(text))

    if reverse:
        result = tree_to_markdown(parse_outline(text))
        click.echo(result, nl=False)
    else:
        result = convert_to_outline(text)
        click.echo(result)

    logger.info("convert_command_completed", size=len(result))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
