import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import yaml  # type: ignore
from attrs import evolve
from dotenv import load_dotenv

from epubpages import reader
from epubpages.config import ConfigError, ReaderConfig, load_config
from epubpages.json_utils import json_dumps

try:
    __version__ = version("epubpages")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="EPUBPAGES_LOG_FILE",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    envvar="EPUBPAGES_CONFIG",
    help="JSON or YAML file with reader settings.",
)
@click.version_option(__version__, prog_name="epubpages")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    trace: bool,
    log_file: Optional[str] = None,
    config_path: Optional[str] = None,
) -> None:
    """Configure logging, load environment variables and settings.

    Args:
        ctx: Click context object.
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
        config_path: Optional path to a configuration file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    # Store the settings for the subcommands.
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _book_options(func):  # type: ignore[no-untyped-def]
    """Attach the options shared by commands that load a book."""

    func = click.option(
        "--bundle",
        type=click.Path(exists=True, file_okay=False, dir_okay=True),
        default=None,
        help="Directory holding the book (default: configured bundle).",
    )(func)
    func = click.option(
        "--ext",
        default="epub",
        show_default=True,
        help="File extension of the book.",
    )(func)
    return click.argument("name")(func)


def _load_book(
    ctx: click.Context,
    name: str,
    ext: str,
    bundle: Optional[str],
    budget: Optional[int] = None,
) -> reader.Book:
    """Load a book with the configured settings.

    Args:
        ctx: Click context holding the configuration.
        name: Base name of the book resource.
        ext: File extension of the book resource.
        bundle: Optional directory overriding the configured bundle.
        budget: Optional page budget overriding the configured one.

    Returns:
        The loaded book.

    Throws:
        click.ClickException: If the book cannot be loaded.
    """

    config: ReaderConfig = ctx.obj["config"]
    if budget is not None:
        config = evolve(config, page_budget=budget)

    try:
        return reader.load_book(
            name,
            ext,
            bundle_dir=Path(bundle) if bundle else None,
            config=config,
        )
    except reader.EpubReaderError as exc:
        raise click.ClickException(f"EPUB parsing failed: {exc}") from exc


@cli.command()
@_book_options
@click.pass_context
def chapters(
    ctx: click.Context,
    name: str,
    ext: str = "epub",
    bundle: Optional[str] = None,
) -> None:
    """List the readable chapters of a book."""

    book = _load_book(ctx, name, ext, bundle)
    for chapter in book.chapters:
        click.echo(
            f"{chapter.id:3d}. {chapter.title}  ({len(chapter.body)} chars)"
        )


@cli.command("paginate")
@_book_options
@click.option(
    "--budget",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum characters per page (default: configured budget).",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=True),
    default=None,
    help="Write output to FILE or DIRECTORY instead of the console.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format.",
)
@click.pass_context
def paginate_command(
    ctx: click.Context,
    name: str,
    ext: str = "epub",
    bundle: Optional[str] = None,
    budget: Optional[int] = None,
    output_path: Optional[str] = None,
    output_format: str = "json",
) -> None:
    """Write the chapters and pages of a book as structured data.

    Args:
        ctx: Click context object.
        name: Base name of the book resource.
        ext: File extension of the book resource.
        bundle: Optional directory holding the book.
        budget: Optional page budget overriding the configured one.
        output_path: Optional file or directory path for the data. If a
            directory is provided, the file name is generated from ``name``.
        output_format: Format of the written data.
    """

    book = _load_book(ctx, name, ext, bundle, budget)
    data = book.to_dict()

    if output_format == "json":
        content = json_dumps(data, indent=True)
    else:
        content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)

    if not output_path:
        click.echo(content)
        return

    # When the user passes a directory, name the file after the book.
    final_path = Path(output_path)
    if final_path.is_dir():
        final_path = final_path / f"{name}.{output_format}"
    final_path.write_text(content, encoding="utf-8")
    logging.info(f"Wrote {len(book.pages)} pages to {final_path}")


@cli.command()
@_book_options
@click.argument("page_number", metavar="PAGE", type=int)
@click.option(
    "--budget",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum characters per page (default: configured budget).",
)
@click.pass_context
def show(
    ctx: click.Context,
    name: str,
    page_number: int,
    ext: str = "epub",
    bundle: Optional[str] = None,
    budget: Optional[int] = None,
) -> None:
    """Print one page of a book with its reading progress."""

    book = _load_book(ctx, name, ext, bundle, budget)
    total = len(book.pages)
    if not 1 <= page_number <= total:
        raise click.BadParameter(
            f"must be between 1 and {total}", param_hint="PAGE"
        )

    page = book.pages[page_number - 1]
    click.echo(page.chapter_title)
    click.echo()
    click.echo(page.body)
    click.echo()
    click.echo(f"第 {page_number} / {total} 頁")
