"""CLI interface for KPHP Inspector.

This module provides the Typer-based command-line interface:

    kphp-inspector inspect --root /path/to/generated/cpp/code
    kphp-inspector inspect --root ... --f "\\VK\\Post::analyze"
    kphp-inspector diff --master ... --cmp ... --diff ...

Without a one-shot query, `inspect` starts the interactive console.
"""

from typing import Annotated, Optional
import logging

import typer

from kphp_inspector.config.parser import ConfigurationError, load_config, load_diff_config
from kphp_inspector.diff.comparator import TreeComparator
from kphp_inspector.models.search_query import SearchQuery
from kphp_inspector.tools.cpp_parser import ExtractionError, extract_class, extract_function
from kphp_inspector.tools.locator import CandidateLocator
from kphp_inspector.ui.console import console, print_error, print_not_found, show_version
from kphp_inspector.ui.interactive import InspectorSession
from kphp_inspector.ui.printer import print_class_info, print_function_info, print_function_source
from kphp_inspector.utils.logging import setup_logging


logger = logging.getLogger(__name__)


app = typer.Typer(
    name="kphp-inspector",
    help="Query and examine KPHP output: C++ sources generated from PHP",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, is_eager=True,
                     help="Show version and exit"),
    ] = None,
) -> None:
    """KPHP Inspector."""


def _print_single_function(locator: CandidateLocator, q: str, show_source: bool,
                           header_extension: str) -> None:
    candidates = locator.find_function_candidates(SearchQuery(raw=q))
    if not candidates:
        print_not_found(f"No function found for query '{q}'")
    elif len(candidates) > 1:
        console.print(f"Multiple files found for query '{q}'")
    else:
        artifact = extract_function(candidates[0], header_extension)
        if show_source:
            print_function_source(artifact)
        else:
            print_function_info(artifact)


def _print_single_class(locator: CandidateLocator, q: str) -> None:
    candidates = locator.find_class_candidates(SearchQuery(raw=q))
    if not candidates:
        print_not_found(f"No class found for query '{q}'")
    elif len(candidates) > 1:
        console.print(f"Multiple files found for query '{q}'")
    else:
        print_class_info(extract_class(candidates[0]))


@app.command()
def inspect(
    root: Annotated[
        Optional[str],
        typer.Option("--root", help="Full path to codegenerated C++ sources"),
    ] = None,
    function_info: Annotated[
        Optional[str],
        typer.Option("--f", "-f", help="Print info about a function and exit"),
    ] = None,
    function_src: Annotated[
        Optional[str],
        typer.Option("--src", help="Print C++ source of a function and exit"),
    ] = None,
    class_info: Annotated[
        Optional[str],
        typer.Option("--cl", "--class", help="Print info about a class and exit"),
    ] = None,
    config_file: Annotated[
        Optional[str],
        typer.Option("--config", help="YAML configuration file"),
    ] = None,
    debug: Annotated[
        Optional[bool],
        typer.Option("--debug/--no-debug", help="Enable debug logging"),
    ] = None,
) -> None:
    """Show info about generated functions and classes.

    Without --f, --src or --cl an interactive console is started.
    """
    setup_logging(bool(debug))
    try:
        result = load_config(config_file, {'root': root, 'debug': debug})
        config = result.config
        setup_logging(config.debug)

        locator = CandidateLocator(config)
        if function_info or function_src:
            _print_single_function(locator, function_info or function_src, bool(function_src),
                                   config.header_extension)
            return
        if class_info:
            _print_single_class(locator, class_info)
            return

        InspectorSession(config, locator=locator).run()

    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1) from None
    except ExtractionError as e:
        logger.warning(f"Extraction failed: {e}")
        print_error(str(e))
        raise typer.Exit(1) from None


@app.command()
def diff(
    master: Annotated[
        Optional[str],
        typer.Option("--master", help="Output of the stable compiler"),
    ] = None,
    cmp: Annotated[
        Optional[str],
        typer.Option("--cmp", help="Output of the modified compiler"),
    ] = None,
    diff_dir: Annotated[
        Optional[str],
        typer.Option("--diff", help="Folder to write diffs to"),
    ] = None,
    skip_comments: Annotated[
        bool,
        typer.Option("--skip-comments", help="Do not write diffs for comment-only differences"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Compare two KPHP outputs and write a diff for every changed file."""
    setup_logging(debug)
    try:
        config = load_diff_config(master, cmp, diff_dir, skip_comments)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1) from None

    console.print()
    console.print("Start comparing kphp outputs:")
    console.print(f"{config.master_root}  -vs-  {config.cmp_root}")
    console.print()

    comparator = TreeComparator(config)
    comparator.print_summary(comparator.run())


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
