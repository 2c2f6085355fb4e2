"""CLI entry point for BundleWhy."""

import json
import logging
import re
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from bundlewhy.core.exceptions import BundleWhyError
from bundlewhy.core.graph import (
    BuildOptions,
    MatchMode,
    ModuleGraph,
    build_graph,
    find_chains,
    find_module,
    find_modules,
    resolve_tree,
    shortest_chain,
    trim_tree,
)
from bundlewhy.core.graph.analysis import get_hot_modules, graph_stats
from bundlewhy.core.graph.pathfinding import DEFAULT_MAX_DEPTH
from bundlewhy.core.loader import load_stats
from bundlewhy.render import (
    RenderOptions,
    chains_to_json,
    render_chain,
    render_tree,
    tree_to_json,
)

app = typer.Typer(
    name="bundlewhy",
    help="Explain why modules end up in a webpack bundle.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("bundlewhy")


def setup_logging(verbose: bool) -> None:
    """Route bundlewhy logs through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def compile_pattern(value: str | None) -> re.Pattern[str] | None:
    """Compile a regex option, reporting bad patterns as usage errors."""
    if value is None:
        return None
    try:
        return re.compile(value)
    except re.error as e:
        raise typer.BadParameter(f"invalid regex '{value}': {e}") from e


def load_graph(stats_file: Path, options: BuildOptions) -> ModuleGraph:
    """Load a stats file and build its module graph, exiting on failure."""
    try:
        artifact = load_stats(stats_file)
    except BundleWhyError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    graph = build_graph(artifact, options)
    logger.debug("Built %r", graph)

    chunk_regex = options.chunk_regex()
    if chunk_regex:
        for chunk_name in graph.matched_chunks:
            err_console.print(
                f"Searching in chunk: [bold]{escape(chunk_name)}[/] "
                f"[dim](regex: {escape(chunk_regex.pattern)})[/]"
            )
    return graph


StatsFileArg = Annotated[
    Path,
    typer.Argument(help='Webpack stats JSON file (generate with "webpack --json")'),
]
ChunkOpt = Annotated[
    str | None,
    typer.Option("--chunk", "-c", help="Limit to chunks whose name matches (regex)"),
]
SkipAsyncOpt = Annotated[
    bool, typer.Option("--skip-async", "-a", help="Ignore dynamic import() reasons")
]
MatchOpt = Annotated[
    MatchMode, typer.Option("--match", "-m", help="How module names are matched")
]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")]


@app.command()
def tree(
    stats_file: StatsFileArg,
    module: Annotated[
        str, typer.Argument(help="Substring of the module name, usually a file name")
    ],
    depth: Annotated[int, typer.Option("--depth", "-d", min=0, help="How deep to look")],
    chunk: ChunkOpt = None,
    highlight: Annotated[
        str | None, typer.Option("--highlight", "-h", help="Highlight module names (regex)")
    ] = None,
    highlight_chunk: Annotated[
        str | None, typer.Option("--highlight-chunk", "-H", help="Highlight chunk names (regex)")
    ] = None,
    trim: Annotated[
        str | None, typer.Option("--trim-tree", "-t", help="Trim leaves matching (regex)")
    ] = None,
    skip_modules: Annotated[
        str | None,
        typer.Option("--skip-modules", "-s", help="Skip importers from chunks matching (regex)"),
    ] = None,
    show_request: Annotated[
        bool, typer.Option("--show-request", "-i", help="Show the request of each import")
    ] = False,
    skip_async: SkipAsyncOpt = False,
    match: MatchOpt = MatchMode.FIRST,
    output_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Show the tree of modules that import a module."""
    setup_logging(verbose)
    chunk_regex = compile_pattern(chunk)
    render_options = RenderOptions(
        highlight=compile_pattern(highlight),
        highlight_chunk=compile_pattern(highlight_chunk),
        show_request=show_request,
    )
    trim_regex = compile_pattern(trim)
    skip_regex = compile_pattern(skip_modules)

    graph = load_graph(stats_file, BuildOptions(chunk_pattern=chunk_regex, skip_async=skip_async))

    try:
        root = find_module(module, graph.adjacency, match)
    except BundleWhyError as e:
        err_console.print(escape(str(e)))
        raise typer.Exit(code=1) from e

    result = resolve_tree(graph, root, depth, skip_regex)
    result = trim_tree(result, trim_regex, graph.chunks)

    if output_json:
        print(json.dumps(tree_to_json(root, result)))
        return

    console.print(
        f"Searching for module [bold]{escape(root)}[/] [dim](query: {escape(module)})[/]"
    )
    console.print(render_tree(root, result, graph, render_options))


@app.command("find-chain")
def find_chain(
    stats_file: StatsFileArg,
    source: Annotated[str, typer.Argument(metavar="FROM", help="Module the chain starts at")],
    target: Annotated[str, typer.Argument(metavar="TO", help="Module the chain ends at")],
    depth: Annotated[
        int, typer.Option("--depth", "-d", min=0, help="Maximum importer hops in a chain")
    ] = DEFAULT_MAX_DEPTH,
    chunk: ChunkOpt = None,
    skip_async: SkipAsyncOpt = False,
    fail_on_success: Annotated[
        bool,
        typer.Option("--fail-on-success", help="Exit 1 when a chain exists, 0 when none does"),
    ] = False,
    shortest: Annotated[
        bool, typer.Option("--shortest", help="Only report one shortest chain")
    ] = False,
    match: MatchOpt = MatchMode.FIRST,
    output_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """Find importer chains linking FROM to TO (TO imports ... imports FROM)."""
    setup_logging(verbose)
    chunk_regex = compile_pattern(chunk)
    graph = load_graph(stats_file, BuildOptions(chunk_pattern=chunk_regex, skip_async=skip_async))

    try:
        source_name = find_module(source, graph.chunks, match)
        target_name = find_module(target, graph.chunks, match)
    except BundleWhyError as e:
        err_console.print(escape(str(e)))
        raise typer.Exit(code=1) from e

    if shortest:
        found = shortest_chain(graph, source_name, target_name, depth)
        chains = [found] if found else []
    else:
        chains = find_chains(graph, source_name, target_name, depth)

    if output_json:
        print(json.dumps(chains_to_json(source_name, target_name, chains)))
    elif not chains:
        console.print(
            f"No chain from [bold]{escape(source_name)}[/] to [bold]{escape(target_name)}[/] "
            f"[dim](max depth: {depth})[/]"
        )
    else:
        console.print(
            f"Found {len(chains)} chain(s) from [bold]{escape(source_name)}[/] "
            f"to [bold]{escape(target_name)}[/]"
        )
        for chain in chains:
            console.print(f"  {render_chain(chain, source_name)}")

    found_any = bool(chains)
    if found_any == fail_on_success:
        raise typer.Exit(code=1)


@app.command()
def modules(
    stats_file: StatsFileArg,
    query: Annotated[str, typer.Argument(help="Substring to filter module names")] = "",
    chunk: ChunkOpt = None,
    output_json: JsonOpt = False,
    verbose: VerboseOpt = False,
) -> None:
    """List known modules and their chunks."""
    setup_logging(verbose)
    graph = load_graph(stats_file, BuildOptions(chunk_pattern=compile_pattern(chunk)))
    names = find_modules(query, graph.chunks)

    if output_json:
        result = [
            {
                "name": name,
                "chunk": graph.chunk_of(name),
                "importers": len(graph.get_importers(name)),
            }
            for name in names
        ]
        print(json.dumps(result))
        return

    if not names:
        console.print(f"No matches for '[cyan]{query}[/cyan]'")
        return
    for name in names:
        importer_count = len(graph.get_importers(name))
        console.print(
            f"[cyan]{escape(name)}[/cyan] "
            f"[dim]({graph.chunk_of(name)}, {importer_count} importers)[/]"
        )


@app.command()
def stats(
    stats_file: StatsFileArg,
    chunk: ChunkOpt = None,
    skip_async: SkipAsyncOpt = False,
    output_json: JsonOpt = False,
) -> None:
    """Show module graph statistics."""
    options = BuildOptions(chunk_pattern=compile_pattern(chunk), skip_async=skip_async)
    graph = load_graph(stats_file, options)
    result = graph_stats(graph)

    if output_json:
        print(json.dumps(result))
        return

    console.print(f"Modules: {result['modules']}")
    console.print(f"Imported modules: {result['imported_modules']}")
    console.print(f"Importer edges: {result['edges']}")
    console.print(f"Chunks: {result['chunks']}")
    console.print(f"Entry modules: {result['entry_modules']}")
    if result["skipped_dynamic"]:
        console.print(f"  [dim]Dynamic reasons skipped: {result['skipped_dynamic']}[/]")

    hot = get_hot_modules(graph, top_k=5)
    if hot:
        console.print("[green]Most imported:[/]")
        for name, count in hot:
            console.print(f"  [cyan]{escape(name)}[/] [dim]({count} importers)[/]")


if __name__ == "__main__":
    app()
