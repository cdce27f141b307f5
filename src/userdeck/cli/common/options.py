"""Common CLI options for the CLI."""

import typer

BrokenOpt = typer.Option(
    False,
    "--broken",
    help="Point at a non-existent endpoint to see the error path",
)

RefreshOpt = typer.Option(
    False,
    "--refresh",
    help="Ignore the cached users and fetch them again",
)

DataDirOpt = typer.Option(
    None,
    "--data-dir",
    help="Directory holding favorites (default: $USERDECK_DATA_DIR or XDG data dir)",
    file_okay=False,
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log fetches, cache hits and storage writes",
)

SearchOpt = typer.Option(
    "",
    "--search",
    "-s",
    help="Case-insensitive text searched in every field",
)

FilterOpt = typer.Option(
    [],
    "--filter",
    "-f",
    help="Column filter field:operator:value (or field:value for contains). Repeatable.",
    show_default=False,
)

UseOrOpt = typer.Option(
    False,
    "--or",
    help="Use OR instead of AND between column filters",
)

SortOpt = typer.Option(
    None,
    "--sort",
    help="Field to sort by (e.g. name, company.name)",
)

DescOpt = typer.Option(
    False,
    "--desc",
    help="Sort descending",
)

PageOpt = typer.Option(
    1,
    "--page",
    help="Page number, starting at 1 (used with --page-size)",
)

PageSizeOpt = typer.Option(
    None,
    "--page-size",
    help="Number of users per page (default: show all)",
)

JsonOpt = typer.Option(
    False,
    "--json",
    help="Print users as JSON instead of a table",
)

YesOpt = typer.Option(
    False,
    "--yes",
    help="Skip confirmation prompt",
)
