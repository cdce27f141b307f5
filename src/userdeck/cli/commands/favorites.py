"""Commands for managing favorite users."""

from pathlib import Path

import typer

from userdeck.cli.common.context import AppContext, build_context
from userdeck.cli.common.exits import (
    die,
    ok_exit,
    require_users,
    storage_exit,
    warn_exit,
)
from userdeck.cli.common.filter_builder import build_query
from userdeck.cli.common.options import (
    BrokenOpt,
    DataDirOpt,
    DescOpt,
    FilterOpt,
    JsonOpt,
    RefreshOpt,
    SearchOpt,
    SortOpt,
    UseOrOpt,
    VerboseOpt,
    YesOpt,
)
from userdeck.cli.common.output import out
from userdeck.cli.tui import select_favorites
from userdeck.core.users import load_users

app = typer.Typer(
    help="Mark users as favorite and list them",
    no_args_is_help=False,
    invoke_without_command=True,
)


@app.callback()
def _init(
    ctx: typer.Context,
    broken: bool = BrokenOpt,
    refresh: bool = RefreshOpt,
    data_dir: Path | None = DataDirOpt,
    verbose: bool = VerboseOpt,
):
    """Initialize favorites context."""
    ctx.obj = build_context(
        broken=broken, refresh=refresh, data_dir=data_dir, verbose=verbose
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command("list")
def list_favorites(
    ctx: typer.Context,
    search: str = SearchOpt,
    filter_: list[str] = FilterOpt,
    use_or: bool = UseOrOpt,
    sort: str | None = SortOpt,
    desc: bool = DescOpt,
    as_json: bool = JsonOpt,
):
    """
    List favorite users.
    """
    appctx: AppContext = ctx.obj

    try:
        query = build_query(
            filters=filter_, search=search, sort=sort, desc=desc, use_or=use_or
        )
    except ValueError as e:
        die(str(e), code=2)

    if not appctx.favorites.all():
        warn_exit("No favorite users yet", code=0)

    with out.status("Loading users..."):
        snapshot = load_users(appctx.adapter)

    require_users(snapshot)

    favorites = appctx.favorites.derive(snapshot.users)
    users = appctx.processor.run(favorites, query)

    if as_json:
        out.users_json(users)
        return

    missing = appctx.favorites.missing(snapshot.users)
    if missing:
        out.warn(
            "Favorites not in the current users list: "
            + ", ".join(str(i) for i in missing)
        )

    if not users:
        warn_exit("No favorite users found", code=0)

    out.users_table(users, favorites=appctx.favorites.all(), title="Favorite users")


@app.command()
def toggle(
    ctx: typer.Context,
    user_ids: list[int] = typer.Argument(..., help="User id(s) to toggle"),
):
    """
    Add or remove users from the favorites.
    """
    appctx: AppContext = ctx.obj

    for user_id in user_ids:
        try:
            now_favorite = appctx.favorites.toggle(user_id)
        except OSError as exc:
            storage_exit(exc)
        if now_favorite:
            out.success(f"Added user {user_id} to favorites")
        else:
            out.info(f"Removed user {user_id} from favorites")


@app.command()
def pick(ctx: typer.Context):
    """
    Pick favorite users interactively.
    """
    appctx: AppContext = ctx.obj

    with out.status("Loading users..."):
        snapshot = load_users(appctx.adapter)

    require_users(snapshot)
    if not snapshot.users:
        warn_exit("No users found", code=0)

    current = appctx.favorites.all()
    picked = select_favorites(snapshot.users, current)
    if picked is None:
        ok_exit("Cancelled")

    wanted = {u.id for u in picked}
    listed = {u.id for u in snapshot.users}
    changed = sorted((wanted ^ current) & listed)
    try:
        for user_id in changed:
            appctx.favorites.toggle(user_id)
    except OSError as exc:
        storage_exit(exc)

    if not changed:
        ok_exit("Favorites unchanged")
    out.success(f"Favorites updated ({len(changed)} change(s))")
    out.users_table(
        appctx.favorites.derive(snapshot.users),
        favorites=appctx.favorites.all(),
        title="Favorite users",
    )


@app.command()
def clear(ctx: typer.Context, yes: bool = YesOpt):
    """
    Remove all favorites.
    """
    appctx: AppContext = ctx.obj

    count = len(appctx.favorites.all())
    if not count:
        ok_exit("No favorites to clear")

    if not yes and not out.confirm(f"Remove all {count} favorite(s)?"):
        ok_exit("Cancelled")

    try:
        appctx.favorites.clear()
    except OSError as exc:
        storage_exit(exc)
    out.success(f"Cleared {count} favorite(s)")
