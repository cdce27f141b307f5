"""Commands for browsing users."""

from pathlib import Path

import typer

from userdeck.cli.common.context import AppContext, build_context
from userdeck.cli.common.exits import (
    die,
    exit_from_exc,
    invalid_draft_exit,
    require_users,
    warn_exit,
)
from userdeck.cli.common.filter_builder import build_query
from userdeck.cli.common.options import (
    BrokenOpt,
    DataDirOpt,
    DescOpt,
    FilterOpt,
    JsonOpt,
    PageOpt,
    PageSizeOpt,
    RefreshOpt,
    SearchOpt,
    SortOpt,
    UseOrOpt,
    VerboseOpt,
)
from userdeck.cli.common.output import out
from userdeck.core.drafts import (
    DraftValidationError,
    UserDraft,
    create_user,
    draft_from_user,
    update_user,
)
from userdeck.core.query import paginate
from userdeck.core.users import FetchError, load_users

app = typer.Typer(
    help="Browse JSONPlaceholder users",
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
    """Initialize users context."""
    ctx.obj = build_context(
        broken=broken, refresh=refresh, data_dir=data_dir, verbose=verbose
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command("list")
def list_users(
    ctx: typer.Context,
    search: str = SearchOpt,
    filter_: list[str] = FilterOpt,
    use_or: bool = UseOrOpt,
    sort: str | None = SortOpt,
    desc: bool = DescOpt,
    page: int = PageOpt,
    page_size: int | None = PageSizeOpt,
    as_json: bool = JsonOpt,
):
    """
    List users with search, column filters and sorting.
    """
    appctx: AppContext = ctx.obj

    try:
        query = build_query(
            filters=filter_, search=search, sort=sort, desc=desc, use_or=use_or
        )
    except ValueError as e:
        die(str(e), code=2)

    with out.status("Loading users..."):
        snapshot = load_users(appctx.adapter)

    require_users(snapshot)

    users = appctx.processor.run(snapshot.users, query)

    current_page = None
    if page_size is not None:
        try:
            current_page = paginate(users, page - 1, page_size)
        except ValueError as e:
            die(str(e), code=2)
        users = current_page.items

    if as_json:
        out.users_json(users)
        return

    if not users:
        warn_exit("No users found", code=0)

    out.users_table(users, favorites=appctx.favorites.all(), title="Users")
    if current_page is not None:
        out.page_footer(current_page)


@app.command()
def show(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="User id"),
    as_json: bool = JsonOpt,
):
    """
    Show all details of one user.
    """
    appctx: AppContext = ctx.obj

    try:
        with out.status(f"Loading user {user_id}..."):
            user = appctx.adapter.fetch_user(user_id)
    except FetchError as exc:
        exit_from_exc(exc, message=f"Error loading user {user_id}: {exc}", code=1)

    if as_json:
        out.json(user.to_payload())
        return
    out.user_details(user, favorite=appctx.favorites.is_favorite(user_id))


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Full name"),
    username: str = typer.Option(..., "--username", help="Username"),
    email: str = typer.Option(..., "--email", help="Email address"),
    phone: str = typer.Option("", "--phone", help="Phone number"),
    website: str = typer.Option("", "--website", help="Website"),
    company: str = typer.Option("", "--company", help="Company name"),
    city: str = typer.Option("", "--city", help="City"),
):
    """
    Validate a new user and show it (the fixture is read-only).
    """
    appctx: AppContext = ctx.obj
    draft = UserDraft(
        name=name,
        username=username,
        email=email,
        phone=phone,
        website=website,
        company_name=company,
        city=city,
    )

    with out.status("Loading users..."):
        snapshot = load_users(appctx.adapter)
    require_users(snapshot)

    try:
        user = create_user(draft, (u.id for u in snapshot.users))
    except DraftValidationError as exc:
        invalid_draft_exit(exc)

    out.success(f"User created locally with id {user.id} (not sent to the API)")
    out.user_details(user)


@app.command()
def update(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="User id"),
    name: str | None = typer.Option(None, "--name", help="Full name"),
    username: str | None = typer.Option(None, "--username", help="Username"),
    email: str | None = typer.Option(None, "--email", help="Email address"),
    phone: str | None = typer.Option(None, "--phone", help="Phone number"),
    website: str | None = typer.Option(None, "--website", help="Website"),
    company: str | None = typer.Option(None, "--company", help="Company name"),
    city: str | None = typer.Option(None, "--city", help="City"),
):
    """
    Validate changes to a user and show the result (the fixture is read-only).
    """
    appctx: AppContext = ctx.obj

    try:
        with out.status(f"Loading user {user_id}..."):
            user = appctx.adapter.fetch_user(user_id)
    except FetchError as exc:
        exit_from_exc(exc, message=f"Error loading user {user_id}: {exc}", code=1)

    current = draft_from_user(user)
    draft = UserDraft(
        name=current.name if name is None else name,
        username=current.username if username is None else username,
        email=current.email if email is None else email,
        phone=current.phone if phone is None else phone,
        website=current.website if website is None else website,
        company_name=current.company_name if company is None else company,
        city=current.city if city is None else city,
    )

    try:
        updated = update_user(user, draft)
    except DraftValidationError as exc:
        invalid_draft_exit(exc)

    out.success(f"User {user_id} updated locally (not sent to the API)")
    out.user_details(updated, favorite=appctx.favorites.is_favorite(user_id))
