"""Application context management for the CLI."""

from dataclasses import dataclass, field
from pathlib import Path

from userdeck.cli.common.output import setup_logging
from userdeck.core.adapters.jsonplaceholder import JsonPlaceholderAdapter
from userdeck.core.favorites import FavoritesManager
from userdeck.core.query import QueryProcessor
from userdeck.core.storage import FileStorage
from userdeck.core.users import UsersAdapter


@dataclass
class AppContext:
    """Application context holding the users adapter and favorites state."""

    adapter: UsersAdapter
    favorites: FavoritesManager
    processor: QueryProcessor = field(default_factory=QueryProcessor)


def build_context(
    *,
    broken: bool = False,
    refresh: bool = False,
    data_dir: Path | None = None,
    verbose: bool = False,
) -> AppContext:
    """Build and return the application context.

    Args:
        broken: Point the adapter at a non-existent endpoint.
        refresh: Bypass the users cache on read.
        data_dir: Directory for durable favorites; default location if None.
        verbose: Enable debug logging.

    Returns:
        AppContext: Context with configured adapter and favorites manager.
    """
    setup_logging(verbose)
    adapter = JsonPlaceholderAdapter(broken=broken, force_refresh=refresh)
    favorites = FavoritesManager(FileStorage(data_dir))
    return AppContext(adapter=adapter, favorites=favorites)
