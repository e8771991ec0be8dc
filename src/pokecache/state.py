from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pokecache.cache import LookupCache
    from pokecache.commands import PokeCommandHandler
    from pokecache.config import Settings


@dataclass
class AppState:
    """Everything the console runner wires together at startup.

    Built once and passed down explicitly; there is no module-level cache.
    """

    settings: Settings
    cache: LookupCache
    handler: PokeCommandHandler
