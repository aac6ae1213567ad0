"""Plugin interface.

A plugin can take part in three phases of a Checkup's construction, each
optional and applied in plugin registration order:

1. ``configure(options)`` rewrites construction options before anything is
   built;
2. ``checkers`` are registered before the user supplied checkers;
3. ``created(checkup)`` runs once the instance is fully initialized, usually
   to add interceptors.
"""

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ParamSpec

from ..domain.models import Checker

if TYPE_CHECKING:
    from ..core.checkup import Checkup
    from ..core.options import CheckupOptions

P = ParamSpec("P")


@dataclass
class Plugin:
    """Extension point applied once when a Checkup is constructed."""

    checkers: dict[str, Checker] | None = None
    configure: Callable[["CheckupOptions"], None] | None = None
    created: Callable[["Checkup"], None] | None = None
    name: str | None = None


def define_plugin(factory: Callable[P, Plugin]) -> Callable[P, Plugin]:
    """Mark a plugin factory; unnamed plugins are named after the factory."""

    @functools.wraps(factory)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Plugin:
        plugin = factory(*args, **kwargs)
        if plugin.name is None:
            plugin.name = factory.__name__
        return plugin

    return wrapper
