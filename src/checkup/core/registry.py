"""Named storage of health checkers."""

import threading
from collections.abc import Mapping

from ..domain.exceptions import DuplicateCheckerError
from ..domain.models import Checker
from ..observability.logging import get_logger

logger = get_logger(__name__)


class CheckerRegistry:
    """Insertion-ordered map of checker name to checker.

    Every read returns a point-in-time snapshot, so callers may iterate while
    other code adds or removes checkers.
    """

    def __init__(self) -> None:
        self._checkers: dict[str, Checker] = {}
        self._lock = threading.Lock()

    def add(self, checkers: Mapping[str, Checker]) -> None:
        """Register checkers in mapping order.

        Raises DuplicateCheckerError on the first name already registered.
        Entries of the same batch that precede the duplicate stay registered.
        """
        with self._lock:
            for name, checker in checkers.items():
                if name in self._checkers:
                    raise DuplicateCheckerError(name)
                self._checkers[name] = checker
                logger.debug("Added health checker", checker=name)

    def remove(self, *names_or_checkers: str | Checker) -> bool:
        """Remove checkers by name or by reference.

        A callable that is not registered itself is looked up by its
        ``__name__``, so it removes whichever checker holds that name.
        Returns True only if every requested checker existed and was removed.
        """
        all_removed = True
        with self._lock:
            for item in names_or_checkers:
                name = self._resolve_name(item)
                if name is None or name not in self._checkers:
                    all_removed = False
                    continue
                del self._checkers[name]
                logger.debug("Removed health checker", checker=name)
        return all_removed

    def _resolve_name(self, item: str | Checker) -> str | None:
        if isinstance(item, str):
            return item
        for name, checker in self._checkers.items():
            if checker is item:
                return name
        # Plain functions registered under their own name
        return getattr(item, "__name__", None)

    def names(self) -> tuple[str, ...]:
        """Snapshot of registered names."""
        with self._lock:
            return tuple(self._checkers)

    def checkers(self) -> tuple[Checker, ...]:
        """Snapshot of registered checkers."""
        with self._lock:
            return tuple(self._checkers.values())

    def entries(self) -> tuple[tuple[str, Checker], ...]:
        """Snapshot of (name, checker) pairs."""
        with self._lock:
            return tuple(self._checkers.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._checkers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._checkers
