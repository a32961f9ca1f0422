"""Search input wiring: keystrokes -> debounce -> store."""

import logging

from .debounce import DebounceScheduler
from .store import EntityStore

logger = logging.getLogger(__name__)


class SearchController:
    """Feeds raw search input into the store through a debouncer.

    The raw value is kept locally for immediate echo (what the input box
    shows) while the store only sees the debounced term.
    """

    def __init__(self, store: EntityStore, delay_ms: int = 300):
        """Initialize the controller.

        Args:
            store: EntityStore receiving the debounced term.
            delay_ms: Quiet period before a term is applied.
        """
        self.store = store
        self.delay_ms = delay_ms
        self.raw_term = store.filters.search_term
        self._debouncer: DebounceScheduler[str] = DebounceScheduler(self._apply)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, raw: str) -> None:
        """Record a keystroke update; the store follows after the delay."""
        self.raw_term = raw
        self._debouncer.schedule(raw, self.delay_ms)

    def clear(self) -> None:
        """Empty the search box and apply the empty term immediately."""
        self.raw_term = ""
        self._debouncer.cancel()
        self.store.set_search_term("")

    def close(self) -> None:
        """Release the debounce timer; pending input is dropped."""
        self._debouncer.close()

    def _apply(self, term: str) -> None:
        logger.debug(f"Applying search term {term!r}")
        self.store.set_search_term(term)
