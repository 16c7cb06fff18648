"""
Recipient selection for a broadcast.
"""

from typing import Iterable, List, Sequence

from core.errors import InvalidArgumentError
from core.matching.engine import default_selection
from core.matching.models import MatchResult


class RecipientSelection:
    """
    The set of matched buyers a broadcast will go to.

    Starts from the default selection (score at or above the auto-select
    threshold). Buyers are keyed by id, so every result needs a distinct,
    non-blank id. Owned by a single caller; not shared between requests.
    """

    def __init__(self, results: Sequence[MatchResult]):
        self._results = list(results)
        self._known_ids = set()
        for result in self._results:
            buyer_id = result.buyer.id
            if not buyer_id:
                raise InvalidArgumentError("Every matched investor needs an id")
            if buyer_id in self._known_ids:
                raise InvalidArgumentError(f"Duplicate investor id {buyer_id!r} among the matches")
            self._known_ids.add(buyer_id)
        self._selected = set(default_selection(self._results))

    @property
    def selected_ids(self) -> List[str]:
        """Selected buyer ids, in ranking order."""
        return [r.buyer.id for r in self.selected_results()]

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, buyer_id: str) -> bool:
        return buyer_id in self._selected

    def toggle(self, buyer_id: str) -> bool:
        """
        Flip a buyer in or out of the selection.

        Returns:
            True if the buyer is selected afterwards.
        """
        self._require_known(buyer_id)
        if buyer_id in self._selected:
            self._selected.remove(buyer_id)
            return False
        self._selected.add(buyer_id)
        return True

    def replace(self, buyer_ids: Iterable[str]) -> None:
        """Replace the selection with exactly the given buyers."""
        ids = set(buyer_ids)
        for buyer_id in ids:
            self._require_known(buyer_id)
        self._selected = ids

    def select_all(self) -> None:
        self._selected = set(self._known_ids)

    def deselect_all(self) -> None:
        self._selected = set()

    def selected_results(self) -> List[MatchResult]:
        """Selected match results, in ranking order."""
        return [r for r in self._results if r.buyer.id in self._selected]

    def _require_known(self, buyer_id: str) -> None:
        if buyer_id not in self._known_ids:
            raise InvalidArgumentError(f"Investor {buyer_id!r} is not among the matches")
