"""
Deterministic keyword-containment lookup over the knowledge store.
"""

from typing import Optional

from .dao import KnowledgeStore
from .schema import ExactMatch


class ExactMatchResolver:
    """
    Returns the first stored item (insertion order) whose keyword occurs in the
    question. Items added earlier shadow later ones when both match.
    """

    def __init__(self, store: KnowledgeStore):
        self.store = store

    def resolve(self, question: str) -> Optional[ExactMatch]:
        normalized = question.lower()

        for item in self.store.list():
            for keyword in item.keywords:
                needle = keyword.strip().lower()
                if needle and needle in normalized:
                    return ExactMatch(item=item, matched_keyword=keyword)

        return None
