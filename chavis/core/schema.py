"""
Domain records shared by the stores, resolvers and the API layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class KnowledgeItem:
    id: str
    keywords: List[str]
    answer: str
    reference_link: str = ""


@dataclass
class UnansweredQuestion:
    id: str
    question: str
    created_at: datetime


@dataclass
class RetrievedDocument:
    """One vector-index hit, in provider order."""
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ExactMatch:
    item: KnowledgeItem
    matched_keyword: str

    @property
    def answer(self) -> str:
        return self.item.answer

    @property
    def reference_link(self) -> str:
        return self.item.reference_link


@dataclass
class RagResult:
    sources: List[RetrievedDocument]
    answer: str
    exhausted: bool
    retrieval_degraded: bool = False


@dataclass
class AdminResult:
    """Outcome of an administration write."""
    item: KnowledgeItem
    projection_synced: bool


@dataclass
class CascadeResponse:
    answer: str
    type: str  # exact_match|rag|no_match
    sources: List[RetrievedDocument] = field(default_factory=list)
    matched_keyword: Optional[str] = None
    reference_link: Optional[str] = None
