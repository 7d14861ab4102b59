"""
Request and response models for the HTTP layer.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from typing import Any, Dict, List, Optional
from datetime import datetime

from ..core.schema import CascadeResponse, KnowledgeItem, UnansweredQuestion


class ChatRequest(BaseModel):
    question: StrictStr


class SourceDocument(BaseModel):
    text: str
    metadata: Dict[str, Any] = {}


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: str
    type: str  # exact_match|rag|no_match
    sources: List[SourceDocument] = []
    matched_keyword: Optional[str] = Field(default=None, alias="matchedKeyword")
    reference_link: Optional[str] = Field(default=None, alias="referenceLink")

    @classmethod
    def from_cascade(cls, response: CascadeResponse) -> "ChatResponse":
        return cls(
            answer=response.answer,
            type=response.type,
            sources=[SourceDocument(text=s.text, metadata=s.metadata) for s in response.sources],
            matched_keyword=response.matched_keyword,
            reference_link=response.reference_link,
        )


class KnowledgeCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    keywords: List[StrictStr]
    answer: StrictStr
    reference_link: Optional[StrictStr] = Field(default=None, alias="referenceLink")


class KnowledgeUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are changed."""
    model_config = ConfigDict(populate_by_name=True)

    keywords: Optional[List[StrictStr]] = None
    answer: Optional[StrictStr] = None
    reference_link: Optional[StrictStr] = Field(default=None, alias="referenceLink")

    def supplied_fields(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class KnowledgeItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    keywords: List[str]
    answer: str
    reference_link: str = Field(default="", alias="referenceLink")
    warning: Optional[str] = None

    @classmethod
    def from_item(cls, item: KnowledgeItem, warning: str = None) -> "KnowledgeItemResponse":
        return cls(
            id=item.id,
            keywords=item.keywords,
            answer=item.answer,
            reference_link=item.reference_link,
            warning=warning,
        )


class UnansweredResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_entry(cls, entry: UnansweredQuestion) -> "UnansweredResponse":
        return cls(id=entry.id, question=entry.question, created_at=entry.created_at)


class HealthResponse(BaseModel):
    status: str
    version: str
    db_health: bool
    knowledge_count: int
    unanswered_count: int
    vector_documents: int
    generator_available: bool


class ReindexResponse(BaseModel):
    total_items: int
    indexed: int
    failed: List[str]


class SyncStatusResponse(BaseModel):
    in_sync: bool
    missing: List[str]
    orphaned: List[str]
