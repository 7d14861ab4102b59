"""
Knowledge administration: CRUD over the authoritative record store with
best-effort synchronization of the vector projection.

Every write lands in the record store first. The projection write follows and
its failure is logged as a warning; the record write is never rolled back.
"""

from typing import List, Optional

from .dao import KnowledgeStore
from .errors import NotFoundError, ProjectionSyncFailure, ValidationError
from .schema import AdminResult, KnowledgeItem
from ..util.logging import logger
from ..vector.knowledge_index import KnowledgeIndex, knowledge_document, knowledge_document_id

_UNSET = object()


def validate_keywords(keywords) -> List[str]:
    if not isinstance(keywords, (list, tuple)) or not keywords:
        raise ValidationError("keywords must be a non-empty list of strings")

    cleaned = []
    for keyword in keywords:
        if not isinstance(keyword, str) or not keyword.strip():
            raise ValidationError("keywords must be a non-empty list of strings")
        cleaned.append(keyword.strip())
    return cleaned


def validate_answer(answer) -> str:
    if not isinstance(answer, str) or not answer.strip():
        raise ValidationError("answer must be a non-empty string")
    return answer


def validate_reference_link(reference_link) -> str:
    if reference_link is None:
        return ""
    if not isinstance(reference_link, str):
        raise ValidationError("referenceLink must be a string")
    return reference_link


class KnowledgeAdminService:
    """List/add/update/remove knowledge items, keeping the projection in step."""

    def __init__(self, store: KnowledgeStore, index: KnowledgeIndex):
        self.store = store
        self.index = index

    def list(self) -> List[KnowledgeItem]:
        return self.store.list()

    def get(self, item_id: str) -> KnowledgeItem:
        item = self.store.get(item_id)
        if item is None:
            raise NotFoundError("knowledge item", item_id)
        return item

    async def _project(self, operation: str, item: KnowledgeItem) -> bool:
        doc_id = knowledge_document_id(item.id)
        try:
            if operation == "delete":
                await self.index.delete(doc_id)
            else:
                text, metadata = knowledge_document(item)
                if operation == "add":
                    await self.index.add(doc_id, text, metadata)
                else:
                    await self.index.update(doc_id, text, metadata)
        except ProjectionSyncFailure as e:
            logger.warning(f"Knowledge item '{item.id}' saved but projection is out of sync: {e}")
            return False
        return True

    async def add(self, keywords, answer, reference_link: Optional[str] = None) -> AdminResult:
        keywords = validate_keywords(keywords)
        answer = validate_answer(answer)
        reference_link = validate_reference_link(reference_link)

        item = self.store.add(keywords, answer, reference_link)
        synced = await self._project("add", item)
        return AdminResult(item=item, projection_synced=synced)

    async def update(self, item_id: str, keywords=_UNSET, answer=_UNSET, reference_link=_UNSET) -> AdminResult:
        """Replace the supplied fields; omitted fields keep their values."""
        if self.store.get(item_id) is None:
            raise NotFoundError("knowledge item", item_id)

        fields = {}
        if keywords is not _UNSET:
            fields["keywords"] = validate_keywords(keywords)
        if answer is not _UNSET:
            fields["answer"] = validate_answer(answer)
        if reference_link is not _UNSET:
            fields["reference_link"] = validate_reference_link(reference_link)

        item = self.store.update(item_id, **fields)
        synced = await self._project("update", item)
        return AdminResult(item=item, projection_synced=synced)

    async def remove(self, item_id: str) -> AdminResult:
        item = self.store.remove(item_id)
        synced = await self._project("delete", item)
        return AdminResult(item=item, projection_synced=synced)
