"""
Reconciliation between the knowledge store and its vector projection.

The store wins: drift is measured against it and a rebuild re-derives the
whole projection from it.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .dao import KnowledgeStore
from .errors import ProjectionSyncFailure
from ..util.logging import logger
from ..vector.knowledge_index import (
    KNOWLEDGE_DOC_PREFIX,
    KnowledgeIndex,
    knowledge_document,
    knowledge_document_id,
)


@dataclass
class DriftReport:
    """Document ids missing from, or orphaned in, the projection."""
    missing: List[str] = field(default_factory=list)
    orphaned: List[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return not self.missing and not self.orphaned


@dataclass
class RebuildSummary:
    total_items: int
    indexed: int
    failed: List[str] = field(default_factory=list)


def find_drift(store: KnowledgeStore, index: KnowledgeIndex) -> DriftReport:
    expected = [knowledge_document_id(item.id) for item in store.list()]
    projected = [doc_id for doc_id in index.document_ids() if doc_id.startswith(KNOWLEDGE_DOC_PREFIX)]

    projected_set = set(projected)
    expected_set = set(expected)

    report = DriftReport(
        missing=[doc_id for doc_id in expected if doc_id not in projected_set],
        orphaned=[doc_id for doc_id in projected if doc_id not in expected_set],
    )

    logger.log_operation("reconcile.drift", "in_sync" if report.in_sync else "drift_detected", {
        "missing": len(report.missing),
        "orphaned": len(report.orphaned)
    }, level=logging.INFO if report.in_sync else logging.WARNING)
    return report


async def rebuild_index(store: KnowledgeStore, index: KnowledgeIndex) -> RebuildSummary:
    """Clear the projection and re-add every knowledge item."""
    items = store.list()
    index.clear()

    summary = RebuildSummary(total_items=len(items), indexed=0)
    for item in items:
        text, metadata = knowledge_document(item)
        try:
            await index.add(knowledge_document_id(item.id), text, metadata)
            summary.indexed += 1
        except ProjectionSyncFailure as e:
            logger.warning(f"Rebuild could not index knowledge item '{item.id}': {e}")
            summary.failed.append(item.id)

    logger.log_operation("reconcile.rebuild", "success" if not summary.failed else "partial", {
        "total_items": summary.total_items,
        "indexed": summary.indexed,
        "failed": len(summary.failed)
    })
    return summary
