"""
Knowledge administration and unanswered-question curation endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from .deps import AppServices, get_services
from .schemas import (
    KnowledgeCreateRequest,
    KnowledgeItemResponse,
    KnowledgeUpdateRequest,
    ReindexResponse,
    SyncStatusResponse,
    UnansweredResponse,
)
from ..core.reconcile import find_drift, rebuild_index
from ..core.schema import AdminResult

router = APIRouter()

PROJECTION_WARNING = "saved, but the search index could not be updated; run a reindex to repair it"


def _write_response(result: AdminResult) -> KnowledgeItemResponse:
    warning = None if result.projection_synced else PROJECTION_WARNING
    return KnowledgeItemResponse.from_item(result.item, warning=warning)


@router.get("/knowledge", response_model=List[KnowledgeItemResponse], response_model_exclude_none=True)
async def list_knowledge(services: AppServices = Depends(get_services)):
    return [KnowledgeItemResponse.from_item(item) for item in services.admin.list()]


@router.post("/knowledge", response_model=KnowledgeItemResponse, status_code=status.HTTP_201_CREATED,
             response_model_exclude_none=True)
async def create_knowledge(request: KnowledgeCreateRequest, services: AppServices = Depends(get_services)):
    result = await services.admin.add(request.keywords, request.answer, request.reference_link)
    return _write_response(result)


# Fixed paths are declared before /knowledge/{item_id} routes
@router.get("/knowledge/sync-status", response_model=SyncStatusResponse)
async def knowledge_sync_status(services: AppServices = Depends(get_services)):
    """Compare stored knowledge ids with the documents in the search index."""
    report = find_drift(services.store, services.index)
    return SyncStatusResponse(in_sync=report.in_sync, missing=report.missing, orphaned=report.orphaned)


@router.post("/knowledge/reindex", response_model=ReindexResponse)
async def reindex_knowledge(services: AppServices = Depends(get_services)):
    """Rebuild the search index from the knowledge store."""
    summary = await rebuild_index(services.store, services.index)
    return ReindexResponse(total_items=summary.total_items, indexed=summary.indexed, failed=summary.failed)


@router.put("/knowledge/{item_id}", response_model=KnowledgeItemResponse, response_model_exclude_none=True)
async def update_knowledge(item_id: str, request: KnowledgeUpdateRequest,
                           services: AppServices = Depends(get_services)):
    result = await services.admin.update(item_id, **request.supplied_fields())
    return _write_response(result)


@router.delete("/knowledge/{item_id}", response_model=KnowledgeItemResponse, response_model_exclude_none=True)
async def delete_knowledge(item_id: str, services: AppServices = Depends(get_services)):
    result = await services.admin.remove(item_id)
    return _write_response(result)


@router.get("/unanswered", response_model=List[UnansweredResponse])
async def list_unanswered(services: AppServices = Depends(get_services)):
    return [UnansweredResponse.from_entry(entry) for entry in services.unanswered.list()]


@router.delete("/unanswered/{question_id}")
async def delete_unanswered(question_id: str, services: AppServices = Depends(get_services)):
    services.unanswered.remove(question_id)
    return {"success": True, "id": question_id}
