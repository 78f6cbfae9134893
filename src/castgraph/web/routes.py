# src/castgraph/web/routes.py
"""HTTP routes for project relationship graphs."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from castgraph.analysis import filter_relationships
from castgraph.canon.crud import RelationshipStore
from castgraph.core.errors import DuplicateRelationshipError, RelationshipSaveError
from castgraph.core.logging import get_logger
from castgraph.models import (
    AnalysisResponse,
    AnalyzeRequest,
    ClearResponse,
    RelationshipType,
    SaveRelationshipsRequest,
)
from castgraph.services import AnalysisResult, RelationshipGraphService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}/relationships")

_service: RelationshipGraphService | None = None


def get_service() -> RelationshipGraphService:
    """Return the process-wide service bound to the default database."""
    global _service
    if _service is None:
        _service = RelationshipGraphService(RelationshipStore())
    return _service


def _response(project_id: str, result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(
        project_id=project_id,
        relationships=result.batch.relationships,
        analysis_method=result.batch.analysis_method,
        warning=result.warning,
        reused=result.reused,
    )


@router.get("", response_model=AnalysisResponse)
async def get_relationships(
    project_id: str,
    type: RelationshipType | None = Query(default=None),
    character: str | None = Query(default=None),
    service: RelationshipGraphService = Depends(get_service),
):
    """Return the stored relationships of a project, optionally filtered."""
    batch = await service.store.load(project_id)
    if batch is None:
        raise HTTPException(
            status_code=404, detail=f"No relationship analysis for project {project_id}"
        )
    return AnalysisResponse(
        project_id=project_id,
        relationships=filter_relationships(batch.relationships, type, character),
        analysis_method=batch.analysis_method,
        reused=True,
    )


@router.post("", response_model=AnalysisResponse, status_code=status.HTTP_201_CREATED)
async def save_relationships(
    project_id: str,
    body: SaveRelationshipsRequest,
    service: RelationshipGraphService = Depends(get_service),
):
    """Replace the stored relationships of a project with the supplied set."""
    try:
        batch = await service.save_external(
            project_id, body.relationships, body.analysis_method
        )
    except DuplicateRelationshipError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except RelationshipSaveError as e:
        logger.error("Save failed for project %s: %s", project_id, e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return _response(project_id, AnalysisResult(batch=batch))


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_relationships(
    project_id: str,
    body: AnalyzeRequest,
    service: RelationshipGraphService = Depends(get_service),
):
    """Return the project's analysis, computing it when absent or forced."""
    run = service.reanalyze if body.force else service.get_or_analyze
    try:
        result = await run(
            project_id,
            body.characters,
            body.scenes,
            story_context=body.story_context,
            use_ai=body.use_ai,
        )
    except RelationshipSaveError as e:
        logger.error("Analysis for project %s could not be saved: %s", project_id, e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return _response(project_id, result)


@router.delete("", response_model=ClearResponse)
async def clear_relationships(
    project_id: str,
    service: RelationshipGraphService = Depends(get_service),
):
    """Delete the stored analysis of a project."""
    deleted = await service.clear(project_id)
    return ClearResponse(deleted=deleted)
