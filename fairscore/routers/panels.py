"""
Panel Router - Science Fair Evaluation Platform
fairscore/routers/panels.py

Jury panels: 3-4 evaluators and at least one project, checked on create
and on every edit.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from fairscore.core.dependencies import get_panel_repository, require_admin
from fairscore.models.panel import Panel, PanelCreate, PanelUpdate
from fairscore.repositories.panel_repository import PanelRepository

router = APIRouter(prefix="/api/v1", tags=["Panels"], dependencies=[Depends(require_admin)])


class PanelListResponse(BaseModel):
    items: List[Panel]
    total: int


@router.get("/panels", response_model=PanelListResponse, summary="List panels")
async def list_panels(repo: PanelRepository = Depends(get_panel_repository)) -> PanelListResponse:
    items = repo.get_all()
    return PanelListResponse(items=items, total=len(items))


@router.post("/panels", response_model=Panel, status_code=status.HTTP_201_CREATED, summary="Create a panel")
async def create_panel(panel: PanelCreate, repo: PanelRepository = Depends(get_panel_repository)) -> Panel:
    return repo.create(panel)


@router.get("/panels/{panel_id}", response_model=Panel, summary="Get a panel")
async def get_panel(panel_id: str, repo: PanelRepository = Depends(get_panel_repository)) -> Panel:
    return repo.get_or_raise(panel_id)


@router.patch("/panels/{panel_id}", response_model=Panel, summary="Update a panel")
async def update_panel(
    panel_id: str,
    data: PanelUpdate,
    repo: PanelRepository = Depends(get_panel_repository),
) -> Panel:
    return repo.update(panel_id, data)


@router.delete("/panels/{panel_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a panel")
async def delete_panel(panel_id: str, repo: PanelRepository = Depends(get_panel_repository)) -> None:
    repo.delete(panel_id)
