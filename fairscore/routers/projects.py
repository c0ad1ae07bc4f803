"""
Project Router - Science Fair Evaluation Platform
fairscore/routers/projects.py

Admin CRUD for projects. Deleting a project drops it from every panel.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from fairscore.core.dependencies import get_project_repository, require_admin
from fairscore.models.project import Project, ProjectCreate, ProjectUpdate
from fairscore.repositories.project_repository import ProjectRepository

router = APIRouter(prefix="/api/v1", tags=["Projects"], dependencies=[Depends(require_admin)])


class ProjectListResponse(BaseModel):
    items: List[Project]
    total: int


@router.get("/projects", response_model=ProjectListResponse, summary="List projects")
async def list_projects(repo: ProjectRepository = Depends(get_project_repository)) -> ProjectListResponse:
    items = repo.get_all()
    return ProjectListResponse(items=items, total=len(items))


@router.post(
    "/projects",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    project: ProjectCreate,
    repo: ProjectRepository = Depends(get_project_repository),
) -> Project:
    return repo.create(project)


@router.get("/projects/{project_id}", response_model=Project, summary="Get a project")
async def get_project(project_id: str, repo: ProjectRepository = Depends(get_project_repository)) -> Project:
    return repo.get_or_raise(project_id)


@router.patch("/projects/{project_id}", response_model=Project, summary="Update a project")
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    repo: ProjectRepository = Depends(get_project_repository),
) -> Project:
    return repo.update(project_id, data)


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a project")
async def delete_project(project_id: str, repo: ProjectRepository = Depends(get_project_repository)) -> None:
    repo.delete(project_id)
