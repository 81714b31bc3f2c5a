from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from core.database import get_db
from core.config import Settings, get_app_settings
from crud.project_crud import (
    add_asset,
    create_project,
    deploy_project,
    get_public_project,
    list_projects,
    update_project,
)
from schemas.asset_schema import DeployResponse
from schemas.auth_schema import TokenIdentity
from schemas.project_schema import ProjectCreate, ProjectResponse
from core.auth import get_current_user


router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectResponse])
def list_mine(db: Session = Depends(get_db), current_user: TokenIdentity = Depends(get_current_user)):
    return list_projects(db, owner_id=current_user.id)


@router.get("/public/{project_id}", response_model=ProjectResponse)
def read_public(project_id: str, db: Session = Depends(get_db)):
    return get_public_project(db, project_id)


@router.post("", response_model=ProjectResponse)
def create(payload: ProjectCreate, db: Session = Depends(get_db), current_user: TokenIdentity = Depends(get_current_user)):
    return create_project(db, payload, user=current_user)


@router.put("/{project_id}", response_model=ProjectResponse)
def update(
    project_id: str,
    body: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: TokenIdentity = Depends(get_current_user),
):
    # Body is validated only after the ownership check
    return update_project(db, project_id, body, user=current_user)


@router.post("/{project_id}/assets", response_model=ProjectResponse)
def attach_asset(
    project_id: str,
    body: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: TokenIdentity = Depends(get_current_user),
):
    return add_asset(db, project_id, body, user=current_user)


@router.post("/{project_id}/deploy", response_model=DeployResponse)
def deploy(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: TokenIdentity = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
):
    url = deploy_project(db, project_id, user=current_user, base_path=settings.DEPLOYED_URL_PATH)
    return DeployResponse(deployed_url=url)
