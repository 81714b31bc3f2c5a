import logging
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.base import utcnow
from models.project import Project
from models.version import ProjectVersion
from schemas.auth_schema import TokenIdentity
from schemas.asset_schema import AssetAdd
from schemas.project_schema import ProjectCreate, ProjectUpdate
from core.errors import Forbidden, InvalidInput, NotFound

logger = logging.getLogger(__name__)


def parse_body(model: type[BaseModel], body: Any):
    """Validate a raw JSON body into `model`. An absent body counts as empty."""
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object")
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        errors = exc.errors()
        raise InvalidInput(errors[0].get("msg") if errors else None)


def is_owner(project: Project, user: TokenIdentity) -> bool:
    return project.owner_id == user.id


def get_project(db: Session, project_id: str):
    return db.query(Project).filter(Project.id == project_id).first()


def get_owned_project(db: Session, project_id: str, user: TokenIdentity) -> Project:
    """Load a project the caller is allowed to mutate.

    Raises NotFound when it does not exist and Forbidden when someone else owns it.
    """
    proj = get_project(db, project_id)
    if not proj:
        raise NotFound()
    if not is_owner(proj, user):
        logger.warning("User %s denied access to project %s", user.id, project_id)
        raise Forbidden()
    return proj


def list_projects(db: Session, owner_id: str):
    q = db.query(Project).filter(Project.owner_id == owner_id)
    return q.order_by(desc(Project.updated_at)).all()


def get_public_project(db: Session, project_id: str) -> Project:
    proj = get_project(db, project_id)
    if not proj or not proj.is_public:
        raise NotFound("Project not found or not public")
    return proj


def create_project(db: Session, payload: ProjectCreate, user: TokenIdentity):
    if not payload.title or not payload.code:
        raise InvalidInput("Title and code required")

    now = utcnow()
    proj = Project(
        owner_id=user.id,
        title=payload.title,
        description=payload.description,
        code=payload.code,
        input_data=payload.input_data.model_dump() if payload.input_data else {},
        is_public=bool(payload.is_public),
        assets=[],
        created_at=now,
        updated_at=now,
    )
    proj.versions.append(ProjectVersion(position=0, code=payload.code, created_at=now))
    db.add(proj)
    db.commit()
    db.refresh(proj)
    logger.info("User %s created project %s", user.id, proj.id)
    return proj


def update_project(db: Session, project_id: str, body: Any, user: TokenIdentity):
    # Ownership first: a non-owner gets Forbidden whatever the body holds
    proj = get_owned_project(db, project_id, user)
    payload = parse_body(ProjectUpdate, body)
    now = utcnow()

    if payload.title:
        proj.title = payload.title
    if payload.description:
        proj.description = payload.description
    if payload.code and payload.code != proj.code:
        proj.code = payload.code
        proj.versions.append(
            ProjectVersion(position=len(proj.versions), code=payload.code, created_at=now)
        )
        logger.info("Project %s now at version %d", proj.id, len(proj.versions) - 1)
    if payload.input_data is not None:
        proj.input_data = payload.input_data.model_dump()
    if isinstance(payload.is_public, bool):
        proj.is_public = payload.is_public

    proj.updated_at = now
    db.commit()
    db.refresh(proj)
    return proj


def add_asset(db: Session, project_id: str, body: Any, user: TokenIdentity):
    proj = get_owned_project(db, project_id, user)
    url = parse_body(AssetAdd, body).url
    if not url:
        raise InvalidInput("Missing asset URL")

    # Reassign so the JSON column is flagged dirty
    proj.assets = [*(proj.assets or []), url]
    proj.updated_at = utcnow()
    db.commit()
    db.refresh(proj)
    logger.info("Attached asset to project %s (%d total)", proj.id, len(proj.assets))
    return proj


def deployed_path(project_id: str, base_path: str = "/deployed") -> str:
    return f"{base_path.rstrip('/')}/{project_id}"


def deploy_project(db: Session, project_id: str, user: TokenIdentity, base_path: str = "/deployed") -> str:
    proj = get_owned_project(db, project_id, user)
    proj.deployed_url = deployed_path(proj.id, base_path)
    proj.is_public = True
    proj.updated_at = utcnow()
    db.commit()
    logger.info("Deployed project %s at %s", proj.id, proj.deployed_url)
    return proj.deployed_url


def get_deployed_project(db: Session, project_id: str) -> Project:
    proj = get_project(db, project_id)
    if not proj or not proj.is_public or not proj.deployed_url:
        raise NotFound("Project not found or not deployed")
    return proj
