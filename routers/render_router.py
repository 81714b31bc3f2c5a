from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from core.database import get_db
from crud.project_crud import get_deployed_project


router = APIRouter(tags=["Render"])

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head><title>{title}</title></head>
<body>
{code}
</body>
</html>
"""


def render_page(title: str, code: str) -> str:
    """
    Embed a project's stored code in a bare HTML shell.
    Title and code go in verbatim: deployed code is served as-is, unsanitized.
    """
    return PAGE_TEMPLATE.format(title=title, code=code)


@router.get("/{project_id}", response_class=HTMLResponse)
def render_deployed(project_id: str, db: Session = Depends(get_db)):
    proj = get_deployed_project(db, project_id)
    return HTMLResponse(render_page(proj.title, proj.code))
