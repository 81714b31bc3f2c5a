import uuid
from sqlalchemy import Boolean, Column, String, Text, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin
from models.version import ProjectVersion

class Project(Base, TimestampMixin):
    __tablename__ = "projects"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    code = Column(Text, nullable=False)
    assets = Column(JSON, nullable=False, default=list)
    input_data = Column(JSON, nullable=False, default=dict)
    is_public = Column(Boolean, nullable=False, default=False)
    deployed_url = Column(String(512), nullable=True)

    versions = relationship(
        ProjectVersion,
        order_by=ProjectVersion.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

Index("idx_projects_owner_id_updated_at", Project.owner_id, Project.updated_at.desc())
