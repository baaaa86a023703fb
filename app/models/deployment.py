# app/models/deployment.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

STATUS_BUILDING = "building"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

class Deployment(Base):
    __tablename__ = "deployments"
    
    id = Column(String, primary_key=True, index=True)  # UUID as string
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default=STATUS_BUILDING)
    url = Column(String, nullable=True)
    logs = Column(Text, nullable=False, default="")
    platform = Column(String, nullable=True)  # Only set for platform deploys
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    # Relationship
    project = relationship("Project", back_populates="deployments")
