# app/models/file.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

FILE_TYPE = "file"
DIRECTORY_TYPE = "directory"

class File(Base):
    __tablename__ = "files"
    
    id = Column(String, primary_key=True, index=True)  # UUID as string
    name = Column(String, nullable=False)
    path = Column(String, nullable=False)  # parent.path + "/" + name, or just name at the root
    type = Column(String, nullable=False, default=FILE_TYPE)  # "file" or "directory"
    content = Column(Text, nullable=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    # Not a foreign key; directory deletes remove descendants explicitly
    parent_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    
    # Relationship
    project = relationship("Project", back_populates="files")
