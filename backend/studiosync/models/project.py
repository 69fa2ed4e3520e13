# backend/studiosync/models/project.py
"""
Recording projects and their uploaded files.

Projects outlive the reservation they started from: deleting the
reservation only clears ``reservation_id``.
"""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base
from .base_enum import create_safe_enum


class ProjectStatus(str, Enum):
    RECORDING = "RECORDING"
    MIXING = "MIXING"
    MASTERING = "MASTERING"
    COMPLETED = "COMPLETED"


class FileType(str, Enum):
    AUDIO = "AUDIO"
    DOCUMENT = "DOCUMENT"
    IMAGE = "IMAGE"


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        create_safe_enum(ProjectStatus, "project_status"),
        nullable=False,
        default=ProjectStatus.RECORDING,
    )
    studio_id = Column(String(26), ForeignKey("studios.id", ondelete="CASCADE"), nullable=True)
    reservation_id = Column(
        String(26), ForeignKey("reservations.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    studio = relationship("Studio")
    reservation = relationship("Reservation")
    files = relationship(
        "File", back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )


class File(Base):
    __tablename__ = "files"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    name = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    type = Column(create_safe_enum(FileType, "file_type"), nullable=False)
    project_id = Column(String(26), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    uploaded_by = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="files")
    uploader = relationship("User")
