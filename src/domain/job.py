"""Job Domain Entity

A piece of work for one client. Job items are billed against it.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid


class JobStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class Job(BaseModel, table=True):
    __tablename__ = "jobs"
    __table_args__ = (
        Index('ix_jobs_tenant_client', 'tenant_id', 'client_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    tenant_id: str = Field(sa_column=Column(String(64), nullable=False))
    client_id: str = Field(sa_column=Column(String(64), nullable=False))
    title: str = Field(sa_column=Column(String(255), nullable=False))
    reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Client's reference number/code"
    )
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    status: JobStatus = Field(default=JobStatus.ACTIVE)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    created_by: Optional[str] = Field(default=None)
