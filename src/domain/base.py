"""Base class and helpers shared by all domain entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a string identifier for a new entity"""
    return uuid.uuid4().hex


class BaseModel(SQLModel):
    """Common base for persisted domain entities"""

    pass
