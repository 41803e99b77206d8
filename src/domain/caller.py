"""Caller context

Identity of whoever invokes a use case. Authentication is handled
upstream; these values are trusted as given.
"""

from dataclasses import dataclass
from enum import Enum


class TenantRole(str, Enum):
    OWNER = "owner"
    STAFF = "staff"


@dataclass(frozen=True)
class Caller:
    tenant_id: str
    user_id: str
    role: TenantRole = TenantRole.STAFF

    @property
    def is_owner(self) -> bool:
        return self.role == TenantRole.OWNER
