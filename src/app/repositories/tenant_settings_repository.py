"""Tenant Settings Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.tenant_settings import TenantSettings


class TenantSettingsRepository(ABC):
    @abstractmethod
    async def get(self, tenant_id: str) -> Optional[TenantSettings]:
        """Settings for the tenant, or None if never saved"""
        pass
