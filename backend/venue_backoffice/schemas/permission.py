"""Schemas for the permission catalog and the vendor navigation gate."""
from typing import Dict, List, Optional
from pydantic import BaseModel


class PermissionKeyInfo(BaseModel):
    key: str
    label: str
    category: str


class AvailablePermissionsResponse(BaseModel):
    all_permissions: List[str]
    permissions: List[PermissionKeyInfo]
    permissions_by_category: Dict[str, List[str]]
    role_templates: Dict[str, List[str]]


class NavigationItem(BaseModel):
    name: str
    href: str
    permission: Optional[str] = None
    owner_only: bool = False
    children: List["NavigationItem"] = []


class NavigationResponse(BaseModel):
    role: str
    items: List[NavigationItem]


NavigationItem.model_rebuild()
