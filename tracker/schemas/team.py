import uuid
from datetime import datetime

from pydantic import BaseModel

from tracker.models.enums import Permission, Role

class MemberAddIn(BaseModel):
    username: str
    role: str

class MemberRoleIn(BaseModel):
    role: str

class MemberOut(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    username: str
    role: Role
    assigned_at: datetime

class MemberPermissionsOut(BaseModel):
    username: str
    role: Role
    permissions: list[Permission]
