from pydantic import BaseModel
from app.models.role import RoleName


class RoleUpdateRequest(BaseModel):
    role: RoleName
