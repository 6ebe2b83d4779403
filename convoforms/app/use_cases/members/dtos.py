"""
Member Use Case DTOs
"""

from typing import List, Optional

from pydantic import BaseModel


class MemberInfo(BaseModel):
    user_id: str
    email: str
    display_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str
    joined_at: Optional[str] = None
    invited_by: Optional[str] = None


class ListMembersResponse(BaseModel):
    members: List[MemberInfo]


class UpdateMemberRoleResponse(BaseModel):
    user_id: str
    old_role: str
    role: str


class RemoveMemberResponse(BaseModel):
    status: str
