"""
Member Management Use Cases
"""

from .dtos import ListMembersResponse, MemberInfo, RemoveMemberResponse, UpdateMemberRoleResponse
from .list_members_use_case import ListMembersUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .update_member_role_use_case import UpdateMemberRoleUseCase

__all__ = [
    "ListMembersUseCase",
    "UpdateMemberRoleUseCase",
    "RemoveMemberUseCase",
    "MemberInfo",
    "ListMembersResponse",
    "UpdateMemberRoleResponse",
    "RemoveMemberResponse",
]
