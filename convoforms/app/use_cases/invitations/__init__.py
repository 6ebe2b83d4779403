"""
Invitation Use Cases

Invitation lifecycle: pending -> accepted | expired.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    InvitationInfo,
    InviteMemberResponse,
    ListInvitationsResponse,
    RevokeInvitationResponse,
    ValidateInvitationResponse,
)
from .invite_member_use_case import InviteMemberUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase
from .validate_invitation_use_case import ValidateInvitationUseCase

__all__ = [
    "InviteMemberUseCase",
    "ListInvitationsUseCase",
    "ValidateInvitationUseCase",
    "AcceptInvitationUseCase",
    "RevokeInvitationUseCase",
    "InvitationInfo",
    "InviteMemberResponse",
    "ListInvitationsResponse",
    "ValidateInvitationResponse",
    "AcceptInvitationResponse",
    "RevokeInvitationResponse",
]
