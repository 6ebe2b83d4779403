"""
Caller identity as asserted by the identity provider, and the local
user record kept in sync with it.
"""

from typing import Optional

from pydantic import BaseModel

from convoforms.app.services.unit_of_work import UnitOfWork
from convoforms.domain.entities import User


class CurrentUser(BaseModel):
    """Claims of a verified identity token"""

    user_id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None


async def ensure_user(
    uow: UnitOfWork, identity: CurrentUser, fallback_email: Optional[str] = None
) -> Optional[User]:
    """
    Return the local user for identity, creating it when missing.

    Returns None when the user does not exist and no email is known.
    """
    user = await uow.users.get_by_id(identity.user_id)
    if user:
        return user

    email = identity.email or fallback_email
    if not email:
        return None

    return await uow.users.create(
        User(
            id=identity.user_id,
            email=email.lower(),
            first_name=identity.first_name,
            last_name=identity.last_name,
            username=identity.username,
            avatar_url=identity.avatar_url,
        )
    )
