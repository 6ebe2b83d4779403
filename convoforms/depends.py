from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from convoforms.adapter.services.email_sender import ResendEmailSender
from convoforms.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from convoforms.api.error import ClientError
from convoforms.api.utils.jwt import PROFILE_CLAIMS, verify_jwt
from convoforms.app.services.email_sender import IEmailSender
from convoforms.app.services.identity import CurrentUser
from convoforms.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_sender() -> IEmailSender:
    return ResendEmailSender(
        api_key=ApplicationConfig.RESEND_API_KEY,
        from_email=ApplicationConfig.RESEND_FROM_EMAIL,
        api_url=ApplicationConfig.RESEND_API_URL,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Dependency to extract and verify the identity token from the
    Authorization header.

    Returns:
        CurrentUser built from the token claims

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return CurrentUser(
        user_id=payload["sub"],
        **{claim: payload.get(claim) for claim in PROFILE_CLAIMS},
    )
