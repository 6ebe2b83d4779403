from uuid import UUID

from fastapi import status

from convoforms.api.error import ClientError
from convoforms.libs.result import Error


def parse_uuid(value: str, code: str, label: str) -> UUID:
    """Parse a path parameter as UUID, raising a 400 ClientError otherwise"""
    try:
        return UUID(value)
    except ValueError:
        raise ClientError(
            Error(code, f"Invalid {label} format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
