import hashlib
import secrets


def generate_invitation_token() -> str:
    """64 hex characters, 256 bits of entropy"""
    return secrets.token_hex(32)


def hash_invitation_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def build_invitation_url(app_url: str, token: str) -> str:
    return f"{app_url.rstrip('/')}/invite?token={token}"
