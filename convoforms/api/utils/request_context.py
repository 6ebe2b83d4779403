from fastapi import Request

from convoforms.app.services.activity_logger import RequestContext


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency: client IP and user agent for activity records"""
    return RequestContext.from_headers(request.headers)
