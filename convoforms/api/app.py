import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError
from .middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="ConvoForms Workspace API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from convoforms.api.routes import (
        admin,
        form,
        health_check,
        invitation,
        member,
        onboarding,
        template,
        usage,
        workspace,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(onboarding.router, tags=["Onboarding"])
    app.include_router(workspace.router, tags=["Workspaces"])
    app.include_router(member.router, tags=["Members"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(usage.router, tags=["Usage"])
    app.include_router(form.router, tags=["Forms"])
    app.include_router(template.router, tags=["Templates"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
