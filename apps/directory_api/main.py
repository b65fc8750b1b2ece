"""directory-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from user_directory.application.services.user_directory_service import UserDirectoryService
from user_directory.config.settings import load_settings
from user_directory.infrastructure.db.session import create_session_factory
from user_directory.infrastructure.db.user_repository import SqlAlchemyUserRepository
from user_directory.infrastructure.http.user_router import build_user_router
from user_directory.infrastructure.logging import configure_logging
from user_directory.infrastructure.security.password_hasher import Pbkdf2PasswordHasher

DIRECTORY_API_HOST = "0.0.0.0"
DIRECTORY_API_PORT = 8000
logger = logging.getLogger(__name__)


def build_directory_service(database_url: str) -> UserDirectoryService:
    """Build directory service with SQLAlchemy-backed dependencies."""

    session_factory = create_session_factory(database_url)
    return UserDirectoryService(
        users=SqlAlchemyUserRepository(session_factory),
        password_hasher=Pbkdf2PasswordHasher(),
    )


def create_app(
    *,
    directory_service: UserDirectoryService | None = None,
    database_url: str | None = None,
) -> FastAPI:
    """Create FastAPI app exposing the user directory routes."""

    if directory_service is None:
        if database_url is None:
            settings = load_settings()
            configure_logging(level=settings.log_level)
            database_url = settings.database_url
        directory_service = build_directory_service(database_url)
        logger.info("directory_api_configured")

    app = FastAPI(title="User Directory API", description="Manage users", version="1")
    app.include_router(build_user_router(directory_service=directory_service))
    return app


def run_asgi_server(*, host: str = DIRECTORY_API_HOST, port: int = DIRECTORY_API_PORT) -> None:
    """Run directory-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.directory_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run directory-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
