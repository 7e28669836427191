"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from fastapi import Depends, HTTPException, Request
from loguru import logger
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.security import FlashBag, decode_flash
from src.catalog.core.services import ProductWorkflow
from src.catalog.entities.core.user import User, UserRepository
from src.catalog.entities.service.product import ProductRepository
from src.catalog.runtime.context import get_config


def get_session(request: Request) -> Iterator[Session]:
    """Yield a request-scoped session; commit on success, roll back on error."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    with app_deps.database_service.session_scope() as session:
        yield session


def get_current_user(
    request: Request,
    db: Session = Depends(get_session),
) -> User:
    """Load the authenticated user named by the trusted identity header.

    Authentication itself happens upstream (reverse proxy or SSO gateway);
    this only maps the asserted identity onto a stored user.
    """
    header = get_config().security.user_header
    user_id = request.headers.get(header)
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")

    request.state.user = user
    return user


def get_product_repository(db: Session = Depends(get_session)) -> ProductRepository:
    return ProductRepository(db)


def get_product_workflow(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductWorkflow:
    catalog_config = get_config().catalog
    return ProductWorkflow(
        repository,
        per_page=catalog_config.per_page,
        list_order=catalog_config.list_order,
    )


def get_flash(request: Request) -> FlashBag:
    """Flash data left by the previous request, if any."""
    return decode_flash(request.cookies.get(get_config().security.flash_cookie_name))


async def get_submitted_input(request: Request) -> dict[str, Any] | None:
    """Read a form or JSON request body into a plain dict.

    An unreadable body yields ``None`` rather than an error, so that the
    workflow can authorize the request before rejecting its input.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            logger.debug("Request body is not valid JSON")
            return None
        return body if isinstance(body, dict) else None

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
