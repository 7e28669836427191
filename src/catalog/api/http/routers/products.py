"""Product routes: server-rendered CRUD with admin-only mutations."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response

from src.catalog.api.http.deps import (
    get_current_user,
    get_flash,
    get_product_workflow,
    get_submitted_input,
)
from src.catalog.api.http.views import render
from src.catalog.core.security import FlashBag
from src.catalog.core.services import ProductWorkflow
from src.catalog.entities.core.user import User

router = APIRouter(prefix="/products", tags=["products"], default_response_class=HTMLResponse)

SPOOFABLE_METHODS = {"PUT", "PATCH", "DELETE"}


@router.get("", name="products.index")
def list_products(
    request: Request,
    page: int = Query(1, ge=1),
    user: User = Depends(get_current_user),
    workflow: ProductWorkflow = Depends(get_product_workflow),
) -> Response:
    """List products, one page at a time."""
    return render(request, workflow.list(user, page=page), user)


@router.get("/create", name="products.create")
def create_product_form(
    request: Request,
    user: User = Depends(get_current_user),
    workflow: ProductWorkflow = Depends(get_product_workflow),
    flash: FlashBag = Depends(get_flash),
) -> Response:
    """Show the form for adding a product."""
    return render(request, workflow.create_form(user), user, flash)


@router.post("", name="products.store")
def store_product(
    request: Request,
    user: User = Depends(get_current_user),
    data: dict[str, Any] | None = Depends(get_submitted_input),
    workflow: ProductWorkflow = Depends(get_product_workflow),
) -> Response:
    """Create a product and redirect to it."""
    return render(request, workflow.store(user, data), user)


@router.get("/show/{product:int}", name="products.show")
def show_product(
    request: Request,
    product: int,
    user: User = Depends(get_current_user),
    workflow: ProductWorkflow = Depends(get_product_workflow),
) -> Response:
    return render(request, workflow.show(user, product), user)


@router.get("/{product:int}/edit", name="products.edit")
def edit_product_form(
    request: Request,
    product: int,
    user: User = Depends(get_current_user),
    workflow: ProductWorkflow = Depends(get_product_workflow),
    flash: FlashBag = Depends(get_flash),
) -> Response:
    """Show the edit form pre-filled with the stored values."""
    return render(request, workflow.edit_form(user, product), user, flash)


@router.put("/{product:int}", name="products.update")
def update_product(
    request: Request,
    product: int,
    user: User = Depends(get_current_user),
    data: dict[str, Any] | None = Depends(get_submitted_input),
    workflow: ProductWorkflow = Depends(get_product_workflow),
) -> Response:
    """Replace a product's name and price."""
    return render(request, workflow.update(user, product, data), user)


@router.delete("/{product:int}", name="products.destroy")
def delete_product(
    request: Request,
    product: int,
    user: User = Depends(get_current_user),
    workflow: ProductWorkflow = Depends(get_product_workflow),
) -> Response:
    return render(request, workflow.delete(user, product), user)


@router.post("/{product:int}", name="products.spoofed")
def spoofed_product_method(
    request: Request,
    product: int,
    user: User = Depends(get_current_user),
    data: dict[str, Any] | None = Depends(get_submitted_input),
    workflow: ProductWorkflow = Depends(get_product_workflow),
) -> Response:
    """Dispatch HTML form posts carrying ``_method`` to update or delete.

    Browsers can only submit GET and POST, so the edit and delete forms post
    here with a hidden ``_method`` field.
    """
    method = str(data.pop("_method", "")).upper() if data is not None else ""
    if method not in SPOOFABLE_METHODS:
        raise HTTPException(status_code=405, detail="Method Not Allowed")
    if method == "DELETE":
        return render(request, workflow.delete(user, product), user)
    return render(request, workflow.update(user, product, data), user)
