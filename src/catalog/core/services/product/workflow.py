"""Product workflow: authorize, validate, persist, respond."""

from collections.abc import Callable, Mapping
from functools import wraps
from typing import Any

from loguru import logger

from src.catalog.core.errors import (
    CatalogError,
    MalformedInputError,
    NotFoundError,
    ValidationError,
)
from src.catalog.core.policies import Action, InvalidProduct, authorize, validate_product
from src.catalog.entities.core.user import User
from src.catalog.entities.service.product import Product, ProductRepository

from .directives import BACK, ErrorStatus, Redirect, RenderView, ResponseDirective

EMPTY_LIST_MESSAGE = "No products found"


def _directive_on_error(func: Callable[..., ResponseDirective]) -> Callable[..., ResponseDirective]:
    """Turn domain errors raised inside an action into directives."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ResponseDirective:
        try:
            return func(*args, **kwargs)
        except CatalogError as e:
            if e.status_code >= 500:
                logger.exception("Product action {} failed", func.__name__)
            return ErrorStatus(e.status_code, e.message)

    return wrapper


class ProductWorkflow:
    """Orchestrates one product action per call.

    Every action checks authorization before doing anything else, validates
    before touching the store, and returns a ``ResponseDirective``. The
    workflow keeps no state between calls.
    """

    def __init__(
        self,
        repository: ProductRepository,
        per_page: int = 5,
        list_order: str = "asc",
    ) -> None:
        self._repository = repository
        self._per_page = per_page
        self._list_order = list_order

    def _get_or_404(self, product_id: int) -> Product:
        product = self._repository.get(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def _validated(self, data: Mapping[str, Any] | None) -> dict[str, Any]:
        if data is None:
            raise MalformedInputError()
        result = validate_product(data)
        if isinstance(result, InvalidProduct):
            logger.info("Product input rejected: {}", sorted(result.errors))
            raise ValidationError(result.errors, result.old_input)
        return result.payload.model_dump()

    @_directive_on_error
    def list(self, user: User, page: int = 1) -> ResponseDirective:
        authorize(user, Action.VIEW_LIST)
        products = self._repository.list(
            page=max(page, 1), page_size=self._per_page, order=self._list_order
        )
        data: dict[str, Any] = {"products": products.items, "pagination": products}
        if products.is_empty:
            data["message"] = EMPTY_LIST_MESSAGE
        return RenderView("products.index", data)

    @_directive_on_error
    def show(self, user: User, product_id: int) -> ResponseDirective:
        authorize(user, Action.VIEW_PRODUCT)
        return RenderView("products.show", {"product": self._get_or_404(product_id)})

    @_directive_on_error
    def create_form(self, user: User) -> ResponseDirective:
        authorize(user, Action.VIEW_CREATE_FORM)
        return RenderView("products.create")

    @_directive_on_error
    def store(self, user: User, data: Mapping[str, Any] | None) -> ResponseDirective:
        authorize(user, Action.CREATE)
        try:
            payload = self._validated(data)
        except ValidationError as e:
            return Redirect(
                BACK, errors=e.errors, old_input=e.old_input, fallback_route="products.create"
            )
        product = self._repository.create(payload)
        logger.info("Product {} created by {}", product.id, user.id)
        return Redirect("products.show", {"product": product.id})

    @_directive_on_error
    def edit_form(self, user: User, product_id: int) -> ResponseDirective:
        authorize(user, Action.VIEW_EDIT_FORM)
        return RenderView("products.edit", {"product": self._get_or_404(product_id)})

    @_directive_on_error
    def update(
        self, user: User, product_id: int, data: Mapping[str, Any] | None
    ) -> ResponseDirective:
        authorize(user, Action.UPDATE)
        self._get_or_404(product_id)
        try:
            payload = self._validated(data)
        except ValidationError as e:
            return Redirect(
                BACK,
                errors=e.errors,
                old_input=e.old_input,
                fallback_route="products.edit",
                params={"product": product_id},
            )
        self._repository.update(product_id, payload)
        logger.info("Product {} updated by {}", product_id, user.id)
        return Redirect("products.show", {"product": product_id})

    @_directive_on_error
    def delete(self, user: User, product_id: int) -> ResponseDirective:
        authorize(user, Action.DELETE)
        if not self._repository.delete(product_id):
            raise NotFoundError(f"Product {product_id} not found")
        logger.info("Product {} deleted by {}", product_id, user.id)
        return Redirect("products.index")
