"""Core services exports."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .product.directives import ErrorStatus, Redirect, RenderView, ResponseDirective
from .product.workflow import ProductWorkflow

__all__ = [
    "DbManageService",
    "DbSessionService",
    "ErrorStatus",
    "ProductWorkflow",
    "Redirect",
    "RenderView",
    "ResponseDirective",
]
