"""Turn workflow directives into HTTP responses."""

from pathlib import Path
from urllib.parse import urlsplit

from fastapi import HTTPException, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from src.catalog.core.security import FlashBag, encode_flash
from src.catalog.core.services import ErrorStatus, Redirect, RenderView, ResponseDirective
from src.catalog.entities.core.user import User
from src.catalog.runtime.context import get_config

TEMPLATES_DIR = Path(__file__).parent / "templates"
FLASH_MAX_AGE_SECONDS = 300

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def template_name(view: str) -> str:
    """Map a dotted view name onto a template path: ``products.edit`` -> ``products/edit.html``."""
    return view.replace(".", "/") + ".html"


def _same_site_path(request: Request, url: str | None) -> str | None:
    """Return the path of ``url`` if it points back at this application."""
    if not url:
        return None
    parts = urlsplit(url)
    if parts.netloc and parts.netloc != request.url.netloc:
        return None
    if not parts.path.startswith("/"):
        return None
    return parts.path + (f"?{parts.query}" if parts.query else "")


def _redirect_target(request: Request, directive: Redirect) -> str:
    if directive.is_back:
        back = _same_site_path(request, request.headers.get("referer"))
        if back:
            return back
        fallback = directive.fallback_route or "products.index"
        return str(request.app.url_path_for(fallback, **directive.params))
    return str(request.app.url_path_for(directive.route, **directive.params))


def render(
    request: Request,
    directive: ResponseDirective,
    user: User,
    flash: FlashBag | None = None,
) -> Response:
    """Build the response for ``directive``.

    Raises:
        HTTPException: for ``ErrorStatus`` directives
    """
    security = get_config().security

    if isinstance(directive, ErrorStatus):
        raise HTTPException(status_code=directive.code, detail=directive.detail or None)

    if isinstance(directive, Redirect):
        response = RedirectResponse(
            _redirect_target(request, directive), status_code=directive.status_code
        )
        if directive.errors or directive.old_input:
            response.set_cookie(
                security.flash_cookie_name,
                encode_flash(FlashBag(errors=directive.errors, old_input=directive.old_input)),
                max_age=FLASH_MAX_AGE_SECONDS,
                httponly=True,
                secure=security.secure_cookies,
                samesite=security.cookie_samesite,
            )
        return response

    if isinstance(directive, RenderView):
        flash = flash or FlashBag()
        context = {
            "app_name": get_config().app.name,
            "user": user,
            "errors": flash.errors,
            "old": flash.old,
            **directive.data,
        }
        response = templates.TemplateResponse(
            request,
            template_name(directive.name),
            context,
            status_code=directive.status_code,
        )
        # Flash data lives for exactly one page view
        if security.flash_cookie_name in request.cookies:
            response.delete_cookie(security.flash_cookie_name)
        return response

    raise TypeError(f"Unsupported response directive: {directive!r}")
