"""Response directives produced by the product workflow.

A directive says what should happen next without committing to a templating
engine or HTTP library; the HTTP layer turns it into a real response.
"""

from dataclasses import dataclass, field
from typing import Any

BACK = "back"


@dataclass(frozen=True)
class RenderView:
    """Render the named view (``products.index``) with ``data`` bound."""

    name: str
    data: dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Redirect:
    """Redirect (302) to a named route.

    ``route`` may be ``BACK`` to return to the previous page; ``errors`` and
    ``old_input`` are flashed to that page.
    """

    route: str
    params: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)
    old_input: dict[str, str] = field(default_factory=dict)
    fallback_route: str | None = None
    status_code: int = 302

    @property
    def is_back(self) -> bool:
        return self.route == BACK


@dataclass(frozen=True)
class ErrorStatus:
    """Terminal error response."""

    code: int
    detail: str = ""


ResponseDirective = RenderView | Redirect | ErrorStatus
