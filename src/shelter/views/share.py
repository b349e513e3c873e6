"""Default file-sharing views.

Each view renders one template. Views under a share path keep the
path remainder (the share reference) in their template context.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from shelter.routing.route import RouteMatch, ViewRoute
from shelter.templating import markup
from shelter.views.base import TemplateView

if TYPE_CHECKING:
    from shelter.shell import ShellController


class ShareCreate(TemplateView):
    template_name = "share_create.html"


class _ShareReferenceView(TemplateView):
    """A view addressed by ``/<route>/<share reference>``."""

    def __init__(self, template_name: str | None = None, **context: Any) -> None:
        super().__init__(template_name, **context)
        self.context.setdefault("share_id", "")

    def on_activate(self, match: RouteMatch) -> None:
        self.context["share_id"] = match.subpath


class ShareCreated(_ShareReferenceView):
    template_name = "share_created.html"


class ShareDownload(_ShareReferenceView):
    template_name = "share_download.html"


class ShareEdit(_ShareReferenceView):
    template_name = "share_edit.html"


class TermsOfService(TemplateView):
    template_name = "tos.html"

    def __init__(self, template_name: str | None = None, **context: Any) -> None:
        super().__init__(template_name, **context)
        self.context.setdefault("custom", None)


def create_terms_of_service(shell: ShellController) -> TermsOfService:
    """Build the terms-of-service view, using the custom text if configured."""
    custom = shell.config.tos_custom
    if custom is None:
        return TermsOfService()
    return TermsOfService(custom=markup(Path(custom).read_text(encoding="utf-8")))


# Registration order is slot order.
DEFAULT_VIEWS: tuple[ViewRoute, ...] = (
    ViewRoute("/share-create", ShareCreate, menu_label="msg-share-create"),
    ViewRoute("/share-created", ShareCreated),
    ViewRoute("/share-download", ShareDownload),
    ViewRoute("/share-edit", ShareEdit),
    ViewRoute("/tos", create_terms_of_service, menu_label="msg-tos"),
)
