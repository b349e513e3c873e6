"""Views — the renderable units the shell switches between."""

from shelter.views.base import TemplateView, View
from shelter.views.share import (
    DEFAULT_VIEWS,
    ShareCreate,
    ShareCreated,
    ShareDownload,
    ShareEdit,
    TermsOfService,
    create_terms_of_service,
)

__all__ = [
    "DEFAULT_VIEWS",
    "ShareCreate",
    "ShareCreated",
    "ShareDownload",
    "ShareEdit",
    "TemplateView",
    "TermsOfService",
    "View",
    "create_terms_of_service",
]
