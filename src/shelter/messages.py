"""Message bundle.

Templates look up user-visible strings through the ``tr`` global so
deployments can override wording without touching templates.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from shelter.config import ShellConfig

BUILTIN_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "msg-app-name": "FileShelter",
        "msg-share-create": "Share files",
        "msg-share-created": "Share created",
        "msg-share-download": "Download",
        "msg-share-edit": "Edit share",
        "msg-tos": "Terms of Service",
        "msg-error": "Error",
        "msg-back-home": "Back to home",
        "msg-share-link": "Share link",
        "msg-edit-link": "Edit link",
    }
)


class Messages:
    """Read-only message lookup: built-ins overlaid with deployment overrides.

    Missing keys render as ``??key??`` so they stand out on the page.
    """

    __slots__ = ("_messages",)

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._messages: Mapping[str, str] = MappingProxyType(
            {**BUILTIN_MESSAGES, **(overrides or {})}
        )

    @classmethod
    def for_config(cls, config: ShellConfig) -> Messages:
        """Built-ins, the configured app name, then ``config.messages``."""
        return cls({"msg-app-name": config.app_name, **config.messages})

    def __call__(self, key: str) -> str:
        return self.get(key)

    def get(self, key: str) -> str:
        try:
            return self._messages[key]
        except KeyError:
            return f"??{key}??"

    def __contains__(self, key: object) -> bool:
        return key in self._messages
