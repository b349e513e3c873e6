"""Shell configuration.

ShellConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

DEFAULT_PATH = "/share-create"
INTERNAL_ERROR_MESSAGE = "Internal error"


@dataclass(frozen=True, slots=True)
class ShellConfig:
    """Shell configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ShellConfig(debug=True, port=3000, default_path="/tos")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Routing
    default_path: str = DEFAULT_PATH
    strict_routes: bool = True  # False: overlapping routes resolve first-registered-wins

    # Errors
    internal_error_message: str = INTERNAL_ERROR_MESSAGE

    # Templates and messages
    app_name: str = "FileShelter"
    template_dir: str | Path | None = None  # Consulted before the built-in templates
    autoescape: bool = True
    messages: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    tos_custom: str | Path | None = None  # Custom terms-of-service HTML file

    # Sessions
    session_cookie: str = "shelter_session"
    max_sessions: int = 1000
