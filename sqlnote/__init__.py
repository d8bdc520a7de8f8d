"""sqlnote - SQL completion engine for notebook and interpreter hosts."""

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "CompletionEngine",
    "CompletionSettings",
    "ConnectionConfig",
    "ConnectionSession",
]

try:
    __version__ = version("sqlnote")
except PackageNotFoundError:
    __version__ = "0.0.0.dev"

if TYPE_CHECKING:
    from sqlnote.config import CompletionSettings
    from sqlnote.domains.connections.app.session import ConnectionSession
    from sqlnote.domains.connections.domain.config import ConnectionConfig
    from sqlnote.domains.query.completion.engine import CompletionEngine


def __getattr__(name: str) -> Any:
    """Lazy import so that importing the package does not load drivers or textual."""
    if name == "CompletionEngine":
        from sqlnote.domains.query.completion.engine import CompletionEngine

        return CompletionEngine
    if name == "CompletionSettings":
        from sqlnote.config import CompletionSettings

        return CompletionSettings
    if name == "ConnectionConfig":
        from sqlnote.domains.connections.domain.config import ConnectionConfig

        return ConnectionConfig
    if name == "ConnectionSession":
        from sqlnote.domains.connections.app.session import ConnectionSession

        return ConnectionSession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
