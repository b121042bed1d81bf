"""Frontend bundle access and config injection."""

from office_server.assets.store import AssetStore, MIME_TYPES, content_type_for
from office_server.assets.injector import EntryDocumentInjector, build_config_script, inject_config

__all__ = [
    "AssetStore",
    "MIME_TYPES",
    "content_type_for",
    "EntryDocumentInjector",
    "build_config_script",
    "inject_config",
]
