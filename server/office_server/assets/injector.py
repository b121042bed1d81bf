"""
Runtime config injection into the frontend entry document.
"""

import json
import logging
from typing import Optional

from office_server.assets.store import AssetStore
from office_server.config import ResolvedConfig

logger = logging.getLogger(__name__)


HEAD_CLOSE = "</head>"
CONFIG_GLOBAL = "window.__OPENCLAW_CONFIG__"

# Keep the payload from closing the <script> element early
_SCRIPT_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
}


def build_config_script(config: ResolvedConfig) -> str:
    """<script> tag that exposes the gateway URL and token to the client app."""
    payload = json.dumps(
        {"gatewayUrl": config.gateway_url, "gatewayToken": config.token},
        separators=(",", ":"),
    )
    return f"<script>{CONFIG_GLOBAL}={payload.translate(_SCRIPT_ESCAPES)};</script>"


def inject_config(html: str, config: ResolvedConfig) -> str:
    """Insert the config script right before the first </head>, and nowhere else."""
    if HEAD_CLOSE not in html:
        logger.warning(f"Entry document has no {HEAD_CLOSE}, serving it without runtime config")
        return html
    return html.replace(HEAD_CLOSE, f"{build_config_script(config)}\n{HEAD_CLOSE}", 1)


class EntryDocumentInjector:
    """
    Builds the config-injected entry document on first use and keeps it for
    the life of the process.

    Two requests racing on an empty cache both compute the same result, so
    no lock is taken. A failed read is not cached.
    """

    def __init__(self, store: AssetStore, config: ResolvedConfig):
        self.store = store
        self.config = config
        self._html: Optional[str] = None

    @property
    def cached(self) -> bool:
        return self._html is not None

    async def render(self) -> str:
        """Get the injected entry document."""
        if self._html is not None:
            return self._html

        raw = await self.store.read_entry()
        self._html = inject_config(raw, self.config)
        logger.debug(f"Cached injected {self.store.entry_path.name} ({len(self._html)} chars)")
        return self._html
