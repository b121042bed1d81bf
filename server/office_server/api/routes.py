"""
Request dispatch for the Office frontend.

Every path and method lands on one catch-all endpoint. The root and the
entry document get the config-injected HTML, existing files are served
as-is, and anything else falls back to the injected HTML so client-side
routing can take over.
"""

import structlog
from fastapi import HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from office_server.assets import AssetStore, EntryDocumentInjector, content_type_for

logger = structlog.get_logger(__name__)


# =============================================================================
# Helpers
# =============================================================================

async def entry_response(injector: EntryDocumentInjector) -> HTMLResponse:
    """Injected entry document, or a 500 if the bundle is broken."""
    try:
        html = await injector.render()
    except OSError as e:
        logger.error("Entry document unavailable", path=str(injector.store.entry_path), error=str(e))
        raise HTTPException(status_code=500, detail="Entry document unavailable") from e

    return HTMLResponse(content=html, status_code=200)


async def dispatch(path: str, store: AssetStore, injector: EntryDocumentInjector) -> Response:
    """Pick a response for an already percent-decoded request path."""
    # Covers "/", "/index.html" and spellings like "//index.html" or "/./index.html/"
    if path == "/" or store.is_entry(path):
        return await entry_response(injector)

    content = await store.read(path)
    if content is not None:
        return Response(content=content, status_code=200, media_type=content_type_for(path))

    # SPA fallback for client-side routes
    return await entry_response(injector)


# =============================================================================
# Catch-all endpoint
# =============================================================================

class FrontendEndpoint:
    """
    Raw ASGI endpoint, so the route accepts every HTTP method instead of a
    fixed list.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        # scope["path"] is already percent-decoded by the server
        response = await dispatch(
            request.scope["path"],
            request.app.state.assets,
            request.app.state.injector,
        )
        await response(scope, receive, send)


# No methods list: Starlette leaves ASGI endpoints open to all methods
frontend_route = Route("/{full_path:path}", endpoint=FrontendEndpoint(), include_in_schema=False)
