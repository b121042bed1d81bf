"""
OpenClaw Office - Main Application Entry Point

Serves the pre-built Office frontend and injects the gateway URL and auth
token into its entry document, so the browser app can connect to the
OpenClaw gateway without a rebuild.
"""

import argparse
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

import structlog
import uvicorn
from fastapi import FastAPI

from office_server import __version__
from office_server.api import frontend_route
from office_server.assets import AssetStore, EntryDocumentInjector
from office_server.banner import print_banner
from office_server.config import (
    DEFAULT_GATEWAY_URL,
    DEFAULT_PORT,
    ConfigOverrides,
    ResolvedConfig,
    get_settings,
    parse_port,
    resolve_config,
)

# Bundle produced by the frontend build, next to the server/ directory
DEFAULT_DIST_DIR = Path(__file__).resolve().parents[2] / "dist"


def setup_logging(level: str = "info"):
    """Configure structured logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        stream=sys.stdout
    )

    # Request lines are noise for a static frontend server
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger = structlog.get_logger()
    config: ResolvedConfig = app.state.config
    assets: AssetStore = app.state.assets

    if not assets.entry_path.is_file():
        logger.warning("Entry document missing, is the frontend built?", path=str(assets.entry_path))

    logger.info(
        "Office server starting",
        host=config.host,
        port=config.port,
        gateway_url=config.gateway_url,
        token_loaded=bool(config.token),
        token_source=config.token_source or None,
    )

    yield

    logger.info("Office server stopped")


class OfficeServer(uvicorn.Server):
    """uvicorn server that prints the startup banner once the socket is bound."""

    def __init__(self, uvicorn_config: uvicorn.Config, office_config: ResolvedConfig):
        super().__init__(uvicorn_config)
        self.office_config = office_config

    async def startup(self, sockets=None) -> None:
        # A failed bind exits inside super().startup(), before the banner
        await super().startup(sockets=sockets)
        if self.started and not self.should_exit:
            print_banner(self.office_config)


def create_app(config: ResolvedConfig, assets: AssetStore) -> FastAPI:
    """Build the app around an already resolved config."""
    app = FastAPI(
        title="OpenClaw Office",
        version=__version__,
        lifespan=lifespan,
        # The catch-all route owns every path, including these
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.config = config
    app.state.assets = assets
    app.state.injector = EntryDocumentInjector(assets, config)

    app.router.routes.append(frontend_route)
    return app


# =============================================================================
# Command line
# =============================================================================

EPILOG = """\
Token auto-detection:
  The token is resolved in this order:
  1. --token flag
  2. OPENCLAW_GATEWAY_TOKEN environment variable
  3. Auto-read from ~/.openclaw/openclaw.json (or ~/.clawdbot/clawdbot.json)

Examples:
  openclaw-office
  openclaw-office --token my-secret-token
  openclaw-office --gateway ws://192.168.1.100:18789
  PORT=3000 openclaw-office
"""


def port_arg(value: str) -> int:
    """argparse type for --port."""
    try:
        port = parse_port(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    if port is None:
        raise argparse.ArgumentTypeError("port must not be empty")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openclaw-office",
        description="OpenClaw Office - Visual monitoring frontend for OpenClaw",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-t", "--token", default="", help="Gateway auth token")
    parser.add_argument(
        "-g", "--gateway", default="", metavar="URL",
        help=f"Gateway WebSocket URL (default: {DEFAULT_GATEWAY_URL})",
    )
    parser.add_argument(
        "-p", "--port", type=port_arg, default=None,
        help=f"Server port (default: {DEFAULT_PORT}, or PORT env)",
    )
    parser.add_argument("--host", default="", help="Bind address (default: 0.0.0.0, or HOST env)")
    parser.add_argument(
        "--dist", default=None, metavar="DIR",
        help="Frontend bundle directory (default: OPENCLAW_OFFICE_DIST env, or the project dist/)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(settings.log_level)

    config = resolve_config(
        ConfigOverrides(
            token=args.token,
            gateway_url=args.gateway,
            port=args.port,
            host=args.host,
        ),
        settings,
    )
    assets = AssetStore(args.dist or settings.dist_dir or DEFAULT_DIST_DIR)

    server = OfficeServer(
        uvicorn.Config(
            create_app(config, assets),
            host=config.host,
            port=config.port,
            log_level=settings.log_level.lower()
        ),
        config,
    )
    server.run()


if __name__ == "__main__":
    main()
