"""
Human-readable startup banner.
"""

import socket
from typing import List

import psutil

from office_server.config import DEFAULT_HOST, ResolvedConfig


def network_addresses() -> List[str]:
    """IPv4 addresses of every non-loopback interface."""
    addresses = []
    for interface_addrs in psutil.net_if_addrs().values():
        for addr in interface_addrs:
            if addr.family != socket.AF_INET or addr.address.startswith("127."):
                continue
            if addr.address not in addresses:
                addresses.append(addr.address)
    return addresses


def format_banner(config: ResolvedConfig) -> str:
    lines = [
        "",
        "  OpenClaw Office",
        "",
        f"  ➡  Local:   http://localhost:{config.port}",
    ]

    if config.host == DEFAULT_HOST:
        for address in network_addresses():
            lines.append(f"  ➡  Network: http://{address}:{config.port}")

    lines += ["", f"  ➡  Gateway: {config.gateway_url}"]

    if config.token:
        lines.append(f"  ✓  Token:   loaded (from {config.token_source})")
    else:
        lines += [
            "  ⚠  Token:   not found",
            "",
            "  To connect to Gateway, provide a token:",
            "    openclaw-office --token <your-token>",
            "    or install openclaw CLI and the token will be auto-detected",
        ]

    lines += ["", "  Press Ctrl+C to stop", ""]
    return "\n".join(lines)


def print_banner(config: ResolvedConfig) -> None:
    print(format_banner(config), flush=True)
