"""
Gateway token auto-detection from locally installed OpenClaw CLI config files.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


# Key path of the token inside the CLI config document
TOKEN_KEY_PATH = ("gateway", "auth", "token")


def extract_gateway_token(document: Any) -> Optional[str]:
    """Pull gateway.auth.token out of a parsed config document."""
    node = document
    for key in TOKEN_KEY_PATH:
        if not isinstance(node, dict):
            return None
        node = node.get(key)

    if isinstance(node, str) and node:
        return node
    return None


@dataclass(frozen=True)
class CandidateFile:
    """A config file that may hold a token, plus how to dig it out."""
    path: Path
    extractor: Callable[[Any], Optional[str]] = extract_gateway_token

    def probe(self) -> Optional[str]:
        """
        Read and parse the file, then run the extractor.
        Any read or parse failure is reported as "no token here".
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
            document = json.loads(raw)
        except (OSError, ValueError, RecursionError) as e:
            logger.debug(f"No token from {self.path}: {e}")
            return None

        return self.extractor(document)


def default_candidates(home: Optional[Path] = None) -> List[CandidateFile]:
    """Well-known config locations, checked in this order."""
    home = home if home is not None else Path.home()
    return [
        CandidateFile(home / ".openclaw" / "openclaw.json"),
        CandidateFile(home / ".clawdbot" / "clawdbot.json"),
    ]
