"""Tests for token auto-detection and the fallback chain."""

import pytest

from office_server.credentials import CandidateFile, default_candidates, extract_gateway_token
from office_server.fallback import first_present


class TestExtractGatewayToken:
    """Digging gateway.auth.token out of parsed documents."""

    def test_nested_token(self):
        assert extract_gateway_token({"gateway": {"auth": {"token": "abc"}}}) == "abc"

    def test_missing_or_wrong_shape(self):
        """Anything but a non-empty string at the key path is no token."""
        assert extract_gateway_token({}) is None
        assert extract_gateway_token({"gateway": {}}) is None
        assert extract_gateway_token({"gateway": "token"}) is None
        assert extract_gateway_token({"gateway": {"auth": ["token"]}}) is None
        assert extract_gateway_token({"gateway": {"auth": {"token": ""}}}) is None
        assert extract_gateway_token({"gateway": {"auth": {"token": 42}}}) is None
        assert extract_gateway_token([1, 2, 3]) is None
        assert extract_gateway_token(None) is None


class TestCandidateFile:
    """Probing a single config file."""

    def test_missing_file(self, home):
        assert CandidateFile(home / "nope.json").probe() is None

    def test_invalid_json(self, home, write_cli_config):
        path = write_cli_config(home / "bad.json", "{\"gateway\": ")
        assert CandidateFile(path).probe() is None

    def test_directory_instead_of_file(self, home):
        (home / "dir.json").mkdir()
        assert CandidateFile(home / "dir.json").probe() is None

    def test_not_utf8(self, home):
        path = home / "binary.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        assert CandidateFile(path).probe() is None

    def test_deeply_nested_json(self, home, write_cli_config):
        """Nesting too deep for the parser is just another unreadable file."""
        path = write_cli_config(home / "deep.json", "[" * 200000 + "]" * 200000)
        assert CandidateFile(path).probe() is None

    def test_custom_extractor(self, home, write_cli_config):
        """Extractors make the probe reusable for other document shapes."""
        path = write_cli_config(home / "alt.json", {"token": "flat"})
        candidate = CandidateFile(path, extractor=lambda doc: doc.get("token"))
        assert candidate.probe() == "flat"


class TestDefaultCandidates:
    """Well-known config file locations."""

    def test_order(self, home):
        paths = [c.path for c in default_candidates(home)]
        assert paths == [
            home / ".openclaw" / "openclaw.json",
            home / ".clawdbot" / "clawdbot.json",
        ]

    def test_first_valid_file_wins(self, home, write_cli_config):
        """Discovery stops at the first file with a token and never merges."""
        write_cli_config(home / ".openclaw" / "openclaw.json", {"gateway": {"auth": {"token": "new"}}})
        write_cli_config(home / ".clawdbot" / "clawdbot.json", {"gateway": {"auth": {"token": "old"}}})

        result = first_present((str(c.path), c.probe) for c in default_candidates(home))

        assert result == ("new", str(home / ".openclaw" / "openclaw.json"))

    def test_deeply_nested_first_file_falls_through(self, home, write_cli_config):
        write_cli_config(home / ".openclaw" / "openclaw.json", "[" * 200000 + "]" * 200000)
        write_cli_config(home / ".clawdbot" / "clawdbot.json", {"gateway": {"auth": {"token": "old"}}})

        result = first_present((str(c.path), c.probe) for c in default_candidates(home))

        assert result == ("old", str(home / ".clawdbot" / "clawdbot.json"))

    def test_empty_token_falls_through(self, home, write_cli_config):
        write_cli_config(home / ".openclaw" / "openclaw.json", {"gateway": {"auth": {"token": ""}}})
        write_cli_config(home / ".clawdbot" / "clawdbot.json", {"gateway": {"auth": {"token": "old"}}})

        result = first_present((str(c.path), c.probe) for c in default_candidates(home))

        assert result == ("old", str(home / ".clawdbot" / "clawdbot.json"))


class TestFirstPresent:
    """The ordered fallback chain."""

    def test_first_non_empty_wins(self):
        assert first_present([("a", lambda: ""), ("b", lambda: None), ("c", lambda: "x")]) == ("x", "c")

    def test_nothing_present(self):
        assert first_present([("a", lambda: ""), ("b", lambda: None)]) is None
        assert first_present([]) is None

    def test_later_probes_not_called(self):
        """Probes after the winner are never evaluated."""
        calls = []

        def probe(name, value):
            def run():
                calls.append(name)
                return value
            return run

        result = first_present([("a", probe("a", "")), ("b", probe("b", "hit")), ("c", probe("c", "late"))])

        assert result == ("hit", "b")
        assert calls == ["a", "b"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
