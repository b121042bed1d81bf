"""OpenClaw Office: serves the Office frontend with runtime gateway config."""

__version__ = "1.0.0"
