"""woa: wake machines on your network over UDP or HTTP."""

__version__ = "0.1.0"

# Overridden at build time by the release pipeline.
__commit__ = "none"
__date__ = "unknown"
