"""HTTP server shell with a recovery / request-logging pipeline and graceful shutdown."""

__version__ = "0.1.0"
