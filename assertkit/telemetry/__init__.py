from assertkit.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
