"""Utility functions package."""

from upstage_adapter.utils.logger import ErrorSink, configure_logging, get_logger
from upstage_adapter.utils.proxy import get_proxy_url

__all__ = ["ErrorSink", "configure_logging", "get_logger", "get_proxy_url"]
