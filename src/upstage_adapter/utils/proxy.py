"""Outbound proxy resolution from the process environment."""

import os
from collections.abc import Mapping

from upstage_adapter.constants import PROXY_ENV_VARS


def get_proxy_url(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the proxy address the client should route through.

    Variables are checked in the order HTTPS_PROXY, https_proxy,
    HTTP_PROXY, http_proxy and the first non-empty value wins.

    Args:
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Proxy URL or None when no proxy is configured
    """
    env = os.environ if environ is None else environ
    for name in PROXY_ENV_VARS:
        value = env.get(name)
        if value:
            return value
    return None
