"""
Module containing helpers for building the HTTP client shared by all sessions.
"""

import logging

import httpx


logger = logging.getLogger(__name__)


def build_client(settings, transport=None):
    """
    Returns an HTTPX client configured using the given settings.

    The client is intended to be created once per process and shared by every
    session, so that connections are pooled. An HTTPX transport can be given to
    replace the default network transport.
    """
    logger.debug(
        "Building shared HTTP client (timeout=%s, verify=%s)",
        settings.REQUEST_TIMEOUT,
        settings.VERIFY_SSL,
    )
    kwargs = dict(timeout=settings.REQUEST_TIMEOUT, verify=settings.VERIFY_SSL)
    if transport is not None:
        kwargs.update(transport=transport)
    return httpx.Client(**kwargs)
