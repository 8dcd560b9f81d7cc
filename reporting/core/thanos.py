"""httpx transports shaping requests sent to a Thanos querier.

Usage samples are collected from Thanos, which should deduplicate
replicated series and must not silently drop unreachable store nodes.
"""

import httpx

from reporting.core.config import settings


class ThanosTransport(httpx.BaseTransport):
    """Adds ``dedup=true`` to every request."""

    def __init__(self, transport: httpx.BaseTransport | None = None):
        self.transport = transport or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        request.url = request.url.copy_set_param("dedup", "true")
        return self.transport.handle_request(request)

    def close(self) -> None:
        self.transport.close()


class NoPartialResponseTransport(httpx.BaseTransport):
    """Adds ``partial_response=false`` to every request."""

    def __init__(self, transport: httpx.BaseTransport):
        self.transport = transport

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        request.url = request.url.copy_set_param("partial_response", "false")
        return self.transport.handle_request(request)

    def close(self) -> None:
        self.transport.close()


def thanos_client(
    base_url: str | None = None,
    allow_partial_responses: bool | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build an httpx client for querying Thanos.

    Args:
        base_url: Querier URL. Defaults to ``settings.PROMETHEUS_URL``.
        allow_partial_responses: Skip the partial_response parameter.
            Defaults to ``settings.THANOS_ALLOW_PARTIAL_RESPONSES``.
        transport: Innermost transport, mainly for tests.
    """
    if allow_partial_responses is None:
        allow_partial_responses = settings.THANOS_ALLOW_PARTIAL_RESPONSES

    chain: httpx.BaseTransport = ThanosTransport(transport)
    if not allow_partial_responses:
        chain = NoPartialResponseTransport(chain)

    return httpx.Client(base_url=base_url or settings.PROMETHEUS_URL, transport=chain)
