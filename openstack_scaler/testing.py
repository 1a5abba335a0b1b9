"""
Helpers for testing against fake OpenStack endpoints.
"""

import json

import httpx

from .settings import load_settings
from .transport import build_client


AUTH_URL = "http://keystone.test/v3"
TOKENS_PATH = "/v3/auth/tokens"


class FakeOpenStack:
    """
    Fake identity service plus any other endpoints registered with :py:meth:`route`.

    Use :py:meth:`client` to get an HTTPX client whose requests are served by the
    fake.
    """

    def __init__(self):
        #: All the requests that have been received
        self.requests = []
        #: The tokens that the fake considers valid
        self.valid_tokens = set()
        #: The status code to use when issuing tokens
        self.token_status = 201
        #: The body to use when refusing to issue a token
        self.token_error = (
            '{"error": {"message": '
            '"The request you have made requires authentication."}}'
        )
        self.routes = {}
        self._issued = 0

    def route(self, method, path, status_code=200, **kwargs):
        """
        Register the response for a method and path.

        The keyword arguments are passed to :py:class:`httpx.Response`, and a new
        response is built for each request.
        """
        self.routes[(method, path)] = lambda request: httpx.Response(status_code, **kwargs)

    def expire_tokens(self):
        self.valid_tokens.clear()

    def requests_for(self, method, path):
        return [
            request
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    def _tokens(self, request):
        if request.method == "POST":
            if self.token_status >= 300:
                return httpx.Response(self.token_status, text=self.token_error)
            methods = json.loads(request.content)["auth"]["identity"]["methods"]
            self._issued += 1
            token = f"token-{self._issued}"
            self.valid_tokens.add(token)
            return httpx.Response(
                self.token_status,
                headers={"X-Subject-Token": token},
                json={"token": {"methods": methods}},
            )
        elif request.method == "HEAD":
            token = request.headers.get("X-Subject-Token")
            if token == request.headers.get("X-Auth-Token") and token in self.valid_tokens:
                return httpx.Response(200)
            return httpx.Response(404)
        return httpx.Response(405)

    def handler(self, request):
        self.requests.append(request)
        if request.url.path == TOKENS_PATH:
            return self._tokens(request)
        try:
            respond = self.routes[(request.method, request.url.path)]
        except KeyError:
            return httpx.Response(404, text="Not Found")
        return respond(request)

    def client(self):
        settings = load_settings({"REQUEST_TIMEOUT": 5})
        return build_client(settings, transport=httpx.MockTransport(self.handler))


def failing_client(message="connection refused"):
    """
    Returns an HTTPX client for which every request fails to connect.
    """

    def handler(request):
        raise httpx.ConnectError(message, request=request)

    settings = load_settings({"REQUEST_TIMEOUT": 5})
    return build_client(settings, transport=httpx.MockTransport(handler))
