"""
Module containing the session that holds an OpenStack token.
"""

import functools
import logging

import httpx

from .. import errors
from . import credentials


logger = logging.getLogger(__name__)


def convert_httpx_exceptions(f):
    """
    Decorator that converts HTTPX exceptions into auth errors.
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except httpx.HTTPError as exc:
            logger.exception("Could not connect to the identity service.")
            raise errors.AuthError(
                f"Could not connect to the identity service: {exc}"
            ) from exc

    return wrapper


class OpenStackAuth(httpx.Auth):
    """
    Authentication scheme for OpenStack requests.
    """

    def __init__(self, token):
        self.token = token

    def auth_flow(self, request):
        request.headers["X-Auth-Token"] = self.token
        yield request


class Session:
    """
    Session holding the token for an OpenStack credential.

    The HTTPX client is shared with other sessions and is not owned by the session.
    The token is unknown until the first one is issued and is never assumed to be
    valid without checking with the identity service.
    """

    def __init__(self, auth_url, credential: credentials.Credentials, client: httpx.Client):
        self.auth_url = auth_url.rstrip("/")
        self.token_url = f"{self.auth_url}/auth/tokens"
        self.credential = credential
        self.client = client
        self.token = None

    def auth(self) -> OpenStackAuth:
        """
        Returns an HTTPX auth for the current token.
        """
        return OpenStackAuth(self.token)

    @convert_httpx_exceptions
    def issue_token(self, timeout=httpx.USE_CLIENT_DEFAULT) -> str:
        """
        Obtains a new token from the identity service and stores it on the session.
        """
        logger.info("Requesting token from %s", self.token_url)
        response = self.client.post(
            self.token_url,
            json=credentials.token_request(self.credential),
            timeout=timeout,
        )
        if not response.is_success:
            raise errors.AuthError(response.text, response.status_code)
        try:
            token = response.headers["X-Subject-Token"]
        except KeyError:
            raise errors.AuthError(
                "Token response did not include X-Subject-Token header",
                response.status_code,
            )
        self.token = token
        return token

    @convert_httpx_exceptions
    def is_token_valid(self, timeout=httpx.USE_CLIENT_DEFAULT) -> bool:
        """
        Returns true if the identity service considers the current token valid.
        """
        if not self.token:
            return False
        response = self.client.head(
            self.token_url,
            headers={"X-Subject-Token": self.token},
            auth=self.auth(),
            timeout=timeout,
        )
        logger.debug("Token check returned status %s", response.status_code)
        # Anything below a client error means the token exists and is usable
        return response.status_code < 400

    def ensure_valid(self, timeout=httpx.USE_CLIENT_DEFAULT) -> str:
        """
        Returns a valid token, issuing a new token if the current one is not valid.

        If the validity check itself fails, the error is raised without attempting
        to issue a new token.

        The timeout may be a callable, in which case it is called before each request
        to get the timeout for that request.
        """
        get_timeout = timeout if callable(timeout) else lambda: timeout
        if not self.is_token_valid(timeout=get_timeout()):
            logger.info("Token is not valid, re-authenticating")
            self.issue_token(timeout=get_timeout())
        return self.token

    def close(self):
        # The client is shared, so only the token is discarded
        self.token = None
