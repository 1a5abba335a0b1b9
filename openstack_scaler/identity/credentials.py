"""
Module containing the credentials that can be used to obtain OpenStack tokens.
"""

import dataclasses
import typing as t

from .. import errors


#: The keys that may contain the application credential ID
#: The first key is the documented one, the others are accepted for compatibility
APP_CREDENTIAL_ID_KEYS = ("appCredentialID", "appCredentialSecretID", "appCredentialSecretId")


@dataclasses.dataclass(frozen=True)
class PasswordCredential:
    """
    Credential for the password authentication method, using a user ID.
    """

    #: The ID of the user
    user_id: str
    #: The password of the user
    password: str = dataclasses.field(repr=False)
    #: The ID of the project to scope the token to, if any
    project_id: t.Optional[str] = None

    def get_identity(self):
        return dict(
            methods=["password"],
            password=dict(
                user=dict(
                    id=self.user_id,
                    password=self.password,
                )
            ),
        )

    def get_scope(self):
        if self.project_id:
            return dict(project=dict(id=self.project_id))
        else:
            return None


@dataclasses.dataclass(frozen=True)
class ApplicationCredential:
    """
    Credential for the application credential authentication method.

    Tokens issued for application credentials are always scoped to the project that
    the application credential belongs to, so no scope is ever requested.
    """

    #: The ID of the application credential
    id: str
    #: The secret for the application credential
    secret: str = dataclasses.field(repr=False)

    def get_identity(self):
        return dict(
            methods=["application_credential"],
            application_credential=dict(id=self.id, secret=self.secret),
        )

    def get_scope(self):
        return None


Credentials = t.Union[PasswordCredential, ApplicationCredential]


def token_request(credential: Credentials) -> dict:
    """
    Returns the body of the token request for the given credential.
    """
    auth = dict(identity=credential.get_identity())
    scope = credential.get_scope()
    if scope:
        auth.update(scope=scope)
    return dict(auth=auth)


def _get(params, key):
    value = params.get(key)
    return value.strip() if isinstance(value, str) else value


def _require(params, key):
    value = _get(params, key)
    if not value:
        raise errors.ConfigError(f"{key} doesn't exist in the auth params")
    return value


def parse_auth_params(auth_params: t.Mapping[str, str]) -> t.Tuple[str, Credentials]:
    """
    Parses the given auth params and returns an ``(auth_url, credential)`` tuple.

    If an application credential ID is given, the application credential method is
    used. Otherwise, a user ID must be given and the password method is used.
    """
    auth_url = _require(auth_params, "authURL")
    app_cred_id = next(
        (_get(auth_params, key) for key in APP_CREDENTIAL_ID_KEYS if _get(auth_params, key)),
        None,
    )
    if app_cred_id:
        credential = ApplicationCredential(
            app_cred_id,
            _require(auth_params, "appCredentialSecret"),
        )
    elif _get(auth_params, "userID"):
        credential = PasswordCredential(
            _require(auth_params, "userID"),
            _require(auth_params, "password"),
            _get(auth_params, "projectID") or None,
        )
    else:
        raise errors.ConfigError(
            "neither userID nor appCredentialID exist in the auth params"
        )
    return auth_url, credential
