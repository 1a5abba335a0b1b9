"""
Module containing helpers for deriving auth params from a ``clouds.yaml`` file.
"""

import yaml

from .. import errors


def load_clouds(path):
    """
    Loads the clouds data from the ``clouds.yaml`` file at the given path.
    """
    with open(path) as fh:
        return yaml.safe_load(fh)


def auth_params_from_clouds(data, cloud=None):
    """
    Returns the auth params for a cloud in the given clouds data.

    If no cloud is given, the first cloud that we find is used.
    """
    try:
        clouds = data["clouds"]
        cloud_data = clouds[cloud] if cloud else next(iter(clouds.values()))
    except (KeyError, TypeError, StopIteration):
        raise errors.ConfigError(f"cloud not found in clouds data: {cloud or '<first>'}")
    auth = cloud_data.get("auth", {})
    try:
        auth_params = {"authURL": auth["auth_url"]}
    except KeyError:
        raise errors.ConfigError("auth_url is not present in the cloud auth")
    auth_type = cloud_data.get("auth_type", "password")
    if auth_type == "v3applicationcredential":
        auth_params.update(
            appCredentialID=auth.get("application_credential_id", ""),
            appCredentialSecret=auth.get("application_credential_secret", ""),
        )
    elif auth_type in {"password", "v3password"}:
        # Only users identified by ID are supported, as no domain is sent
        auth_params.update(
            userID=auth.get("user_id", ""),
            password=auth.get("password", ""),
        )
        if auth.get("project_id"):
            auth_params.update(projectID=auth["project_id"])
    else:
        raise errors.ConfigError(f"Auth type not supported: {auth_type}")
    return auth_params
