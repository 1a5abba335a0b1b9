from .credentials import (  # noqa: F401
    ApplicationCredential,
    Credentials,
    PasswordCredential,
    parse_auth_params,
)
from .session import Session  # noqa: F401
