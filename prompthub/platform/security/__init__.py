from prompthub.platform.security.auth import get_current_user, get_optional_user
from prompthub.platform.security.jwt import create_access_token

__all__ = ["create_access_token", "get_current_user", "get_optional_user"]
