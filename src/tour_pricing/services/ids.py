"""
Short identifier generation for catalog entities.

The store never assigns ids itself; callers generate them here.
"""
import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits


def generate_short_id(length: int = 8) -> str:
    """Random lowercase alphanumeric id."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def new_route_id() -> str:
    return f"route-{generate_short_id()}"


def new_package_id() -> str:
    return f"pkg-{generate_short_id()}"


def new_user_id() -> str:
    return f"user-{generate_short_id()}"
