"""GitHub username validation."""

import re

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9]([a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?")


def validate_username(username: str) -> bool:
    """
    Check a username against GitHub's login rules.

    1 to 39 characters, alphanumerics and hyphens, not starting or ending
    with a hyphen.

    Args:
        username (str): Candidate username

    Returns:
        bool: True when the username is acceptable
    """
    if not isinstance(username, str):
        return False
    return USERNAME_PATTERN.fullmatch(username) is not None
