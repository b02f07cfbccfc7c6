"""Answer validators used by the install flow.

Every validator takes the raw value plus the answers collected so far and
returns the accepted value. Rejections raise ValueError carrying the message
shown to the operator before the question is asked again.
"""

import os
import re
import stat
from typing import Any, Callable, Dict, Mapping

HOSTNAME_PATTERN = re.compile(
    r'(([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*'
    r'([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9:\-]*[A-Za-z0-9])'
)

REQUIRED_MESSAGE = "This field is required."
HOSTNAME_MESSAGE = "Please enter a valid hostname."
ABSOLUTE_PATH_MESSAGE = "Please enter a valid absolute path."


def validate_not_empty(value: str, ctx: Mapping[str, Any]) -> str:
    """Reject empty or whitespace-only input.

    Args:
        value: Raw operator input
        ctx: Answers collected so far (unused)

    Returns:
        The input, unchanged

    Raises:
        ValueError: If the trimmed input is empty
    """
    if not str(value).strip():
        raise ValueError(REQUIRED_MESSAGE)

    return value


def validate_hostname(value: str, ctx: Mapping[str, Any]) -> str:
    """Accept DNS style hostnames such as dotbase.org or demo.dotbase.org.

    Labels are alphanumeric with inner hyphens. The final label may also
    carry colons in its interior.

    Raises:
        ValueError: If the input is empty or not a hostname
    """
    validate_not_empty(value, ctx)

    if not HOSTNAME_PATTERN.fullmatch(value):
        raise ValueError(HOSTNAME_MESSAGE)

    return value


def validate_absolute_path(value: str, ctx: Mapping[str, Any]) -> str:
    """Accept an absolute path pointing at an existing regular file.

    Symlinks are followed, so certificate paths such as
    /etc/letsencrypt/live/<host>/cert.pem are accepted. Any I/O error while
    checking is reported with the same generic message.

    Raises:
        ValueError: If the input is empty, relative, missing or not a file
    """
    validate_not_empty(value, ctx)

    if not value.startswith('/'):
        raise ValueError(ABSOLUTE_PATH_MESSAGE)

    try:
        mode = os.stat(value).st_mode
    except (OSError, ValueError):
        raise ValueError(ABSOLUTE_PATH_MESSAGE) from None

    if not stat.S_ISREG(mode):
        raise ValueError(ABSOLUTE_PATH_MESSAGE)

    return value


VALIDATORS: Dict[str, Callable[[Any, Mapping[str, Any]], Any]] = {
    'not_empty': validate_not_empty,
    'hostname': validate_hostname,
    'absolute_path': validate_absolute_path,
}
