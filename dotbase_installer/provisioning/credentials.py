"""Derived secrets - credentials the installer generates itself."""

import secrets
import string
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

PASSWORD_MIN_LENGTH = 50
PASSWORD_LENGTH_SPREAD = 5
CLIENT_SECRET_LENGTH = 32

# Characters that are easy to confuse when read or typed
SIMILAR_CHARACTERS = 'ilLI1|`oO0'

SERVICE_ACCOUNTS = ('IDENTITY_ADMIN', 'DATABASE')

ADJECTIVES = (
    'agile', 'bold', 'brave', 'bright', 'calm', 'clever', 'eager', 'fancy',
    'gentle', 'happy', 'jolly', 'kind', 'lively', 'lucky', 'merry', 'nimble',
    'proud', 'quick', 'quiet', 'rapid', 'smart', 'steady', 'swift', 'witty',
)
COLORS = (
    'amber', 'aqua', 'azure', 'beige', 'black', 'blue', 'bronze', 'coral',
    'cyan', 'gold', 'gray', 'green', 'indigo', 'ivory', 'jade', 'lime',
    'magenta', 'maroon', 'olive', 'orange', 'pink', 'purple', 'red', 'silver',
    'teal', 'violet', 'white', 'yellow',
)
ANIMALS = (
    'badger', 'beaver', 'bison', 'camel', 'cheetah', 'crane', 'dolphin',
    'eagle', 'falcon', 'ferret', 'gecko', 'heron', 'ibex', 'jaguar', 'koala',
    'lemur', 'lynx', 'marmot', 'narwhal', 'otter', 'panda', 'puffin', 'raven',
    'salmon', 'tapir', 'walrus', 'wombat', 'zebra',
)


def _strip_similar(pool: str) -> str:
    return ''.join(char for char in pool if char not in SIMILAR_CHARACTERS)


def generate_password(length: Optional[int] = None, numbers: bool = True, strict: bool = True) -> str:
    """Generate a random password.

    Args:
        length: Exact length. When None a length between PASSWORD_MIN_LENGTH
            and PASSWORD_MIN_LENGTH + PASSWORD_LENGTH_SPREAD is drawn.
        numbers: Include digits
        strict: Require at least one character from every pool

    Returns:
        Password made of letters (and digits) without similar characters
    """
    if length is None:
        length = PASSWORD_MIN_LENGTH + secrets.randbelow(PASSWORD_LENGTH_SPREAD + 1)

    pools = [_strip_similar(string.ascii_lowercase), _strip_similar(string.ascii_uppercase)]
    if numbers:
        pools.append(_strip_similar(string.digits))

    if strict and length < len(pools):
        raise ValueError(f"Length must be at least {len(pools)} for a strict password")

    alphabet = ''.join(pools)
    while True:
        password = ''.join(secrets.choice(alphabet) for _ in range(length))
        if not strict or all(any(char in pool for char in password) for pool in pools):
            return password


def generate_client_secret() -> str:
    return generate_password(CLIENT_SECRET_LENGTH)


def generate_username() -> str:
    """Random adjective + color + animal, e.g. 'swiftcoralotter'."""
    return ''.join(secrets.choice(words) for words in (ADJECTIVES, COLORS, ANIMALS))


@dataclass(frozen=True)
class DerivedSecrets:
    """Values generated once per run and merged into the final render context."""

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    def __len__(self) -> int:
        return len(self.values)

    def merged_with(self, answers: Mapping[str, Any]) -> Dict[str, Any]:
        """Build a render context; operator answers win on name clashes."""
        context = dict(self.values)
        context.update(answers)
        return context


def generate_derived_secrets(accounts: Iterable[str] = SERVICE_ACCOUNTS) -> DerivedSecrets:
    """Generate client/signing secrets and one login per service account."""
    values = {
        'CLIENT_SECRET': generate_client_secret(),
        'SIGNING_SECRET': generate_password(),
    }
    for account in accounts:
        values[f'{account}_USERNAME'] = generate_username()
        values[f'{account}_PASSWORD'] = generate_password()
    return DerivedSecrets(values)
