"""bcrypt password hasher."""

import bcrypt

BCRYPT_PREFIX = "$2"
# bcrypt only looks at the first 72 bytes; newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:MAX_PASSWORD_BYTES]


class BcryptPasswordHasher:
    """Hashes passwords with bcrypt at a fixed cost."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode())
        except ValueError:
            return False

    def is_hash(self, stored: str) -> bool:
        """True if stored looks like a bcrypt hash rather than a legacy plaintext."""
        return stored.startswith(BCRYPT_PREFIX)
