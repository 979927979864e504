import bcrypt

from textsafe.app.services.password_hasher import PasswordHasher

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt with a configurable cost factor (12 in production)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            # Malformed stored hash
            return False

    def verify_dummy(self, password: str) -> None:
        bcrypt.checkpw(_encode(password), self._dummy_hash)
