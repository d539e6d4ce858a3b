"""bcrypt implementation of PasswordHasher."""

import bcrypt

# 12 rounds (2^12 = 4096 iterations) is the production default.
DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt's input limit; newer releases raise instead of truncating.
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher:
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash password with a fresh salt. Returns the bcrypt string.

        Raises ValueError for passwords over 72 bytes; callers validate first.
        """
        encoded = password.encode('utf-8')
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode('utf-8')

    def verify(self, password: str, hashed: str) -> bool:
        """Constant-time check of password against a stored bcrypt hash.

        A missing or malformed hash never matches, and neither does a
        password too long to have been hashed.
        """
        encoded = password.encode('utf-8')
        if not hashed or len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode('utf-8'))
        except ValueError:
            return False
