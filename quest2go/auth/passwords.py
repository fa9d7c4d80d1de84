import bcrypt

from quest2go.core.errors import ValidationError

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hashing; the digest embeds its own salt and cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        try:
            encoded = password.encode()
        except UnicodeEncodeError as exc:
            # JSON admits lone surrogates, which have no UTF-8 form.
            raise ValidationError('Password contains invalid characters') from exc
        # bcrypt only reads the first 72 bytes; longer input would verify against any suffix.
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash; malformed hashes never match."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError, AttributeError):
            return False
