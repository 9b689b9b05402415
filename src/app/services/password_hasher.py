import bcrypt


class BcryptPasswordHasher:
    """
    Credential hashing policy backed by bcrypt.

    The cost factor is configuration (BCRYPT_ROUNDS); every hash embeds its
    own salt and cost, so hashes produced under an older cost still verify.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            # Malformed stored hash or a password bcrypt refuses (over 72 bytes)
            return False

    def dummy_verify(self) -> None:
        """Spend the same time as a real check when there is no account to check against."""
        bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(self.rounds))
