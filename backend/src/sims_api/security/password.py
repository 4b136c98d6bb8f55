"""Password hashing and verification utilities."""

import bcrypt


class PasswordService:
    """Service for bcrypt password hashing and verification."""

    BCRYPT_ROUNDS = 12

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds or self.BCRYPT_ROUNDS
        self._dummy_hash: str | None = None

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password
            hashed: Hashed password

        Returns:
            True if password matches
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, UnicodeDecodeError, UnicodeEncodeError):
            # Invalid hash format or encoding issues
            return False

    def burn_verification(self, password: str) -> None:
        """Spend one verification's worth of time without a real hash.

        Used when the email is unknown so the response time does not reveal
        whether the account exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash_password("sims-dummy-password")
        self.verify_password(password, self._dummy_hash)


# Singleton instance
_password_service: PasswordService | None = None


def get_password_service() -> PasswordService:
    """Get the password service singleton.

    Returns:
        PasswordService instance
    """
    global _password_service
    if _password_service is None:
        _password_service = PasswordService()
    return _password_service
