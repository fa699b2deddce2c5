"""Argon2 password hashing with an application-wide pepper."""

from pwdlib import PasswordHash

_password_hash = PasswordHash.recommended()

# Checked against when the e-mail is unknown so both login paths cost the same
_DUMMY_HASH = _password_hash.hash("dummy-password-for-timing")


class PepperedPasswordHasher:
    """
    Hashes passwords as ``argon2(password + pepper)``.

    The pepper comes from settings and is never stored next to the hashes;
    changing it invalidates every stored password.
    """

    def __init__(self, pepper: str = "") -> None:
        self._pepper = pepper

    def hash_password(self, plain_password: str) -> str:
        return _password_hash.hash(plain_password + self._pepper)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return _password_hash.verify(plain_password + self._pepper, hashed_password)

    def get_dummy_hash(self) -> str:
        return _DUMMY_HASH
