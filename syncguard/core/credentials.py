"""
Credential Storage

Encrypts passwords before they are written to the settings file. The
cipher itself is supplied by a SecretCodec implementation.

Author: SyncGuard Project
License: MIT
"""

from abc import ABC, abstractmethod


class SecretCodec(ABC):
    """Symmetric cipher used to store credentials."""

    @abstractmethod
    def encrypt(self, plaintext: str, key: str, salt: str) -> str:
        """Encrypt ``plaintext`` with ``key`` and ``salt``."""

    @abstractmethod
    def decrypt(self, ciphertext: str, key: str, salt: str) -> str:
        """Decrypt ``ciphertext`` produced by :meth:`encrypt`."""


class CredentialVault:
    """Binds a SecretCodec to the key and salt of one installation."""

    def __init__(self, codec: SecretCodec, key: str, salt: str):
        if not key or not salt:
            raise ValueError("Credential key and salt must not be empty")
        self.codec = codec
        self._key = key
        self._salt = salt

    @classmethod
    def from_config(cls, codec: SecretCodec, config) -> "CredentialVault":
        """
        Create a vault using the secrets from the ``security`` section.

        Raises:
            ValueError: If the config carries no key or salt
        """
        return cls(codec, config.security.secret_key, config.security.secret_salt)

    def encrypt_password(self, password: str) -> str:
        """Encrypt a password for storage in the config file."""
        return self.codec.encrypt(password, self._key, self._salt)

    def decrypt_password(self, encrypted: str) -> str:
        """Decrypt a stored password."""
        return self.codec.decrypt(encrypted, self._key, self._salt)
