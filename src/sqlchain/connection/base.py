"""Profile loading and credential handling shared by connectors."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import keyring
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from pydantic import SecretStr

from sqlchain.config import load_profile

# Profile keys consumed here and never handed to the driver
_LOCAL_KEYS = (
    "password",
    "private_key_file",
    "private_key_file_pwd",
    "private_key_passphrase_env",
    "use_keyring",
    "keyring_service",
    "keyring_username",
)


class BaseConnector:
    """Load a profile, apply overrides and resolve credentials"""

    def __init__(self, profile: str, **kwargs: Any) -> None:
        """Initialize the connector with a configuration profile and optional parameter overrides"""
        self.password: Optional[SecretStr] = None
        self.private_key: Optional[bytes] = None

        self._cfg: Dict[str, Any] = load_profile(profile)
        self._cfg.update(kwargs)
        self._profile = profile
        self._process_auth()

    def _process_auth(self) -> None:
        """Pick keypair or password authentication based on the profile"""
        auth = str(self._cfg.get("authenticator", "")).upper()

        if auth == "SNOWFLAKE_JWT":
            self._process_keypair_auth()
        elif self._cfg.get("password"):
            self.password = SecretStr(str(self._cfg["password"]))
        elif self._cfg.get("use_keyring", False):
            stored = keyring.get_password(self._keyring_service(), self._keyring_username())
            if stored:
                self.password = SecretStr(stored)

    def _process_keypair_auth(self) -> None:
        """Load the private key and keep it as unencrypted PKCS8 DER bytes"""
        key_path, passphrase = self._get_key_details()

        try:
            with open(key_path, "rb") as key_file:
                p_key_bytes = key_file.read()

            p_key = serialization.load_pem_private_key(
                p_key_bytes,
                password=passphrase.get_secret_value().encode() if passphrase else None,
                backend=default_backend()
            )
        except Exception as e:
            raise IOError(f"Failed to read or decrypt private key from {key_path}: {e}") from e

        self.private_key = p_key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def _keyring_service(self) -> str:
        return self._cfg.get("keyring_service", f"sqlchain.{self._profile}")

    def _keyring_username(self) -> str:
        username = self._cfg.get("keyring_username", self._cfg.get("user"))
        if not username:
            raise ValueError(
                "Keyring usage requires 'user' in profile or 'keyring_username' override."
            )
        return username

    def _get_key_details(self) -> tuple[Path, Optional[SecretStr]]:
        """Validate the key path and find its passphrase in the environment or keyring"""
        private_key_file = self._cfg.get("private_key_file")
        if not private_key_file:
            raise ValueError(
                "Keypair authentication requires 'private_key_file' in profile configuration"
            )

        key_path = Path(private_key_file).expanduser()

        # Only allow absolute paths or home directory expansion
        if not key_path.is_absolute():
            raise ValueError(
                f"Private key path must be absolute or use ~ for home directory. Got: {private_key_file}"
            )

        if not key_path.exists():
            raise FileNotFoundError(f"Private key file not found: {key_path}")

        passphrase: Optional[SecretStr] = None

        if self._cfg.get("private_key_file_pwd"):
            passphrase = SecretStr(str(self._cfg["private_key_file_pwd"]))

        passphrase_env_var = self._cfg.get("private_key_passphrase_env")
        if not passphrase and passphrase_env_var:
            env_pass = os.environ.get(passphrase_env_var)
            if env_pass:
                passphrase = SecretStr(env_pass)

        if not passphrase and self._cfg.get("use_keyring", False):
            keyring_pass = keyring.get_password(self._keyring_service(), self._keyring_username())
            if keyring_pass:
                passphrase = SecretStr(keyring_pass)

        return key_path, passphrase

    def connect_params(self) -> Dict[str, Any]:
        """Parameters for the driver's connect() with credentials resolved"""
        params = {k: v for k, v in self._cfg.items() if k not in _LOCAL_KEYS}
        if self.private_key is not None:
            params["private_key"] = self.private_key
        elif self.password is not None:
            params["password"] = self.password.get_secret_value()
        return params
