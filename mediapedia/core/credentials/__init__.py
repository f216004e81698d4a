from __future__ import annotations

from .vault import ACCOUNTS, OMDB_ACCOUNT, TMDB_ACCOUNT, ApiKeys, CredentialVault

__all__ = ["ACCOUNTS", "OMDB_ACCOUNT", "TMDB_ACCOUNT", "ApiKeys", "CredentialVault"]
