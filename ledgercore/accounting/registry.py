"""Read-only chart of accounts keyed by account code."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Union

from .errors import MissingAccountRegistry
from .models import Account


class AccountRegistry:
    """Normalized chart of accounts used to map journal entries."""

    def __init__(self, accounts: Iterable[Account]) -> None:
        index: Dict[str, Account] = {}
        for account in accounts:
            if account.code in index:
                raise ValueError(f"Account '{account.code}' already exists")
            index[account.code] = account
        self._accounts = {code: index[code] for code in sorted(index)}

    @classmethod
    def coerce(
        cls, accounts: Union["AccountRegistry", Iterable[Account], None]
    ) -> "AccountRegistry":
        if accounts is None:
            raise MissingAccountRegistry("An account registry is required")
        if isinstance(accounts, cls):
            return accounts
        return cls(accounts)

    def lookup(self, code: Optional[str]) -> Optional[Account]:
        if code is None:
            return None
        return self._accounts.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)


__all__ = ["AccountRegistry"]
