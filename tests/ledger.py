"""Subject whose annotations name a type imported only for type checkers."""
from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from decimal import Decimal


class Ledger:
    def __init__(self) -> None:
        self.entries = []

    def post(self, amount: Decimal) -> None:
        self.entries.append(amount)

    def balance(self, currency: str) -> tuple[int, Decimal]:
        return len(self.entries), sum(self.entries)

    def memo(self, amount: Decimal, note: str) -> str:
        return f"{note}: {amount}"

    def tags(self, names: List[str]) -> Optional[str]:
        return names[0] if names else None
