from __future__ import annotations

from dataclasses import dataclass

# largest amount a 32-bit money column holds
MAX_AMOUNT = 2**31 - 1


@dataclass(frozen=True)
class Money:
    """Amount in minor currency units (fils, cents...)."""

    amount: int
    currency: str

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("amount must be an integer number of minor units")
        if self.amount < 0:
            raise ValueError("amount must be >= 0")
        if self.amount > MAX_AMOUNT:
            raise ValueError(f"amount must be <= {MAX_AMOUNT}")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")

    def times(self, quantity: int) -> Money:
        return Money(amount=self.amount * quantity, currency=self.currency)
