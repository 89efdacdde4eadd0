"""Money value object with currency"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = "COP"

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not self.currency:
            raise ValueError("Currency required")

    def to_bold_amount(self) -> str:
        """Whole-unit string Bold expects, rounded half up (1500.5 -> "1501")."""
        return str(int(self.amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))

    def format_cop(self) -> str:
        """Colombian peso display without decimals: $ 1.500.000"""
        whole = int(self.amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return "$ " + f"{whole:,}".replace(",", ".")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"
