"""Line Item Domain Entity"""

from decimal import Decimal

from pydantic import Field

from invoicebook.domain.base import BaseModel, Text, generate_id
from invoicebook.domain.money import Amount, Money, round2


class LineItem(BaseModel):
    """
    Line Item - One billed row of an invoice

    Domain Rules:
    - amount = round2(quantity * rate), recomputed on every quantity/rate edit
    - A new item starts at quantity 1, rate 0, amount 0
    """

    id: Text = Field(default_factory=generate_id)
    description: Text = ""
    quantity: Amount = Decimal("1")
    rate: Amount = Decimal("0")
    amount: Money = Decimal("0.00")

    def compute_amount(self) -> Decimal:
        self.amount = round2(self.quantity * self.rate)
        return self.amount

    def is_billable(self) -> bool:
        """Has a description and a positive amount"""
        return bool(self.description) and self.amount > 0
