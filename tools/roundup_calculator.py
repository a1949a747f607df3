"""
Round-Up Calculator
Rounds a payment up to the next multiple of 5 (under ₹100) or 10,
the difference is what goes into savings
"""
from decimal import Decimal, ROUND_CEILING
from models.errors import ValidationError
from models.schemas import RoundUpResult
from tools.money import parse_amount, quantize


SMALL_PAYMENT_LIMIT = Decimal("100")
SMALL_STEP = 5
LARGE_STEP = 10


class RoundUpCalculator:

    def step_for(self, amount: Decimal) -> int:
        return SMALL_STEP if amount < SMALL_PAYMENT_LIMIT else LARGE_STEP

    def calculate(self, amount) -> RoundUpResult:
        """Calculate the rounded-up payment and the savings delta"""
        # Payments are settled to the paisa
        value = quantize(parse_amount(amount))
        if value <= 0:
            raise ValidationError("amount must be at least 0.01")

        step = self.step_for(value)
        round_up = (value / step).to_integral_value(rounding=ROUND_CEILING) * step
        delta = round_up - value

        return RoundUpResult(
            amount=float(value),
            step=step,
            round_up=float(round_up),
            delta=float(delta),
        )


# Convenience function for collaborators that want plain data
def calculate_round_up(amount) -> dict:
    """Calculate round-up savings for one payment - wrapper for UI usage"""
    return RoundUpCalculator().calculate(amount).model_dump()
