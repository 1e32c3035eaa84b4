"""Evaluate single and chained binary arithmetic operations."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, Dict, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.operations import (
    CalculationResult,
    ChainStep,
    Operator,
    format_number,
)


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

# Mapping of operators to the function computing them
OPERATORS: Dict[Operator, OperatorFn] = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
    Operator.POWER: math.pow,
    # Remainder takes the sign of the dividend
    Operator.MODULO: math.fmod,
}

# Operators whose right operand must not be zero, with their error message
ZERO_DIVISOR_ERRORS: Dict[Operator, str] = {
    Operator.DIVIDE: "Division by zero is not allowed",
    Operator.MODULO: "Modulo by zero cannot be computed",
}

CHAIN_TOO_SHORT_ERROR = "At least two numbers are required"


class ArithmeticEvaluator(BaseModel):
    """
    Evaluate binary arithmetic operations without raising.

    Design constraints:
        - No eval(), no dynamic code execution
        - Every failure is reported through CalculationResult, never raised
        - Successful results are rounded to a fixed number of decimal places
          to hide floating-point noise (0.1 + 0.2 gives 0.3)

    Chains are evaluated strictly left to right, without operator precedence:
    10 + 5 * 2 gives 30, not 20.
    """

    # Make the Pydantic instance immutable (read-only), evaluation must stay pure
    model_config = ConfigDict(frozen=True)

    precision: int = Field(default=6, ge=0, le=15, description="Decimal places kept in results")

    def _round(self, value: float) -> float:
        """
        Round a value half up to the configured number of decimal places.

        :param float value: Raw computed value

        :return: Rounded value
        :rtype: float
        """
        factor: int = 10 ** self.precision
        scaled: float = value * factor
        if not math.isfinite(scaled):
            # Too large to carry decimals anyway
            return value
        # scaled + 0.5 is inexact from 2**52 on, compare the fraction instead
        floored: int = math.floor(scaled)
        if scaled - floored >= 0.5:
            floored += 1
        return floored / factor

    def evaluate(
        self, a: float, op: Union[Operator, str], b: float
    ) -> CalculationResult:
        """
        Apply a single binary operator to two operands.

        :param float a: Left operand
        :param op: Operator, or its raw symbol
        :param float b: Right operand

        :return: Result of the operation, invalid when it cannot be computed
        :rtype: CalculationResult
        """
        symbol: str = op.value if isinstance(op, Operator) else str(op)
        expression: str = f"{format_number(a)} {symbol} {format_number(b)}"

        try:
            parsed: Operator = Operator.parse(op)
        except ValueError:
            logger.debug(f"🧮❌ Invalid operator {symbol!r} in {expression}")
            return CalculationResult.failure(f"Invalid operator: {symbol}", expression)

        expression = f"{format_number(a)} {parsed.value} {format_number(b)}"

        if parsed in ZERO_DIVISOR_ERRORS and b == 0:
            logger.debug(f"🧮❌ Zero divisor in {expression}")
            return CalculationResult.failure(ZERO_DIVISOR_ERRORS[parsed], expression)

        try:
            result: float = self._round(OPERATORS[parsed](a, b))
        except (ArithmeticError, TypeError, ValueError) as exc:
            # math.pow raises on overflow and on fractional powers of negatives
            logger.debug(f"🧮❌ Could not compute {expression}: {exc}")
            return CalculationResult.failure(f"Calculation error: {exc}", expression)

        logger.debug(f"🧮✅ {expression} = {format_number(result)}")
        return CalculationResult.success(result, expression)

    def evaluate_chain(self, steps: Sequence[ChainStep]) -> CalculationResult:
        """
        Evaluate a chain of operations from left to right.

        The running result starts as the first operand; every following step
        applies its operator and operand to it. Evaluation stops at the first
        failing step, whose result is returned as is.

        :param steps: At least two chain steps

        :return: Final result with the full chain expression
        :rtype: CalculationResult
        """
        if len(steps) < 2:
            return CalculationResult.failure(CHAIN_TOO_SHORT_ERROR)

        result: float = steps[0].operand
        expression: str = format_number(result)

        for position, step in enumerate(steps[1:], start=2):
            if step.operator is None:
                return CalculationResult.failure(
                    f"Missing operator for step {position}", expression
                )

            calc: CalculationResult = self.evaluate(result, step.operator, step.operand)
            if not calc.is_valid:
                return calc

            result = calc.result
            expression += f" {step.operator.value} {format_number(step.operand)}"

        return CalculationResult.success(result, expression)


# Default evaluator used by the module-level helpers
DEFAULT_EVALUATOR = ArithmeticEvaluator()


def evaluate(a: float, op: Union[Operator, str], b: float) -> CalculationResult:
    """Evaluate a single operation with the default evaluator."""
    return DEFAULT_EVALUATOR.evaluate(a, op, b)


def evaluate_chain(steps: Sequence[ChainStep]) -> CalculationResult:
    """Evaluate a chain of operations with the default evaluator."""
    return DEFAULT_EVALUATOR.evaluate_chain(steps)
