"""Pydantic models for arithmetic operators, chain steps and calculation results."""
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Operator(str, Enum):
    """Binary operators supported by the evaluator, valued by their canonical symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "**"
    MODULO = "%"

    @classmethod
    def parse(cls, symbol: Union["Operator", str]) -> "Operator":
        """
        Convert a raw operator symbol into an Operator.

        :param symbol: Operator symbol such as "+" or "**"

        :return: Matching operator
        :rtype: Operator
        :raises ValueError: If the symbol is not a supported operator
        """
        if isinstance(symbol, cls):
            return symbol
        return cls(str(symbol).strip())


def format_number(value: Union[int, float]) -> str:
    """
    Render a number the way it is written by hand.

    Integral floats lose their trailing ".0", everything else keeps its repr.

    Examples
    --------
    10.0 -> "10"
    2.5 -> "2.5"
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


class ChainStep(BaseModel):
    """One operand of a chained calculation, together with the operator that applies it."""

    model_config = ConfigDict(frozen=True)

    operand: float = Field(..., description="Numeric operand of this step")
    operator: Optional[Operator] = Field(
        default=None,
        description="Operator applying this operand to the running result (ignored on the first step)",
    )


class CalculationResult(BaseModel):
    """
    Outcome of a single or chained calculation.

    Invariants:
        - A valid result never carries an error message.
        - An invalid result always carries an error message and a result of 0.
    """

    # Results are values: never mutated after construction
    model_config = ConfigDict(frozen=True)

    result: float = Field(default=0.0, description="Computed numeric result, 0 on failure")
    expression: str = Field(..., description="Human-readable rendering of the calculation")
    is_valid: bool = Field(..., description="Whether the calculation succeeded")
    error: Optional[str] = Field(default=None, description="Error message when the calculation failed")

    @model_validator(mode="after")
    def check_validity(self) -> "CalculationResult":
        """Enforce consistency between is_valid, result and error."""
        if self.is_valid and self.error is not None:
            raise ValueError("A valid result cannot carry an error message")
        if not self.is_valid:
            if not self.error:
                raise ValueError("An invalid result must carry an error message")
            if self.result != 0:
                raise ValueError("An invalid result must have a result of 0")
        return self

    @classmethod
    def success(cls, result: float, expression: str) -> "CalculationResult":
        """Build a successful result."""
        return cls(result=result, expression=expression, is_valid=True)

    @classmethod
    def failure(cls, error: str, expression: str = "") -> "CalculationResult":
        """Build a failed result, with the result forced to 0."""
        return cls(result=0.0, expression=expression, is_valid=False, error=error)

    def render(self) -> str:
        """
        Render the result as a console line.

        :return: "<expression> = <result>" or "<expression> = error: <message>"
        :rtype: str
        """
        if self.is_valid:
            return f"{self.expression} = {format_number(self.result)}"
        return f"{self.expression} = error: {self.error}"
