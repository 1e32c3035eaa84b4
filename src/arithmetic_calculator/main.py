"""
Command-line entrypoint of the arithmetic calculator.

This script:
- Evaluates a single operation given as "<num1> <operator> <num2>"
- Runs a built-in demonstration for any other number of arguments

Every failure is reported on standard output; the exit status is always 0.
"""

import argparse
from collections import Counter
import sys
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field, FiniteFloat, ValidationError

from arithmetic_calculator.common.evaluator import evaluate, evaluate_chain
from arithmetic_calculator.common.logger import logger, set_verbosity
from arithmetic_calculator.common.operations import (
    CalculationResult,
    ChainStep,
    Operator,
    format_number,
)


INVALID_NUMBER_MESSAGE = "error: please enter valid numbers"

DEMO_HEADER = "=== Arithmetic calculator demo ==="
CHAIN_DEMO_HEADER = "=== Chain calculation example ==="

# Representative calculations, including both zero-divisor failures
DEMO_CALCULATIONS: List[Tuple[float, Operator, float]] = [
    (10, Operator.ADD, 5),
    (20, Operator.SUBTRACT, 8),
    (6, Operator.MULTIPLY, 7),
    (15, Operator.DIVIDE, 3),
    (2, Operator.POWER, 3),
    (17, Operator.MODULO, 5),
    (10, Operator.DIVIDE, 0),
    (10, Operator.MODULO, 0),
]

# ((10 + 5) * 2 - 3) / 3
DEMO_CHAIN: List[ChainStep] = [
    ChainStep(operand=10, operator=Operator.ADD),
    ChainStep(operand=5, operator=Operator.MULTIPLY),
    ChainStep(operand=2, operator=Operator.SUBTRACT),
    ChainStep(operand=3, operator=Operator.DIVIDE),
]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    values : List[str]
        Raw positional arguments.
    verbose : bool
        Whether debug logging is enabled.
    """

    values: List[str] = Field(default_factory=list, description="Raw positional arguments")
    verbose: bool = Field(default=False, description="Enable debug logging on stderr")


class SingleCalculationArgs(BaseModel):
    """
    Operands and operator of a single command-line calculation.

    The operator stays raw text: unknown symbols are reported by the evaluator.
    """

    num1: FiniteFloat = Field(..., description="Left operand")
    operator: str = Field(..., description="Operator symbol")
    num2: FiniteFloat = Field(..., description="Right operand")


def _in_argv_order(argv: List[str], tokens: List[str]) -> List[str]:
    """
    Return tokens in the order they appear in argv.

    :param argv: Original command-line arguments
    :param tokens: Values kept by argparse, positional and unrecognized alike

    :return: The tokens, ordered as typed
    :rtype: List[str]
    """
    remaining: Counter = Counter(tokens)
    ordered: List[str] = []
    for token in argv:
        if remaining[token] > 0:
            remaining[token] -= 1
            ordered.append(token)
    return ordered


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to sys.argv[1:]

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Evaluate '<num1> <operator> <num2>' or run a demonstration",
        epilog="Supported operators: + - * / ** %%",
    )

    parser.add_argument(
        "values",
        nargs="*",
        help="Exactly three values '<num1> <operator> <num2>'; anything else runs the demo",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log evaluation details to stderr",
    )

    if argv is None:
        argv = sys.argv[1:]

    # Operands such as "-1e5" or "-abc" look like unknown options to argparse
    args, unknown = parser.parse_known_args(argv)

    try:
        return CliArgs(
            values=_in_argv_order(argv, args.values + unknown),
            verbose=args.verbose,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def calculate_safely(
    num1: float, operator: Union[Operator, str], num2: float
) -> CalculationResult:
    """
    Evaluate a single operation, turning any unexpected fault into an invalid result.

    :param float num1: Left operand
    :param operator: Operator, or its raw symbol
    :param float num2: Right operand

    :return: Result of the evaluation
    :rtype: CalculationResult
    """
    try:
        return evaluate(num1, operator, num2)
    except Exception as exc:
        symbol = operator.value if isinstance(operator, Operator) else operator
        expression = f"{format_number(num1)} {symbol} {format_number(num2)}"
        logger.exception(f"🧮❌ Unexpected failure while evaluating {expression}")
        return CalculationResult.failure(f"Calculation error: {exc}", expression)


def run_single(values: List[str]) -> None:
    """
    Evaluate "<num1> <operator> <num2>" and print the outcome.

    :param values: The three raw command-line values
    """
    try:
        args = SingleCalculationArgs(num1=values[0], operator=values[1], num2=values[2])
    except ValidationError as exc:
        logger.debug(f"🔢❌ Invalid operands {values[0]!r}, {values[2]!r}: {exc}")
        print(INVALID_NUMBER_MESSAGE)
        return

    result = calculate_safely(args.num1, args.operator, args.num2)
    if result.is_valid:
        print(result.render())
    else:
        print(f"error: {result.error}")


def run_demo() -> None:
    """Print the demonstration calculations followed by the chain example."""
    print(DEMO_HEADER)
    print()

    for num1, operator, num2 in DEMO_CALCULATIONS:
        print(calculate_safely(num1, operator, num2).render())

    print()
    print(CHAIN_DEMO_HEADER)
    chain_result = evaluate_chain(DEMO_CHAIN)
    if chain_result.is_valid:
        print(chain_result.render())
    else:
        print(f"error: {chain_result.error}")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function executed from the command line.
    """
    cli_args = parse_args(argv)
    set_verbosity(cli_args.verbose)

    if len(cli_args.values) == 3:
        run_single(cli_args.values)
    else:
        logger.info(f"🧮 {len(cli_args.values)} argument(s) given, running the demo")
        run_demo()


if __name__ == "__main__":
    main()
