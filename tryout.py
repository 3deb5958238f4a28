import argparse
import logging

from exprcalc.context import Context
from exprcalc.parser import ParserError, parse
from exprcalc.printer import format_number, render
from exprcalc.runtime import CalcRuntimeError, evaluate

SAMPLES = [
    "1",
    "1+2",
    "(1+3)",
    "(((1)+((4))))",
    "1 - 2 + 3",
    "(1 - 2) + 3",
    "1.2",
    "3,4",
    "e + pi",
    "sin(pi * 180)",
    "cos((pi / pi) * 180)",
    "tan(e ^ 1)",
    "log(1)",
    "ln(1)",
    "exp(1)",
    "sqrt(1)",
    "abs(1)",
    "|2 + 4|",
    "1 + 2 * 3",
    "2 * 3 + 1",
    "- 1 + 2",
    "1 + - 2",
    "- - 1",
    "+ + 1",
    "3t * 8",
    "8 + 3t",
    "8 + -3t",
    "4 + 7t^2",
    "4 + (2+7t^2+3)",
    "1 / 0",
    "1.234.432",
    "&",
]


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Parse, print and evaluate sample expressions")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = arg_parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    context = Context()
    context.set_variable("t", 2)

    for code in SAMPLES:
        try:
            expression = parse(code)
        except ParserError as e:
            print()
            print(code)
            print(" " * e.token.start + "^")
            print(" " * e.token.start + e.errmsg)
            print()
            continue

        try:
            value = format_number(evaluate(expression, context))
        except CalcRuntimeError as e:
            value = str(e)
        print(f"{code:<20} = {render(expression):<30} = {value}")

    print("=" * 10)
    expression = parse("3t + 7")
    for t in range(10):
        context.set_variable("t", t)
        print(f"t={t} => {render(expression)} = {format_number(evaluate(expression, context))}")
