import argparse
import logging
import re

from exprcalc.builtins import VARIABLES
from exprcalc.context import Context
from exprcalc.parser import ParserError, parse
from exprcalc.printer import format_number
from exprcalc.runtime import CalcRuntimeError, evaluate

ASSIGNMENT_PATT = re.compile(r"^\s*(?P<name>[^\W\d]+)\s*=(?P<code>.*)$")


def run_line(line: str, context: Context) -> str:
    """Evaluates one input line, ``t = <expression>`` binds the result to ``t``."""
    match = ASSIGNMENT_PATT.match(line)
    name = match.group("name") if match else None
    code = match.group("code") if match else line

    if name is not None and name not in VARIABLES:
        return f"Cannot assign to {name!r}, expressions can only use {', '.join(sorted(VARIABLES))}"

    try:
        result = evaluate(parse(code), context)
    except (ParserError, CalcRuntimeError) as e:
        return str(e)

    if name is not None:
        context.set_variable(name, result)
    return format_number(result)


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Interactive expression calculator")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = arg_parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    context = Context()

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        if line.strip():
            print(run_line(line, context))
