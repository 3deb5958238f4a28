import math
import random
import string

from exprcalc.context import Context
from exprcalc.parser import ParserError, parse
from exprcalc.printer import render
from exprcalc.runtime import CalcRuntimeError, evaluate


def eval_my(code: str, context: Context) -> float | str:
    try:
        return evaluate(parse(code), context)
    except (ParserError, CalcRuntimeError) as e:
        return str(e)


if __name__ == "__main__":
    # no decimal markers or named constants: render rounds constants to two digits
    alphabet = string.digits + "()+-*/^|t "
    context = Context({"t": 1.5})

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        res_my = eval_my(code, context)
        if isinstance(res_my, str):
            continue

        rendered = render(parse(code))
        res_rendered = eval_my(rendered, context)
        if isinstance(res_rendered, float) and (
            math.isclose(res_my, res_rendered) or (math.isnan(res_my) and math.isnan(res_rendered))
        ):
            continue
        print(f"{code!r}\nrendered: {rendered!r}\nmy: {res_my}\nrendered result: {res_rendered}\n\n")
