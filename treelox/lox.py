import argparse
import sys

from .interpreter import Interpreter
from .parser import Parser
from .printer import AstPrinter
from .reporter import Reporter
from .resolver import Resolver
from .scanner import Scanner

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70

# Each Lox call costs about a dozen Python frames.
RECURSION_LIMIT = 25_000


class Lox:
    """One interpreter session.

    Globals survive from one ``run`` to the next so the prompt can build up
    state line by line, but every run reports into a fresh ``Reporter``.
    """

    def __init__(self, out=None, err=None):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.interpreter = Interpreter(self.out)

    def run(self, source, print_ast=False):
        reporter = Reporter(self.err)

        tokens = Scanner(source, reporter).scan_tokens()
        try:
            statements = Parser(tokens, reporter).parse()
        except RecursionError:
            reporter.error(tokens[-1], "Too much nesting.")
            return reporter

        if reporter.had_error:
            return reporter

        if print_ast:
            print(AstPrinter().print(statements), file=self.out)
            return reporter

        try:
            Resolver(self.interpreter, reporter).resolve(statements)
        except RecursionError:
            reporter.error(tokens[-1], "Too much nesting.")
            return reporter

        if reporter.had_error:
            return reporter

        self.interpreter.interpret(statements, reporter)
        return reporter

    def run_file(self, filename, print_ast=False):
        with open(filename, "r", encoding="utf-8") as file:
            reporter = self.run(file.read(), print_ast)

        if reporter.had_error:
            return EX_DATAERR
        if reporter.had_runtime_error:
            return EX_SOFTWARE
        return EX_OK

    def run_prompt(self, stdin=None, print_ast=False):
        stdin = stdin if stdin is not None else sys.stdin
        while True:
            print("> ", end="", file=self.out, flush=True)
            line = stdin.readline()
            if not line:
                print(file=self.out)
                break
            self.run(line, print_ast)
        return EX_OK


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="treelox", description="Run Lox scripts")
    parser.add_argument("filename", nargs="?")
    parser.add_argument(
        "--ast", action="store_true",
        help="print the parsed syntax tree instead of running it")
    try:
        args = parser.parse_args(argv)
    except SystemExit as error:
        # argparse exits with 2 on bad usage; keep the sysexits code instead.
        return EX_OK if error.code == 0 else EX_USAGE

    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

    lox = Lox()
    if args.filename is not None:
        return lox.run_file(args.filename, args.ast)
    return lox.run_prompt(print_ast=args.ast)
