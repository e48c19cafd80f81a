"""glox command line: run a script, dump its tokens or syntax trees, or start a REPL.

Usage:
    glox                      interactive prompt
    glox script.lox           run a script
    glox -m lex script.lox    print the token table
    glox -m ast script.lox    print each statement's syntax tree
"""

import argparse
import cmd
import sys

from termcolor import colored

from . import __version__
from .errors import LoxError
from .interpreter import Interpreter, stringify
from .lexer import LexicalError, print_tokens, scan
from .parser import ParseError, ParseErrors, parse, parse_program
from .printer import print_ast
from .tokens import TokenType

MODES = ("lex", "ast", "run")

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_IOERR = 74


class ArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments with EX_USAGE instead of argparse's status 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EX_USAGE, f"{self.prog}: error: {message}\n")


def run_source(source, mode="run", interpreter=None, out=None):
    """Push source through the pipeline as far as mode asks for."""
    if out is None:
        out = sys.stdout

    tokens = scan(source)
    if mode == "lex":
        print_tokens(tokens, file=out)
        return

    statements = parse_program(tokens)
    if mode == "ast":
        for stmt in statements:
            print(print_ast(stmt), file=out)
        return

    if interpreter is None:
        interpreter = Interpreter(out=out)
    interpreter.interpret(statements)


def exit_code(error):
    if isinstance(error, (LexicalError, ParseError, ParseErrors)):
        return EX_DATAERR
    # LoxRuntimeError and anything the interpreter did not expect
    return EX_SOFTWARE


def report(error, file=None):
    print(colored(str(error), "red"), file=file if file is not None else sys.stderr)


class Shell(cmd.Cmd):
    """Interactive glox prompt."""
    intro = f"Welcome to glox {__version__}\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = Interpreter(out=self.stdout)

    def default(self, line):
        """Runs a line of glox. Errors are reported and the prompt carries on."""
        try:
            self.run_line(line)
        except LoxError as e:
            report(e)

    def run_line(self, line):
        tokens = scan(line)
        if len(tokens) == 1:
            return  # only whitespace or a comment

        # a line that is not a statement is evaluated and its value echoed
        if tokens[0].type is not TokenType.PRINT and tokens[-2].type is not TokenType.SEMICOLON:
            value = self.interpreter.evaluate(parse(tokens))
            print(stringify(value), file=self.stdout)
            return

        self.interpreter.interpret(parse_program(tokens))

    def do_help(self, arg):
        """Short intro instead of the command listing."""
        print("glox evaluates Lox expressions and statements.\n\n"
              "Type an expression such as '1 + 2 * 3' to see its value, or a statement\n"
              "such as 'print \"a\" + \"b\";' to run it. 'exit' or Ctrl-D leaves.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits the prompt."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits the prompt."""
        return True


def main(argv=None):
    parser = ArgumentParser(prog="glox", description="Scan, parse and interpret glox scripts.")
    parser.add_argument("script", nargs="?", help="script to run (if omitted, starts the interactive prompt)")
    parser.add_argument("-m", "--mode", choices=MODES, default="run",
                        help="lex: print tokens, ast: print syntax trees, run: execute (default)")
    parser.add_argument("-v", "--version", action="version", version=f"glox {__version__}")
    args = parser.parse_args(argv)

    if args.script is None:
        Shell().cmdloop()
        return EX_OK

    try:
        with open(args.script, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(colored(f"Error: could not read '{args.script}': {e.strerror}", "red"), file=sys.stderr)
        return EX_IOERR

    try:
        run_source(source, args.mode)
    except LoxError as e:
        report(e)
        return exit_code(e)

    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
