import sys


class Reporter:
    """Diagnostic sink for a single run of the pipeline.

    Lexical, syntactic and resolution errors all land here and set
    ``had_error``; the interpreter is not started once it is set. Runtime
    errors are tracked separately in ``had_runtime_error``.
    """

    def __init__(self, err=None):
        self.err = err if err is not None else sys.stderr
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics = []

    def error(self, where, message):
        """Report a static error against a line number or a token."""
        if isinstance(where, int):
            self.report(where, "", message)
        elif where.type == "EOF":
            self.report(where.line, " at end", message)
        else:
            self.report(where.line, f" at '{where.lexeme}'", message)

    def runtime_error(self, error):
        text = f"{error.message}\n[line {error.token.line}]"
        print(text, file=self.err)
        self.diagnostics.append(text)
        self.had_runtime_error = True

    def report(self, line, where, message):
        text = f"[line {line}] Error{where}: {message}"
        print(text, file=self.err)
        self.diagnostics.append(text)
        self.had_error = True
