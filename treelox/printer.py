"""Debug renderings of the syntax tree.

``AstPrinter`` produces the fully parenthesized prefix form used by the
``--ast`` command-line flag. ``SourcePrinter`` turns an expression back into
Lox source that parses to the same tree.
"""
from decimal import Decimal

from .interpreter import stringify
from .syntax import Expr, Stmt


class AstPrinter(Expr.Visitor, Stmt.Visitor):
    def print(self, node):
        if isinstance(node, list):
            return "\n".join(self.print(statement) for statement in node)
        return node.accept(self)

    def parenthesize(self, name, *parts):
        rendered = [name]
        for part in parts:
            if isinstance(part, (Expr, Stmt)):
                rendered.append(part.accept(self))
            else:
                rendered.append(str(part))
        return f"({' '.join(rendered)})"

    def visit_assign_expr(self, expr):
        return self.parenthesize("=", expr.name.lexeme, expr.value)

    def visit_binary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_call_expr(self, expr):
        return self.parenthesize("call", expr.callee, *expr.arguments)

    def visit_get_expr(self, expr):
        return self.parenthesize(".", expr.object, expr.name.lexeme)

    def visit_grouping_expr(self, expr):
        return self.parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr):
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return stringify(expr.value)

    def visit_logical_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_set_expr(self, expr):
        return self.parenthesize("=", expr.object, expr.name.lexeme, expr.value)

    def visit_super_expr(self, expr):
        return self.parenthesize("super", expr.method.lexeme)

    def visit_this_expr(self, expr):
        return "this"

    def visit_unary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr):
        return expr.name.lexeme

    def visit_block_stmt(self, stmt):
        return self.parenthesize("block", *stmt.statements)

    def visit_class_stmt(self, stmt):
        parts = [stmt.name.lexeme]
        if stmt.superclass is not None:
            parts += ["<", stmt.superclass]
        return self.parenthesize("class", *parts, *stmt.methods)

    def visit_expression_stmt(self, stmt):
        return self.parenthesize(";", stmt.expression)

    def visit_function_stmt(self, stmt):
        params = " ".join(param.lexeme for param in stmt.params)
        return self.parenthesize(
            "fun", stmt.name.lexeme, f"({params})", *stmt.body)

    def visit_if_stmt(self, stmt):
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize(
            "if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_print_stmt(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_return_stmt(self, stmt):
        if stmt.value is None:
            return "(return)"
        return self.parenthesize("return", stmt.value)

    def visit_var_stmt(self, stmt):
        if stmt.initializer is None:
            return self.parenthesize("var", stmt.name.lexeme)
        return self.parenthesize("var", stmt.name.lexeme, "=", stmt.initializer)

    def visit_while_stmt(self, stmt):
        return self.parenthesize("while", stmt.condition, stmt.body)


ASSIGNMENT, OR, AND, EQUALITY, COMPARISON, TERM, FACTOR, UNARY, CALL, PRIMARY = range(1, 11)

BINARY_PRECEDENCE = {
    "BANG_EQUAL": EQUALITY,
    "EQUAL_EQUAL": EQUALITY,
    "GREATER": COMPARISON,
    "GREATER_EQUAL": COMPARISON,
    "LESS": COMPARISON,
    "LESS_EQUAL": COMPARISON,
    "MINUS": TERM,
    "PLUS": TERM,
    "SLASH": FACTOR,
    "STAR": FACTOR,
    "OR": OR,
    "AND": AND,
}


def precedence(expr):
    match expr:
        case Expr.Assign() | Expr.Set():
            return ASSIGNMENT
        case Expr.Binary() | Expr.Logical():
            return BINARY_PRECEDENCE[expr.operator.type]
        case Expr.Unary():
            return UNARY
        case Expr.Call() | Expr.Get():
            return CALL
    return PRIMARY


def format_number(value):
    if value.is_integer():
        return str(int(value))
    # Decimal avoids the exponent notation the scanner cannot read back.
    return format(Decimal(repr(value)), "f")


class SourcePrinter(Expr.Visitor):
    """Render an expression as Lox source.

    Explicit ``Grouping`` nodes always print their parentheses. Any other
    parentheses are added only where operator precedence requires them, so a
    tree produced by the parser prints back to source that parses to the
    same tree.
    """

    def print(self, expr):
        return expr.accept(self)

    def operand(self, expr, minimum):
        text = expr.accept(self)
        if precedence(expr) < minimum:
            return f"({text})"
        return text

    def visit_assign_expr(self, expr):
        return f"{expr.name.lexeme} = {expr.value.accept(self)}"

    def visit_binary_expr(self, expr):
        level = precedence(expr)
        left = self.operand(expr.left, level)
        right = self.operand(expr.right, level + 1)
        return f"{left} {expr.operator.lexeme} {right}"

    def visit_call_expr(self, expr):
        arguments = ", ".join(argument.accept(self) for argument in expr.arguments)
        return f"{self.operand(expr.callee, CALL)}({arguments})"

    def visit_get_expr(self, expr):
        return f"{self.operand(expr.object, CALL)}.{expr.name.lexeme}"

    def visit_grouping_expr(self, expr):
        return f"({expr.expression.accept(self)})"

    def visit_literal_expr(self, expr):
        value = expr.value
        if isinstance(value, str):
            return f'"{value}"'
        if isinstance(value, float):
            return format_number(value)
        return stringify(value)

    def visit_logical_expr(self, expr):
        return self.visit_binary_expr(expr)

    def visit_set_expr(self, expr):
        target = self.operand(expr.object, CALL)
        return f"{target}.{expr.name.lexeme} = {expr.value.accept(self)}"

    def visit_super_expr(self, expr):
        return f"super.{expr.method.lexeme}"

    def visit_this_expr(self, expr):
        return "this"

    def visit_unary_expr(self, expr):
        return f"{expr.operator.lexeme}{self.operand(expr.right, UNARY)}"

    def visit_variable_expr(self, expr):
        return expr.name.lexeme
