"""Abstract syntax tree for Lox.

Both node families are closed: every kind is generated below, once, at import
time, and each generated class dispatches ``accept(visitor)`` to the matching
``visit_<kind>_<family>`` method. Nodes are immutable after construction and
hash by identity, so the resolver can key its side-table on them.
"""
from .tokens import Token


def make_syntax_tree_node(base_class, name, *attrs):
    def __init__(self, *values):
        if len(values) != len(attrs):
            message = f"{name}.__init__() takes {len(attrs)} positional arguments but {len(values)} were given"
            raise TypeError(message)

        for attr, value in zip(attrs, values):
            object.__setattr__(self, attr, value)

    def __setattr__(self, attr, value):
        raise AttributeError(f"{name} nodes are immutable, cannot set '{attr}'")

    def __repr__(self):
        fields = ", ".join(f"{attr}={getattr(self, attr)!r}" for attr in attrs)
        return f"{base_class.__name__}.{name}({fields})"

    visit_fn_name = f"visit_{name.lower()}_{base_class.__name__.lower()}"

    def accept(self, visitor):
        return getattr(visitor, visit_fn_name)(self)

    subclass = type(
        name, (base_class,),
        {
            "__slots__": attrs,
            "__init__": __init__,
            "__setattr__": __setattr__,
            "__repr__": __repr__,
            "accept": accept,
            "fields": attrs,
        })
    subclass.__qualname__ = f"{base_class.__name__}.{name}"

    setattr(base_class, name, subclass)
    base_class.KINDS = base_class.KINDS + (subclass,)

    def visit(self, node):
        raise NotImplementedError(
            f"{type(self).__name__} does not implement {visit_fn_name}")

    setattr(base_class.Visitor, visit_fn_name, visit)


class Expr:
    __slots__ = ()
    KINDS = ()

    def accept(self, visitor):
        raise NotImplementedError()

    class Visitor:
        pass


class Stmt:
    __slots__ = ()
    KINDS = ()

    def accept(self, visitor):
        raise NotImplementedError()

    class Visitor:
        pass


# Expr subclasses
make_syntax_tree_node(Expr, "Assign", "name", "value")
make_syntax_tree_node(Expr, "Binary", "left", "operator", "right")
make_syntax_tree_node(Expr, "Call", "callee", "paren", "arguments")
make_syntax_tree_node(Expr, "Get", "object", "name")
make_syntax_tree_node(Expr, "Grouping", "expression")
make_syntax_tree_node(Expr, "Literal", "value")
make_syntax_tree_node(Expr, "Logical", "left", "operator", "right")
make_syntax_tree_node(Expr, "Set", "object", "name", "value")
make_syntax_tree_node(Expr, "Super", "keyword", "method")
make_syntax_tree_node(Expr, "This", "keyword")
make_syntax_tree_node(Expr, "Unary", "operator", "right")
make_syntax_tree_node(Expr, "Variable", "name")

# Stmt subclasses
make_syntax_tree_node(Stmt, "Block", "statements")
make_syntax_tree_node(Stmt, "Class", "name", "superclass", "methods")
make_syntax_tree_node(Stmt, "Expression", "expression")
make_syntax_tree_node(Stmt, "Function", "name", "params", "body")
make_syntax_tree_node(Stmt, "If", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Stmt, "Print", "expression")
make_syntax_tree_node(Stmt, "Return", "keyword", "value")
make_syntax_tree_node(Stmt, "Var", "name", "initializer")
make_syntax_tree_node(Stmt, "While", "condition", "body")


def same_tree(left, right):
    """Structural equality of two trees, ignoring source line numbers."""
    if isinstance(left, (Expr, Stmt)):
        if type(left) is not type(right):
            return False
        return all(
            same_tree(getattr(left, field), getattr(right, field))
            for field in left.fields)
    if isinstance(left, list):
        return (isinstance(right, list) and len(left) == len(right)
                and all(same_tree(a, b) for a, b in zip(left, right)))
    if isinstance(left, Token):
        return (isinstance(right, Token)
                and (left.type, left.lexeme, left.literal)
                == (right.type, right.lexeme, right.literal))
    return type(left) is type(right) and left == right
