from .interpreter import Interpreter
from .lox import Lox, main
from .parser import Parser
from .reporter import Reporter
from .resolver import Resolver
from .scanner import Scanner

__all__ = ["Interpreter", "Lox", "Parser", "Reporter", "Resolver", "Scanner", "main"]
