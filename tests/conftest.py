"""Pytest configuration for the treelox test suite."""

import io
from dataclasses import dataclass

import pytest

from treelox import Lox, Parser, Reporter, Scanner


@dataclass
class Result:
    out: str
    err: str
    reporter: Reporter

    @property
    def lines(self):
        return self.out.splitlines()


class Session:
    """A Lox session whose output and diagnostics are captured."""

    def __init__(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.lox = Lox(out=self.out, err=self.err)

    def __call__(self, source):
        out_start = self.out.tell()
        err_start = self.err.tell()
        reporter = self.lox.run(source)
        return Result(
            self.out.getvalue()[out_start:],
            self.err.getvalue()[err_start:],
            reporter)


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def run(session):
    """Run source in a fresh session and return its captured Result."""
    return session


def scan(source):
    reporter = Reporter(io.StringIO())
    tokens = Scanner(source, reporter).scan_tokens()
    return tokens, reporter


def parse(source):
    reporter = Reporter(io.StringIO())
    tokens = Scanner(source, reporter).scan_tokens()
    statements = Parser(tokens, reporter).parse()
    return statements, reporter
