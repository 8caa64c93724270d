"""Run every sample program in programs/ and check its annotated results.

A program states what it should produce with trailing comments:

    print 1;      // expect: 1
    a + ;         // expect error: [line 2] Error at ';': Expected expression.
    nil();        // expect runtime error: Can only call functions and classes.
"""

import io
import re
from pathlib import Path

import pytest

from treelox.lox import EX_DATAERR, EX_OK, EX_SOFTWARE, Lox

PROGRAMS_DIR = Path(__file__).parent / "programs"

EXPECT_OUTPUT = re.compile(r"// expect: ?(.*)$")
EXPECT_ERROR = re.compile(r"// expect error: (.*)$")
EXPECT_RUNTIME_ERROR = re.compile(r"// expect runtime error: (.*)$")


def parse_expectations(source):
    output = []
    errors = []
    for line_number, line in enumerate(source.splitlines(), start=1):
        if match := EXPECT_OUTPUT.search(line):
            output.append(match.group(1))
        elif match := EXPECT_ERROR.search(line):
            errors.append(match.group(1))
        elif match := EXPECT_RUNTIME_ERROR.search(line):
            errors.append(match.group(1))
            errors.append(f"[line {line_number}]")
    return output, errors


def discover_programs():
    return sorted(PROGRAMS_DIR.glob("*.lox"))


@pytest.mark.parametrize("path", discover_programs(), ids=lambda path: path.stem)
def test_program(path):
    source = path.read_text()
    expected_output, expected_errors = parse_expectations(source)

    out = io.StringIO()
    err = io.StringIO()
    status = Lox(out=out, err=err).run_file(path)

    assert out.getvalue().splitlines() == expected_output
    assert err.getvalue().splitlines() == expected_errors
    if "expect runtime error" in source:
        assert status == EX_SOFTWARE
    elif "expect error" in source:
        assert status == EX_DATAERR
    else:
        assert status == EX_OK


def test_programs_were_found():
    assert len(discover_programs()) >= 5
