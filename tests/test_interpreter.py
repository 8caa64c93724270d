"""End-to-end evaluation tests: expressions, statements, scopes and functions."""

import sys

import pytest

from treelox.lox import RECURSION_LIMIT


@pytest.fixture
def deep_stack():
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
    yield
    sys.setrecursionlimit(limit)


@pytest.mark.parametrize("source, expected", [
    ("print 1 + 2;", "3"),
    ("print 7 / 2;", "3.5"),
    ("print -3 * 2;", "-6"),
    ("print 10 - 4 - 3;", "3"),
    ('print "foo" + "bar";', "foobar"),
    ("print 1 < 2;", "true"),
    ("print 2 <= 1;", "false"),
    ("print 3 > 3;", "false"),
    ("print 3 >= 3;", "true"),
    ("print !nil;", "true"),
    ("print !0;", "false"),
    ('print !"";', "false"),
    ("print nil;", "nil"),
    ("print 1 == 1;", "true"),
    ('print "a" == "a";', "true"),
    ("print nil == nil;", "true"),
    ("print nil == false;", "false"),
    ("print true == 1;", "false"),
    ('print 1 == "1";', "false"),
    ("print 0.1 + 0.2 != 0.3;", "true"),
    ("print clock;", "<native fn>"),
    ("print 1 / 0;", "Infinity"),
    ("print -1 / 0;", "-Infinity"),
    ("print 1 / -0;", "-Infinity"),
    ("print 0 / 0;", "NaN"),
    ("var nan = 0 / 0; print nan == nan;", "false"),
    ("print 1 / 0 > 1000000;", "true"),
    ("print 100000000000000000000;", "100000000000000000000"),
    ("print 1000000 * 1000000 * 1000000;", "1000000000000000000"),
    ("print -0.5 * 4;", "-2"),
    ("print 2.5;", "2.5"),
])
def test_expressions(run, source, expected):
    result = run(source)
    assert result.err == ""
    assert result.lines == [expected]


def test_logical_operators_return_deciding_operand(run):
    result = run("""
    print nil or "yes";
    print "first" or "second";
    print nil and "never";
    print 1 and 2;
    print false or false;
    """)
    assert result.lines == ["yes", "first", "nil", "2", "false"]


def test_logical_operators_short_circuit(run):
    result = run("""
    var called = false;
    fun touch() { called = true; return true; }
    print true or touch();
    print false and touch();
    print called;
    """)
    assert result.lines == ["true", "false", "false"]


def test_lexical_shadowing(run):
    result = run("var a = 1; { var a = 2; print a; } print a;")
    assert result.lines == ["2", "1"]


def test_assignment_reaches_enclosing_scope(run):
    result = run("var a = 1; { a = 2; { a = a + 1; } } print a;")
    assert result.lines == ["3"]


def test_uninitialized_variable_is_nil(run):
    assert run("var a; print a;").lines == ["nil"]


def test_if_else(run):
    result = run("""
    if (0) print "zero is truthy"; else print "no";
    if (nil) print "no"; else print "nil is falsy";
    if (false) print "no";
    """)
    assert result.lines == ["zero is truthy", "nil is falsy"]


def test_while_loop(run):
    result = run("var i = 0; while (i < 3) { print i; i = i + 1; }")
    assert result.lines == ["0", "1", "2"]


def test_for_loop(run):
    result = run("""
    var a = 0;
    var temp;
    for (var b = 1; a < 50; b = temp + b) {
      print a;
      temp = a;
      a = b;
    }
    """)
    assert result.lines == ["0", "1", "1", "2", "3", "5", "8", "13", "21", "34"]


def test_for_loop_variable_is_scoped_to_loop(run):
    result = run("for (var i = 0; i < 1; i = i + 1) {} print i;")
    assert result.err == "Undefined variable 'i'.\n[line 1]\n"


def test_functions_and_recursion(run):
    result = run("""
    fun fib(n) {
      if (n < 2) return n;
      return fib(n - 2) + fib(n - 1);
    }
    print fib(15);
    print fib;
    """)
    assert result.lines == ["610", "<fn fib>"]


def test_function_without_return_yields_nil(run):
    assert run("fun f() {} print f();").lines == ["nil"]


def test_return_unwinds_loops_and_blocks(run):
    result = run("""
    fun find() {
      var i = 0;
      while (true) {
        {
          if (i == 3) return i;
        }
        i = i + 1;
      }
    }
    print find();
    var after = "scope restored";
    print after;
    """)
    assert result.lines == ["3", "scope restored"]


def test_closure_counters_are_independent(run):
    result = run("""
    fun makeCounter() {
      var i = 0;
      fun count() {
        i = i + 1;
        return i;
      }
      return count;
    }
    var a = makeCounter();
    var b = makeCounter();
    print a();
    print a();
    print b();
    """)
    assert result.lines == ["1", "2", "1"]


def test_closure_binds_to_declaration_scope(run):
    result = run("""
    var a = "global";
    {
      fun showA() { print a; }
      showA();
      var a = "block";
      showA();
    }
    """)
    assert result.lines == ["global", "global"]


def test_closure_outlives_block(run):
    result = run("""
    var f;
    {
      var captured = "kept";
      fun g() { return captured; }
      f = g;
    }
    print f();
    """)
    assert result.lines == ["kept"]


def test_functions_are_first_class(run):
    result = run("""
    fun twice(f, x) { return f(f(x)); }
    fun inc(n) { return n + 1; }
    print twice(inc, 1);
    """)
    assert result.lines == ["3"]


def test_clock_returns_number(run):
    assert run("print clock() > 0;").lines == ["true"]


@pytest.mark.parametrize("source, message", [
    ('print "1" + 1;', "Operands must be two numbers or two strings."),
    ("print nil + nil;", "Operands must be two numbers or two strings."),
    ('print -"a";', "Operand must be a number."),
    ('print 1 < "2";', "Operands must be numbers."),
    ("print true * 2;", "Operands must be numbers."),
    ("print missing;", "Undefined variable 'missing'."),
    ("missing = 1;", "Undefined variable 'missing'."),
    ('"not a function"();', "Can only call functions and classes."),
    ("nil();", "Can only call functions and classes."),
    ("fun f(a, b) {} f(1);", "Expected 2 arguments but got 1."),
    ("clock(1);", "Expected 0 arguments but got 1."),
    ("print 1.x;", "Only instances have properties."),
    ('"s".x = 1;', "Only instances have fields."),
])
def test_runtime_errors(run, source, message):
    result = run(source)
    assert result.err == f"{message}\n[line 1]\n"
    assert result.reporter.had_runtime_error
    assert not result.reporter.had_error


def test_runtime_error_halts_run(run):
    result = run("""
    print "before";
    fun f(a) {}
    f(1, 2);
    print "after";
    """)
    assert result.lines == ["before"]
    assert result.err == "Expected 1 arguments but got 2.\n[line 4]\n"


def test_runtime_error_inside_nested_calls_restores_globals(session):
    result = session("""
    var x = "outer";
    fun f() { var x = "inner"; { return 1 + nil; } }
    f();
    """)
    assert result.reporter.had_runtime_error
    assert session.lox.interpreter.environment is session.lox.interpreter.globals
    assert session("print x;").lines == ["outer"]


def test_arguments_are_evaluated_before_arity_check(run):
    result = run("""
    fun f(a) {}
    fun side() { print "evaluated"; return 1; }
    f(side(), side());
    """)
    assert result.lines == ["evaluated", "evaluated"]
    assert "Expected 1 arguments but got 2." in result.err


def test_static_error_prevents_execution(run):
    result = run('print "never"; var a = ;')
    assert result.out == ""
    assert result.reporter.had_error
    assert result.err == "[line 1] Error at ';': Expected expression.\n"


def test_resolver_error_prevents_execution(run):
    result = run('print "never"; return;')
    assert result.out == ""
    assert result.err == "[line 1] Error at 'return': Can't return from top-level code.\n"


def test_session_keeps_globals_between_runs(session):
    session("var a = 1; fun inc() { a = a + 1; }")
    session("inc();")
    assert session("print a;").lines == ["2"]


def test_error_flag_resets_between_runs(session):
    assert session("print ;").reporter.had_error
    result = session("print 1;")
    assert not result.reporter.had_error
    assert result.lines == ["1"]


def test_deep_recursion(run, deep_stack):
    result = run("""
    fun count(n) {
      if (n > 0) count(n - 1);
      return n;
    }
    print count(1000);
    """)
    assert result.err == ""
    assert result.lines == ["1000"]


def test_unbounded_recursion_is_a_runtime_error(session):
    result = session('fun f() { f(); }\nprint "before";\nf();\nprint "after";')
    assert result.lines == ["before"]
    assert result.err == "Stack overflow.\n[line 1]\n"
    assert result.reporter.had_runtime_error
    assert session.lox.interpreter.environment is session.lox.interpreter.globals
    assert session("print 1;").lines == ["1"]


def test_excessive_nesting_is_a_static_error(session):
    depth = 30_000
    result = session("print " + "(" * depth + "1" + ")" * depth + ";")
    assert result.out == ""
    assert result.reporter.had_error
    assert result.err.endswith("Error at end: Too much nesting.\n")
    assert session("print 2;").lines == ["2"]
