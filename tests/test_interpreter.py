import io

import pytest

from yopl.environment import Environment
from yopl.interpreter import Interpreter, ProgramExit
from yopl.nodes import (
    BinaryExpr,
    ExprStmt,
    FuncCall,
    FuncDef,
    Identifier,
    IfStmt,
    Literal,
    ReturnStmt,
    VarDef,
)
from yopl.values import Value, YoplError


def make_interpreter(text=""):
    return Interpreter(Environment(), io.StringIO(text), io.StringIO())


def s(text):
    return Literal(Value.string(text))


def i(number):
    return Literal(Value.integer(number))


def test_print_concatenates_arguments_and_ends_line():
    interp = make_interpreter()
    interp.run([ExprStmt(FuncCall("print", [s("ab"), s("cd")]))])
    assert interp.stdout.getvalue() == "abcd\n"


def test_print_without_arguments_writes_newline():
    interp = make_interpreter()
    interp.builtin_print([])
    assert interp.stdout.getvalue() == "\n"


def test_print_booleans_and_nil():
    interp = make_interpreter()
    interp.builtin_print([Literal(Value.boolean(True))])
    interp.builtin_print([Literal(Value.boolean(False))])
    interp.builtin_print([Literal(Value.nil())])
    assert interp.stdout.getvalue().splitlines() == ["true", "false", "NULL"]


def test_print_returns_nil():
    interp = make_interpreter()
    assert interp.call_function("print", [s("x")]) == Value.nil()


def test_input_reads_integer_line():
    interp = make_interpreter("42\nrest\n")
    assert interp.call_function("input", []) == Value.integer(42)
    assert interp.call_function("input", []) == Value.string("rest")


def test_input_empty_line_is_nil():
    interp = make_interpreter("\n")
    assert interp.builtin_input() == Value.nil()


@pytest.mark.parametrize(
    "literal, expected",
    [
        (i(1), "Number"),
        (Literal(Value.decimal(1.5)), "Number"),
        (s("x"), "String"),
        (Literal(Value.boolean(True)), "Boolean"),
        (Literal(Value.nil()), "NULL"),
    ],
)
def test_typeof_names(literal, expected):
    interp = make_interpreter()
    assert interp.call_function("typeof", [literal]) == Value.string(expected)


def test_typeof_wrong_arity_raises():
    with pytest.raises(YoplError):
        make_interpreter().builtin_typeof([])


def test_include_then_module_function():
    interp = make_interpreter()
    interp.call_function("include", [s("string")])
    assert interp.call_function("strlen", [s("hello")]) == Value.integer(len("hello"))


def test_module_function_unavailable_before_include():
    with pytest.raises(YoplError):
        make_interpreter().call_function("strlen", [s("hello")])


def test_include_errors():
    interp = make_interpreter()
    with pytest.raises(YoplError):
        interp.builtin_include([s("nosuchmodule")])
    with pytest.raises(YoplError):
        interp.builtin_include([i(1)])
    with pytest.raises(YoplError):
        interp.builtin_include([s("string"), s("string")])


def test_undefined_function_raises():
    with pytest.raises(YoplError):
        make_interpreter().call_function("missing", [])


def test_exit_raises_program_exit_with_code_one():
    interp = make_interpreter()
    with pytest.raises(ProgramExit) as info:
        interp.run([ExprStmt(FuncCall("exit", []))])
    assert info.value.code == 1


def test_user_function_arity_mismatch():
    interp = make_interpreter()
    interp.run([FuncDef("f", ["a", "b"], [])])
    with pytest.raises(YoplError):
        interp.call_user_function("f", [i(1)])


def test_user_function_without_return_gives_nil():
    interp = make_interpreter()
    interp.run([FuncDef("f", [], [])])
    assert interp.call_function("f", []) == Value.nil()


def test_user_function_returns_value_and_restores_scope():
    interp = make_interpreter()
    interp.run([FuncDef("ident", ["a"], [ReturnStmt(Identifier("a"))])])
    result = interp.call_function("ident", [s("value")])
    assert result == Value.string("value")
    assert len(interp.environment.scopes) == 1
    with pytest.raises(YoplError):
        interp.environment.get_variable("a")


def test_return_inside_if_leaves_function():
    interp = make_interpreter()
    body = [
        IfStmt(Identifier("flag"), [ReturnStmt(s("early"))]),
        ReturnStmt(s("late")),
    ]
    interp.run([FuncDef("pick", ["flag"], body)])
    assert interp.call_function("pick", [Literal(Value.boolean(True))]) == Value.string("early")
    assert interp.call_function("pick", [Literal(Value.boolean(False))]) == Value.string("late")


def test_function_sees_globals():
    interp = make_interpreter()
    interp.run(
        [
            VarDef("greeting", s("hi")),
            FuncDef("get", [], [ReturnStmt(Identifier("greeting"))]),
        ]
    )
    assert interp.call_function("get", []) == Value.string("hi")


def test_recursive_function_prints_countdown():
    interp = make_interpreter()
    body = [
        IfStmt(
            BinaryExpr(">", Identifier("n"), i(0)),
            [
                ExprStmt(FuncCall("print", [Identifier("n")])),
                ExprStmt(
                    FuncCall("down", [BinaryExpr("-", Identifier("n"), i(1))])
                ),
            ],
        )
    ]
    interp.run([FuncDef("down", ["n"], body), ExprStmt(FuncCall("down", [i(3)]))])
    assert interp.stdout.getvalue().split() == ["3", "2", "1"]
    assert len(interp.environment.scopes) == 1


def test_return_at_top_level_is_an_error():
    with pytest.raises(YoplError):
        make_interpreter().run([ReturnStmt(i(1))])


def test_execute_block_runs_in_order():
    interp = make_interpreter()
    interp.execute_block(
        [
            ExprStmt(FuncCall("print", [s("first")])),
            ExprStmt(FuncCall("print", [s("second")])),
        ]
    )
    assert interp.stdout.getvalue().splitlines() == ["first", "second"]


def test_call_module_function_missing_gives_nil():
    interp = make_interpreter()
    assert interp.call_module_function("nothing", []) == Value.nil()