# yopl

The runtime core of YOPL, a small dynamically typed scripting language.
It has the value model, the variable and function environment, the
syntax-tree nodes and the interpreter that runs them.

## What the language has

- Values: integers, decimals, strings, booleans and `NULL`.
- Arithmetic `+ - * / %` and comparisons `> < >= <= == !=`. Two integer
  operands give an integer, and any decimal operand gives a decimal.
  Integer division and `%` truncate toward zero. `%` works only on
  integers. `+` also joins two strings, or a string and a number.
- `let` definitions in nested scopes. Assignment updates the nearest
  scope that holds the name. Assigning to a name that no scope holds
  does nothing.
- User functions with `return`, and `if` / `else`. A condition is true
  for `true`, a non-empty string or a number greater than zero.
- The built-ins `print`, `input`, `typeof`, `include` and `exit`.
- Native modules that a script brings in with `include`. The `string`
  module is registered by default and provides `strlen`, which returns
  the UTF-8 byte length of its single string argument.

## Modules

| Module             | Contents                                                                      |
|--------------------|-------------------------------------------------------------------------------|
| `yopl.values`      | `Value`, `ValueKind`, `YoplError`, `is_float`, `parse_input`, `read_input`    |
| `yopl.environment` | `Environment`, `UserFunction`, `ReturnSignal`, `evaluate_binary`, `strlen`    |
| `yopl.nodes`       | `VarDef`, `VarAssign`, `FuncDef`, `ReturnStmt`, `IfStmt`, `ExprStmt`, `FuncCall`, `Identifier`, `Literal`, `BinaryExpr`, `UnaryExpr` |
| `yopl.interpreter` | `Interpreter`, `ProgramExit`                                                  |

## Working with values

```python
from yopl.values import Value, YoplError, parse_input

total = Value.integer(2) + Value.decimal(0.5)
print(total.type_name())     # Number
print(total.display())       # 2.5

greeting = Value.string("n = ") + Value.integer(3)
print(greeting.display())    # n = 3

print(parse_input("42"))     # an integer Value
print(parse_input("4.5"))    # a decimal Value
print(parse_input("hello"))  # a string Value

try:
    Value.integer(1) % Value.decimal(2.0)
except YoplError as exc:
    print(exc)               # Invalid operation % on unsupported types!
```

## Running a program

Build a list of statement nodes from `yopl.nodes` and pass it to
`Interpreter.run`. The interpreter takes an `Environment` and the
streams that `input` reads from and `print` writes to:

```python
import io

from yopl.environment import Environment
from yopl.interpreter import Interpreter
from yopl.nodes import (
    BinaryExpr, ExprStmt, FuncCall, FuncDef, Identifier, Literal, ReturnStmt, VarDef,
)
from yopl.values import Value

program = [
    FuncDef("double", ["n"], [
        ReturnStmt(BinaryExpr("*", Identifier("n"), Literal(Value.integer(2)))),
    ]),
    VarDef("x", FuncCall("double", [Literal(Value.integer(21))])),
    ExprStmt(FuncCall("include", [Literal(Value.string("string"))])),
    ExprStmt(FuncCall("print", [Literal(Value.string("x = ")), Identifier("x")])),
    ExprStmt(FuncCall("print", [FuncCall("strlen", [Literal(Value.string("abc"))])])),
]

out = io.StringIO()
Interpreter(Environment(), io.StringIO(""), out).run(program)
print(out.getvalue())   # "x = 42\n3\n"
```

`print` writes the display form of each argument with nothing between
them, then a newline. Every node also has `describe()`, which returns a
readable dump of it.

A runtime error raises `YoplError`. Examples are an undefined variable
or function, a variable or function defined twice, a wrong argument
count, an operator on the wrong types, or `return` outside a function.
A call to `exit()` raises `ProgramExit` with `code` 1.

Further native modules can be added with
`Environment.register_module(name, {"fname": callable})`. Each callable
receives the list of argument `Value`s and returns a `Value`.

## What this package does not do

It has no lexer or parser and no command-line program. It does not read
`.yopl` source files. Programs must be given as syntax-tree nodes built
in Python. `include` only brings in native modules registered on the
`Environment`, and it cannot load other script files.