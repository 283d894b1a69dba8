"""Runs a parsed program and provides the builtin functions."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from yopl.environment import Environment, ReturnSignal
from yopl.nodes import Expression, Statement
from yopl.values import Value, ValueKind, YoplError, read_input


class ProgramExit(Exception):
    """Raised when the program calls the exit builtin."""

    def __init__(self, code: int) -> None:
        super().__init__(f"Program exited with code {code}")
        self.code = code


class Interpreter:
    """Executes statements against an environment, with its own input and output."""

    def __init__(
        self,
        environment: Environment | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.environment = environment if environment is not None else Environment()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def run(self, statements: Sequence[Statement]) -> None:
        """Execute a whole program."""
        try:
            self.execute_block(statements)
        except ReturnSignal:
            raise YoplError("Return called on a non-function block!") from None

    def execute_block(self, statements: Sequence[Statement]) -> None:
        for statement in statements:
            statement.execute(self)

    def call_function(self, name: str, arguments: Sequence[Expression]) -> Value:
        """Call a builtin, user-defined or included module function by name."""
        environment = self.environment
        if not environment.function_exists(name):
            raise YoplError(f"Undefined function {name}")
        if environment.is_builtin(name):
            if name == "input":
                return self.builtin_input()
            if name == "print":
                self.builtin_print(arguments)
            elif name == "include":
                self.builtin_include(arguments)
            elif name == "exit":
                raise ProgramExit(1)
            elif name == "typeof":
                return Value.string(self.builtin_typeof(arguments))
            return Value.nil()
        if environment.is_user_function(name):
            return self.call_user_function(name, arguments)
        return self.call_module_function(name, arguments)

    def call_user_function(self, name: str, arguments: Sequence[Expression]) -> Value:
        function = self.environment.functions[name]
        if len(function.parameters) != len(arguments):
            raise YoplError(
                f"Function {name} expects {len(function.parameters)} arguments"
                f" but got {len(arguments)}"
            )
        values = [argument.evaluate(self) for argument in arguments]
        with self.environment.scope():
            for parameter, value in zip(function.parameters, values):
                self.environment.define_variable(parameter, value)
            try:
                self.execute_block(function.body)
            except ReturnSignal as signal:
                return signal.value
        return Value.nil()

    def call_module_function(self, name: str, arguments: Sequence[Expression]) -> Value:
        values = [argument.evaluate(self) for argument in arguments]
        native = self.environment.find_module_function(name)
        if native is None:
            return Value.nil()
        return native(values)

    def builtin_print(self, arguments: Sequence[Expression]) -> None:
        text = "".join(argument.evaluate(self).display() for argument in arguments)
        self.stdout.write(text + "\n")

    def builtin_include(self, arguments: Sequence[Expression]) -> None:
        if len(arguments) != 1:
            raise YoplError("Include function expects only 1 argument")
        value = arguments[0].evaluate(self)
        if value.kind is not ValueKind.STRING:
            raise YoplError("include name must be of string type")
        self.environment.include_module(value.payload)

    def builtin_typeof(self, arguments: Sequence[Expression]) -> str:
        if len(arguments) != 1:
            raise YoplError("typeof function expects only 1 argument")
        return arguments[0].evaluate(self).type_name()

    def builtin_input(self) -> Value:
        return read_input(self.stdin)