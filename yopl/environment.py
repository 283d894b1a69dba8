"""Variable scopes, function tables and native modules."""

from __future__ import annotations

import operator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Sequence

from yopl.values import Value, ValueKind, YoplError

NativeFunction = Callable[[Sequence[Value]], Value]

KEYWORDS = frozenset({"let", "function", "return", "if", "else"})
BUILTINS = frozenset({"print", "exit", "typeof", "input", "include"})


@dataclass
class UserFunction:
    """A function defined by the program."""

    parameters: list[str] = field(default_factory=list)
    body: list[Any] = field(default_factory=list)


class ReturnSignal(Exception):
    """Carries a returned value out of a function body."""

    def __init__(self, value: Value) -> None:
        super().__init__("Function returned")
        self.value = value


def strlen(args: Sequence[Value]) -> Value:
    """Byte length (UTF-8) of a single string argument, or nil otherwise."""
    if len(args) == 1 and args[0].kind is ValueKind.STRING:
        return Value.integer(len(args[0].payload.encode("utf-8")))
    return Value.nil()


class Environment:
    """State shared by a running program: scopes, functions and modules."""

    def __init__(self) -> None:
        self.scopes: list[dict[str, Value]] = [{}]
        self.functions: dict[str, UserFunction] = {}
        self.modules: dict[str, dict[str, NativeFunction]] = {}
        self.included_modules: list[str] = []
        self.register_module("string", {"strlen": strlen})

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        if len(self.scopes) == 1:
            raise YoplError("Cannot pop the global scope")
        self.scopes.pop()

    @contextmanager
    def scope(self) -> Iterator[dict[str, Value]]:
        """Open a new innermost scope for the duration of the block."""
        self.push_scope()
        try:
            yield self.scopes[-1]
        finally:
            self.pop_scope()

    def define_variable(self, name: str, value: Value) -> None:
        current = self.scopes[-1]
        if name in current:
            raise YoplError(f"Variable {name} already defined in the current scope!")
        current[name] = value

    def assign_variable(self, name: str, value: Value) -> None:
        """Rebind the innermost visible variable; unknown names are ignored."""
        for scope in reversed(self.scopes):
            if name in scope:
                scope[name] = value
                return

    def get_variable(self, name: str) -> Value:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise YoplError(f"Undefined variable: {name}")

    def register_module(self, name: str, functions: Mapping[str, NativeFunction]) -> None:
        self.modules[name] = dict(functions)

    def include_module(self, name: str) -> None:
        if name not in self.modules:
            raise YoplError(f"No file or module named {name} found!")
        if name not in self.included_modules:
            self.included_modules.append(name)

    def define_function(self, name: str, function: UserFunction) -> None:
        if self.function_exists(name):
            raise YoplError(f"Function {name} already defined once")
        self.functions[name] = function

    def is_user_function(self, name: str) -> bool:
        return name in self.functions

    def is_builtin(self, name: str) -> bool:
        return name in BUILTINS

    def function_exists(self, name: str) -> bool:
        return (
            self.is_builtin(name)
            or self.find_module_function(name) is not None
            or self.is_user_function(name)
        )

    def find_module_function(self, name: str) -> NativeFunction | None:
        """The native function of that name from the first included module having it."""
        for module in self.included_modules:
            functions = self.modules.get(module, {})
            if name in functions:
                return functions[name]
        return None


_ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
}

_COMPARISONS = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}


def evaluate_binary(op: str, left: Value, right: Value) -> Value:
    """Apply a binary operator to two values."""
    if op in _ARITHMETIC:
        return _ARITHMETIC[op](left, right)
    if op in _COMPARISONS:
        return Value.boolean(_COMPARISONS[op](left, right))
    raise YoplError(f"Unknown operator: {op}")