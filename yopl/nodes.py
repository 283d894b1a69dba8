"""Syntax-tree nodes: statements that run and expressions that produce values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from yopl.environment import ReturnSignal, UserFunction, evaluate_binary
from yopl.values import Value, ValueKind, YoplError

if TYPE_CHECKING:
    from yopl.interpreter import Interpreter


class Statement(ABC):
    """A node that is executed for its effect."""

    @abstractmethod
    def describe(self) -> str:
        """Readable dump of the node."""

    @abstractmethod
    def execute(self, interpreter: Interpreter) -> None:
        """Run the statement."""


class Expression(ABC):
    """A node that evaluates to a value."""

    @abstractmethod
    def describe(self) -> str:
        """Readable dump of the node."""

    @abstractmethod
    def evaluate(self, interpreter: Interpreter) -> Value:
        """Compute the value of the expression."""


def _describe_block(statements: list[Statement]) -> str:
    return "".join(f"\t\t{statement.describe()}\n" for statement in statements)


@dataclass
class VarDef(Statement):
    """`let name = value;`"""

    name: str
    value: Expression

    def describe(self) -> str:
        return (
            "[VARIABLE_DEFINATION] => {\n"
            f"\t[VARIABLE_NAME] => {self.name}\n"
            f"\t[VARIABLE_VALUE] => {self.value.describe()}\n"
            "\n}"
        )

    def execute(self, interpreter: Interpreter) -> None:
        interpreter.environment.define_variable(self.name, self.value.evaluate(interpreter))


@dataclass
class VarAssign(Statement):
    """`name = value;`"""

    name: str
    value: Expression

    def describe(self) -> str:
        return (
            "[VARIABLE_ASSIGN] => {\n"
            f"\t[VARIABLE_NAME] => {self.name}\n"
            f"\t[VARIABLE_VALUE] => {self.value.describe()}\n"
            "\n}"
        )

    def execute(self, interpreter: Interpreter) -> None:
        interpreter.environment.assign_variable(self.name, self.value.evaluate(interpreter))


@dataclass
class FuncDef(Statement):
    """`function name(params) { body }`"""

    name: str
    parameters: list[str] = field(default_factory=list)
    body: list[Statement] = field(default_factory=list)

    def describe(self) -> str:
        return (
            "[FUNCTION_DEFINITION] {\n"
            f"\tName: {self.name}\n"
            f"\tParameters: ({', '.join(self.parameters)})\n"
            "\tBody:\n"
            f"{_describe_block(self.body)}"
            "}"
        )

    def execute(self, interpreter: Interpreter) -> None:
        interpreter.environment.define_function(
            self.name, UserFunction(list(self.parameters), list(self.body))
        )


@dataclass
class ReturnStmt(Statement):
    """`return value;`"""

    value: Expression | None = None

    def describe(self) -> str:
        shown = self.value.describe() if self.value is not None else "null"
        return f"[RETURN_STATEMENT] Value: {shown}"

    def execute(self, interpreter: Interpreter) -> None:
        result = self.value.evaluate(interpreter) if self.value is not None else Value.nil()
        raise ReturnSignal(result)


@dataclass
class IfStmt(Statement):
    """`if condition { body } else { else_body }`"""

    condition: Expression | None
    body: list[Statement] = field(default_factory=list)
    else_body: list[Statement] = field(default_factory=list)

    def describe(self) -> str:
        condition = self.condition.describe() if self.condition is not None else "null"
        text = (
            "[IF_STATEMENT] {\n"
            f"\tCondition: {condition}\n"
            "\tIf Body:\n"
            f"{_describe_block(self.body)}"
        )
        if self.else_body:
            text += f"\tElse Body:\n{_describe_block(self.else_body)}"
        return text + "}"

    def execute(self, interpreter: Interpreter) -> None:
        value = self.condition.evaluate(interpreter) if self.condition is not None else Value.nil()
        interpreter.execute_block(self.body if value.is_truthy() else self.else_body)


@dataclass
class ExprStmt(Statement):
    """An expression evaluated for its side effects."""

    expression: Expression

    def describe(self) -> str:
        return f"[EXPRESSION_STATEMENT] {self.expression.describe()}"

    def execute(self, interpreter: Interpreter) -> None:
        self.expression.evaluate(interpreter)


@dataclass
class FuncCall(Expression):
    """`name(arguments)`"""

    name: str
    arguments: list[Expression] = field(default_factory=list)

    def describe(self) -> str:
        args = ", ".join(argument.describe() for argument in self.arguments)
        return f"Call({self.name}({args}))"

    def evaluate(self, interpreter: Interpreter) -> Value:
        return interpreter.call_function(self.name, self.arguments)


@dataclass
class Identifier(Expression):
    """A reference to a variable."""

    name: str

    def describe(self) -> str:
        return f"Identifier({self.name})"

    def evaluate(self, interpreter: Interpreter) -> Value:
        return interpreter.environment.get_variable(self.name)


@dataclass
class Literal(Expression):
    """A constant value written in the program."""

    value: Value

    def describe(self) -> str:
        return f"Literal({self.value.describe()})"

    def evaluate(self, interpreter: Interpreter) -> Value:
        return self.value


@dataclass
class BinaryExpr(Expression):
    """`left op right`"""

    op: str
    left: Expression
    right: Expression

    def describe(self) -> str:
        return f"({self.left.describe()} {self.op} {self.right.describe()})"

    def evaluate(self, interpreter: Interpreter) -> Value:
        left = self.left.evaluate(interpreter)
        right = self.right.evaluate(interpreter)
        return evaluate_binary(self.op, left, right)


@dataclass
class UnaryExpr(Expression):
    """`op operand`; only negation is supported."""

    op: str
    operand: Expression

    def describe(self) -> str:
        return f"({self.op}{self.operand.describe()})"

    def evaluate(self, interpreter: Interpreter) -> Value:
        value = self.operand.evaluate(interpreter)
        if self.op != "-":
            raise YoplError(f"Unsupported unary operator: {self.op}")
        if value.kind is ValueKind.INTEGER:
            return Value.integer(-value.payload)
        if value.kind is ValueKind.DECIMAL:
            return Value.decimal(-value.payload)
        raise YoplError(f"Unary '-' applied to non-number: {value.describe()}")