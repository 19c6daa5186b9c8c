"""
Blockplay Node Evaluator

Walks the Python AST of a generated program over a whitelisted set of
nodes. Anything outside the whitelist (attribute access, imports,
subscripts, function or class definitions, comprehensions, keyword
arguments) is rejected before it can run.

Supported statements: expression, assignment, augmented assignment, if,
while, for, pass, break, continue.
Supported expressions: constants, names, arithmetic, unary and boolean
operators, comparisons, conditional expressions, calls to environment
functions, list and tuple literals.
"""

from __future__ import annotations

import ast
import operator
from typing import Any, Callable, Dict, List

from blockplay.errors import ExecutionError
from blockplay.runtime.environment import Environment

BINARY_OPERATORS: Dict[type, Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

UNARY_OPERATORS: Dict[type, Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: operator.not_,
}

COMPARE_OPERATORS: Dict[type, Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
}


class _Break(Exception):
    pass


class _Continue(Exception):
    pass


class NodeEvaluator:
    """Evaluates a parsed program against an Environment."""

    def __init__(self, environment: Environment):
        self.environment = environment

    def run(self, module: ast.Module) -> None:
        try:
            self._exec_block(module.body)
        except (_Break, _Continue):
            raise ExecutionError("'break' or 'continue' outside loop")

    # Statements

    def _exec_block(self, statements: List[ast.stmt]) -> None:
        for statement in statements:
            self._exec(statement)

    def _exec(self, node: ast.stmt) -> None:
        if isinstance(node, ast.Expr):
            self.evaluate(node.value)
        elif isinstance(node, ast.Assign):
            value = self.evaluate(node.value)
            for target in node.targets:
                self.environment.assign(self._target_name(target), value)
        elif isinstance(node, ast.AugAssign):
            name = self._target_name(node.target)
            op = BINARY_OPERATORS.get(type(node.op))
            if op is None:
                raise _disallowed(node.op)
            self.environment.assign(name, op(self.environment.lookup(name), self.evaluate(node.value)))
        elif isinstance(node, ast.If):
            if self.evaluate(node.test):
                self._exec_block(node.body)
            else:
                self._exec_block(node.orelse)
        elif isinstance(node, ast.While):
            self._exec_while(node)
        elif isinstance(node, ast.For):
            self._exec_for(node)
        elif isinstance(node, ast.Pass):
            pass
        elif isinstance(node, ast.Break):
            raise _Break()
        elif isinstance(node, ast.Continue):
            raise _Continue()
        else:
            raise _disallowed(node)

    def _exec_while(self, node: ast.While) -> None:
        while self.evaluate(node.test):
            try:
                self._exec_block(node.body)
            except _Break:
                return
            except _Continue:
                continue
        self._exec_block(node.orelse)

    def _exec_for(self, node: ast.For) -> None:
        name = self._target_name(node.target)
        for item in self.evaluate(node.iter):
            self.environment.assign(name, item)
            try:
                self._exec_block(node.body)
            except _Break:
                return
            except _Continue:
                continue
        self._exec_block(node.orelse)

    def _target_name(self, target: ast.expr) -> str:
        if not isinstance(target, ast.Name):
            raise _disallowed(target)
        return target.id

    # Expressions

    def evaluate(self, node: ast.expr) -> Any:
        if isinstance(node, ast.Constant):
            return node.value
        if isinstance(node, ast.Name):
            return self.environment.lookup(node.id)
        if isinstance(node, ast.BinOp):
            op = BINARY_OPERATORS.get(type(node.op))
            if op is None:
                raise _disallowed(node.op)
            return op(self.evaluate(node.left), self.evaluate(node.right))
        if isinstance(node, ast.UnaryOp):
            op = UNARY_OPERATORS.get(type(node.op))
            if op is None:
                raise _disallowed(node.op)
            return op(self.evaluate(node.operand))
        if isinstance(node, ast.BoolOp):
            return self._eval_bool_op(node)
        if isinstance(node, ast.Compare):
            return self._eval_compare(node)
        if isinstance(node, ast.IfExp):
            return self.evaluate(node.body) if self.evaluate(node.test) else self.evaluate(node.orelse)
        if isinstance(node, ast.Call):
            return self._eval_call(node)
        if isinstance(node, ast.List):
            return [self.evaluate(e) for e in node.elts]
        if isinstance(node, ast.Tuple):
            return tuple(self.evaluate(e) for e in node.elts)
        raise _disallowed(node)

    def _eval_bool_op(self, node: ast.BoolOp) -> Any:
        value = None
        if isinstance(node.op, ast.And):
            for operand in node.values:
                value = self.evaluate(operand)
                if not value:
                    return value
            return value
        for operand in node.values:
            value = self.evaluate(operand)
            if value:
                return value
        return value

    def _eval_compare(self, node: ast.Compare) -> bool:
        left = self.evaluate(node.left)
        for op_node, comparator in zip(node.ops, node.comparators):
            op = COMPARE_OPERATORS.get(type(op_node))
            if op is None:
                raise _disallowed(op_node)
            right = self.evaluate(comparator)
            if not op(left, right):
                return False
            left = right
        return True

    def _eval_call(self, node: ast.Call) -> Any:
        if not isinstance(node.func, ast.Name):
            raise _disallowed(node.func)
        if node.keywords:
            raise ExecutionError("keyword arguments are not allowed")
        function = self.environment.lookup(node.func.id)
        if not self.environment.is_function(function):
            raise ExecutionError(f"'{node.func.id}' is not callable")
        args = []
        for arg in node.args:
            if isinstance(arg, ast.Starred):
                raise _disallowed(arg)
            args.append(self.evaluate(arg))
        return function(*args)


def _disallowed(node: ast.AST) -> ExecutionError:
    line = getattr(node, "lineno", None)
    where = f" (line {line})" if line is not None else ""
    return ExecutionError(f"{type(node).__name__} is not allowed{where}")
