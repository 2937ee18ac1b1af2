"""
Reverse-mode automatic differentiation on a thread-local tape.

Every operation on a :class:`Var` appends a node to the calling thread's tape.
Nodes refer to their operands by position, so a gradient is one reverse sweep
and a Hessian row is one forward tangent sweep followed by a reverse sweep.
``Var`` objects must not be shared between threads.
"""

import math
import threading
from typing import List, NamedTuple, Sequence, Tuple, Union

from ficcalm.errors import InvalidValueError

Number = Union[int, float]


class _Node(NamedTuple):
    op: str
    parents: Tuple[int, ...]
    value: float
    const: float = 0.0


class _Tape(threading.local):
    def __init__(self):
        self.nodes: List[_Node] = []


_tape = _Tape()


def reset_tape() -> None:
    """Clear the current thread's tape; existing ``Var`` objects become invalid."""
    _tape.nodes = []


def tape_size() -> int:
    return len(_tape.nodes)


def _record(op: str, parents: Tuple[int, ...], value: float, const: float = 0.0) -> "Var":
    nodes = _tape.nodes
    nodes.append(_Node(op, parents, value, const))
    return Var._from_index(len(nodes) - 1, value)


class Var:
    """A scalar recorded on the tape."""

    __slots__ = ("index", "value")

    def __init__(self, value: Number):
        nodes = _tape.nodes
        nodes.append(_Node("input", (), float(value)))
        self.index = len(nodes) - 1
        self.value = float(value)

    @classmethod
    def _from_index(cls, index: int, value: float) -> "Var":
        var = cls.__new__(cls)
        var.index = index
        var.value = value
        return var

    @property
    def id(self) -> int:
        return self.index

    def __add__(self, other):
        if isinstance(other, Var):
            return _record("add", (self.index, other.index), self.value + other.value)
        return _record("addc", (self.index,), self.value + other, other)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Var):
            return _record("sub", (self.index, other.index), self.value - other.value)
        return _record("addc", (self.index,), self.value - other, -other)

    def __rsub__(self, other):
        return _record("rsubc", (self.index,), other - self.value, other)

    def __mul__(self, other):
        if isinstance(other, Var):
            return _record("mul", (self.index, other.index), self.value * other.value)
        return _record("mulc", (self.index,), self.value * other, other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Var):
            return _record("div", (self.index, other.index), self.value / other.value)
        return _record("mulc", (self.index,), self.value / other, 1.0 / other)

    def __rtruediv__(self, other):
        return _record("rdivc", (self.index,), other / self.value, other)

    def __neg__(self):
        return _record("mulc", (self.index,), -self.value, -1.0)

    def __pow__(self, exponent: Number):
        if isinstance(exponent, Var):
            raise InvalidValueError("Only constant exponents are supported; use exp(y * log(x))")
        return _record("powc", (self.index,), self.value ** exponent, exponent)

    def exp(self) -> "Var":
        return _record("exp", (self.index,), math.exp(self.value))

    def log(self) -> "Var":
        if self.value <= 0:
            raise InvalidValueError(f"log of non-positive value {self.value}")
        return _record("log", (self.index,), math.log(self.value))

    def sqrt(self) -> "Var":
        return _record("powc", (self.index,), math.sqrt(self.value), 0.5)

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"Var(index={self.index}, value={self.value})"


def exp(x: Var) -> Var:
    return x.exp()


def log(x: Var) -> Var:
    return x.log()


def sqrt(x: Var) -> Var:
    return x.sqrt()


def _partials(node: _Node, nodes: List[_Node], tangents=None):
    """Local partials ``dz/dparent`` and, given tangents, their directional derivatives."""
    op = node.op
    p = node.parents
    zero = tangents is None
    if op in ("add", "sub"):
        w = (1.0, 1.0 if op == "add" else -1.0)
        return w, (0.0, 0.0)
    if op == "addc":
        return (1.0,), (0.0,)
    if op == "rsubc":
        return (-1.0,), (0.0,)
    if op == "mulc":
        return (node.const,), (0.0,)

    x = nodes[p[0]].value
    dx = 0.0 if zero else tangents[p[0]]
    if op == "mul":
        y = nodes[p[1]].value
        dy = 0.0 if zero else tangents[p[1]]
        return (y, x), (dy, dx)
    if op == "div":
        y = nodes[p[1]].value
        dy = 0.0 if zero else tangents[p[1]]
        w = (1.0 / y, -x / (y * y))
        dw = (-dy / (y * y), -dx / (y * y) + 2.0 * x * dy / (y ** 3))
        return w, dw
    if op == "rdivc":
        c = node.const
        return (-c / (x * x),), (2.0 * c * dx / (x ** 3),)
    if op == "powc":
        k = node.const
        return (k * x ** (k - 1),), (k * (k - 1) * x ** (k - 2) * dx,)
    if op == "exp":
        return (node.value,), (node.value * dx,)
    if op == "log":
        return (1.0 / x,), (-dx / (x * x),)
    raise InvalidValueError(f"Unknown tape operation {op}")


def backward(result: Var) -> List[float]:
    """Adjoints of ``result`` with respect to every node on the tape, by node id."""
    nodes = _tape.nodes
    adjoints = [0.0] * len(nodes)
    adjoints[result.index] = 1.0
    for i in range(result.index, -1, -1):
        a = adjoints[i]
        node = nodes[i]
        if a == 0.0 or not node.parents:
            continue
        w, _ = _partials(node, nodes)
        for parent, weight in zip(node.parents, w):
            adjoints[parent] += weight * a
    return adjoints


def gradient(result: Var, inputs: Sequence[Var]) -> List[float]:
    adjoints = backward(result)
    return [adjoints[x.index] for x in inputs]


def hessian(result: Var, inputs: Sequence[Var]) -> List[List[float]]:
    """Second derivatives of ``result`` with respect to ``inputs``.

    Row ``k`` is obtained by seeding a forward tangent on ``inputs[k]`` and
    propagating adjoints together with their tangents back through the tape.
    """
    nodes = _tape.nodes
    n = result.index + 1
    rows = []
    for seed in inputs:
        tangents = [0.0] * n
        tangents[seed.index] = 1.0
        for i in range(n):
            node = nodes[i]
            if node.parents:
                w, _ = _partials(node, nodes, tangents)
                tangents[i] = sum(weight * tangents[j] for j, weight in zip(node.parents, w))

        adjoints = [0.0] * n
        adjoint_tangents = [0.0] * n
        adjoints[result.index] = 1.0
        for i in range(n - 1, -1, -1):
            node = nodes[i]
            if not node.parents:
                continue
            a = adjoints[i]
            da = adjoint_tangents[i]
            w, dw = _partials(node, nodes, tangents)
            for parent, weight, dweight in zip(node.parents, w, dw):
                adjoints[parent] += weight * a
                adjoint_tangents[parent] += weight * da + dweight * a
        rows.append([adjoint_tangents[x.index] for x in inputs])
    return rows
