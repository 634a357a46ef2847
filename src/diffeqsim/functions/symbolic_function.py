# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Symbolic Function - ScalarFunction defined by a SymPy expression

The expression is compiled once with ``sympy.lambdify`` against an ordered
symbol list that mirrors the state layout (dynamical variables first,
optionally the time symbol last). Only the numeric value is used; the
gradient is still the base class's finite-difference estimate.
"""

from typing import Dict, Optional, Sequence, Union

import numpy as np
import sympy as sp

from .scalar_function import ScalarFunction


class SymbolicFunction(ScalarFunction):
    """
    ScalarFunction compiled from a SymPy expression.

    Parameters
    ----------
    expr : sp.Expr or str
        Expression in terms of ``symbols`` (and ``parameters``)
    symbols : Sequence[sp.Symbol]
        Ordered symbols; symbols[i] reads x[i]
    parameters : Optional[Dict[sp.Symbol, float]]
        Numeric values substituted before compilation

    Raises
    ------
    ValueError
        If the expression has free symbols that are neither in ``symbols``
        nor in ``parameters``

    Examples
    --------
    >>> x, y, t = sp.symbols("x y t")
    >>> k = sp.Symbol("k")
    >>> f = SymbolicFunction(-k * x + sp.sin(t), [x, y, t], {k: 2.0})
    >>> f(np.array([1.0, 0.0, 0.0]))
    -2.0
    """

    def __init__(
        self,
        expr: Union[sp.Expr, str],
        symbols: Sequence[sp.Symbol],
        parameters: Optional[Dict[sp.Symbol, float]] = None,
    ):
        expr = sp.sympify(expr)
        if parameters:
            expr = expr.subs(parameters)

        self.symbols = tuple(symbols)
        unknown = expr.free_symbols - set(self.symbols)
        if unknown:
            names = sorted(str(s) for s in unknown)
            raise ValueError(
                f"Expression {expr} has unbound symbols {names}. "
                f"Add them to the symbol list or give them parameter values."
            )

        self.expr = expr
        self._func = sp.lambdify(self.symbols, expr, modules="numpy")

    def calculate(self, x: np.ndarray) -> float:
        return float(self._func(*x[: len(self.symbols)]))

    @property
    def name(self) -> str:
        return str(self.expr)


__all__ = ["SymbolicFunction"]
