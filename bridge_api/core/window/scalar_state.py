from __future__ import annotations

from ..domain import Number


class ScalarState:
    """Último valor de una métrica sin historial ni expiración.

    ``value`` vale ``initial`` hasta la primera escritura (es lo que se
    publica en el snapshot); ``has_value`` distingue ese estado inicial de
    una lectura real.
    """

    def __init__(self, initial: Number = 0) -> None:
        self._value: Number = initial
        self._written = False

    @property
    def value(self) -> Number:
        return self._value

    @property
    def has_value(self) -> bool:
        return self._written

    def write(self, value: Number) -> None:
        self._value = value
        self._written = True
