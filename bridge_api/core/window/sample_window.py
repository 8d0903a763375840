from __future__ import annotations

from typing import List, Optional

from ..domain import Number, Sample


class SampleWindow:
    """Ventana circular de muestras por métrica.

    - Capacidad fija: el cursor de escritura avanza módulo ``capacity`` y
      sobrescribe el slot más antiguo al dar la vuelta.
    - Expiración perezosa: ``evict_expired(now_ms)`` vacía los slots cuya
      muestra supera ``max_age_ms``. No hay timer propio; lo invoca quien
      escribe (ver SensorContext).
    - Un slot vacío es ``None``; un 0 leído del sensor es una muestra válida.
      Con ``zero_as_empty`` los ceros se filtran de ``values()`` como hacía
      el dashboard legacy.
    """

    def __init__(self, capacity: int = 20, max_age_ms: int = 25000, *, zero_as_empty: bool = False) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = int(capacity)
        self._max_age_ms = int(max_age_ms)
        self._zero_as_empty = zero_as_empty
        self._slots: List[Optional[Sample]] = [None] * self._capacity
        self._cursor = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_age_ms(self) -> int:
        return self._max_age_ms

    @property
    def cursor(self) -> int:
        return self._cursor

    def write(self, value: Number, now_ms: int) -> None:
        self._slots[self._cursor] = Sample(value=value, captured_at_ms=int(now_ms))
        self._cursor = (self._cursor + 1) % self._capacity

    def evict_expired(self, now_ms: int) -> int:
        """Vacía los slots expirados. Devuelve cuántos se vaciaron."""
        evicted = 0
        for i, sample in enumerate(self._slots):
            if sample is not None and sample.is_expired(now_ms, self._max_age_ms):
                self._slots[i] = None
                evicted += 1
        return evicted

    def latest(self) -> Optional[Sample]:
        """Última muestra escrita, si sigue presente."""
        return self._slots[(self._cursor - 1) % self._capacity]

    def samples(self) -> List[Sample]:
        """Muestras presentes en orden de ring (no temporal)."""
        return [s for s in self._slots if s is not None]

    def values(self) -> List[Number]:
        values = [s.value for s in self._slots if s is not None]
        if self._zero_as_empty:
            values = [v for v in values if v != 0]
        return values

    def clear(self) -> None:
        self._slots = [None] * self._capacity
        self._cursor = 0

    def __len__(self) -> int:
        return sum(1 for s in self._slots if s is not None)
