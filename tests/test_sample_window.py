"""Tests del ring buffer de muestras con expiración."""

import pytest

from bridge_api.core.window import SampleWindow, ScalarState


# =============================================================================
# RING
# =============================================================================

class TestRingWrite:
    """La escritura avanza el cursor módulo capacidad."""

    def test_capacity_plus_one_overwrites_oldest(self):
        window = SampleWindow(capacity=4, max_age_ms=25000)

        for i in range(1, 6):
            window.write(i, now_ms=1000)

        assert len(window) == 4
        assert 1 not in window.values()
        # Orden de ring: el slot 0 contiene la muestra #5
        assert window.values() == [5, 2, 3, 4]

    def test_cursor_wraps(self):
        window = SampleWindow(capacity=3)

        for i in range(3):
            window.write(i + 10, now_ms=0)

        assert window.cursor == 0

    def test_default_capacity(self):
        assert SampleWindow().capacity == 20

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            SampleWindow(capacity=0)

    def test_latest_follows_cursor(self):
        window = SampleWindow(capacity=2)
        window.write(1, now_ms=0)
        window.write(2, now_ms=0)
        window.write(3, now_ms=0)

        assert window.latest().value == 3

    def test_latest_on_empty_window(self):
        assert SampleWindow(capacity=3).latest() is None

    def test_clear(self):
        window = SampleWindow(capacity=3)
        window.write(1, now_ms=0)
        window.clear()

        assert window.values() == []
        assert window.cursor == 0


# =============================================================================
# EXPIRACIÓN
# =============================================================================

class TestEviction:
    """Slots con edad > max_age_ms se vacían en la pasada de expiración."""

    def test_sample_kept_just_before_max_age(self):
        window = SampleWindow(capacity=5, max_age_ms=25000)
        window.write(40, now_ms=0)

        evicted = window.evict_expired(now_ms=24999)

        assert evicted == 0
        assert window.values() == [40]

    def test_sample_kept_at_exact_max_age(self):
        window = SampleWindow(capacity=5, max_age_ms=25000)
        window.write(40, now_ms=0)

        window.evict_expired(now_ms=25000)

        assert window.values() == [40]

    def test_sample_evicted_after_max_age(self):
        window = SampleWindow(capacity=5, max_age_ms=25000)
        window.write(40, now_ms=0)

        evicted = window.evict_expired(now_ms=25001)

        assert evicted == 1
        assert window.values() == []
        assert len(window) == 0

    def test_eviction_leaves_holes_in_ring_order(self):
        window = SampleWindow(capacity=4, max_age_ms=25000)
        window.write(5, now_ms=10_000)
        window.write(1, now_ms=0)
        window.write(7, now_ms=10_000)
        window.write(2, now_ms=0)

        window.evict_expired(now_ms=26_000)

        assert window.values() == [5, 7]

    def test_latest_gone_after_eviction(self):
        window = SampleWindow(capacity=3, max_age_ms=100)
        window.write(9, now_ms=0)
        window.evict_expired(now_ms=101)

        assert window.latest() is None

    def test_eviction_does_not_move_cursor(self):
        window = SampleWindow(capacity=3, max_age_ms=100)
        window.write(1, now_ms=0)
        window.evict_expired(now_ms=1000)

        assert window.cursor == 1


# =============================================================================
# CERO COMO VALOR
# =============================================================================

class TestZeroReadings:
    def test_zero_reading_is_kept(self):
        window = SampleWindow(capacity=3)
        window.write(0, now_ms=0)
        window.write(4, now_ms=0)

        assert window.values() == [0, 4]

    def test_zero_as_empty_filters_zero(self):
        window = SampleWindow(capacity=3, zero_as_empty=True)
        window.write(0, now_ms=0)
        window.write(4, now_ms=0)

        assert window.values() == [4]
        # La muestra sigue ocupando el slot
        assert len(window) == 2


class TestScalarState:
    def test_initial_value(self):
        assert ScalarState().value == 0

    def test_overwrite(self):
        state = ScalarState()
        state.write(15)
        state.write(3)

        assert state.value == 3

    def test_has_value_only_after_write(self):
        state = ScalarState()
        assert state.has_value is False

        state.write(0)

        assert state.has_value is True
        assert state.value == 0
