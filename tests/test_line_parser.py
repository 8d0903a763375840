"""Tests del protocolo de líneas del dispositivo.

Ejecutar:
    pytest tests/test_line_parser.py -v
"""

import pytest

from bridge_api.core.domain import MetricKind
from bridge_api.core.parsing import LineOutcome, classify_line, parse_line, parse_value


# =============================================================================
# CLASIFICACIÓN POR PREFIJO
# =============================================================================

class TestClassifyLine:
    """Cada prefijo conocido se asocia a su métrica."""

    @pytest.mark.parametrize(
        "line,kind",
        [
            ("Hygrometer Value: 512", MetricKind.HYGROMETER),
            ("Water Level: 15", MetricKind.WATER_LEVEL),
            ("Flow Rate: 2.5", MetricKind.FLOW_RATE),
        ],
    )
    def test_known_prefixes(self, line, kind):
        assert classify_line(line) is kind

    def test_unknown_prefix(self):
        assert classify_line("DEBUG: booting") is None

    def test_prefix_must_open_the_line(self):
        assert classify_line("  Flow Rate: 2.5") is None
        assert classify_line("x Water Level: 1") is None

    def test_prefix_is_case_sensitive(self):
        assert classify_line("flow rate: 2.5") is None


# =============================================================================
# PARSEO DE VALORES
# =============================================================================

class TestParseLine:
    """El valor parseado es el literal tras quitar prefijo y espacios."""

    def test_flow_rate_float(self):
        result = parse_line("Flow Rate: 12.5")

        assert result.valid is True
        assert result.kind is MetricKind.FLOW_RATE
        assert result.value == 12.5

    def test_water_level_without_space(self):
        result = parse_line("Water Level:7")

        assert result.valid is True
        assert result.value == 7
        assert isinstance(result.value, int)

    def test_hygrometer_integer(self):
        result = parse_line("Hygrometer Value: 40")

        assert result.kind is MetricKind.HYGROMETER
        assert result.value == 40

    def test_crlf_terminator_is_stripped(self):
        result = parse_line("Hygrometer Value: 733\r\n")

        assert result.valid is True
        assert result.value == 733

    def test_surrounding_whitespace(self):
        assert parse_line("Flow Rate:    0.75   ").value == 0.75

    def test_negative_and_signed_values(self):
        assert parse_line("Water Level: -3").value == -3
        assert parse_line("Flow Rate: +1.5").value == 1.5

    def test_flow_rate_accepts_integer_literal(self):
        result = parse_line("Flow Rate: 3")

        assert result.valid is True
        assert result.value == 3.0

    def test_zero_is_a_valid_reading(self):
        result = parse_line("Flow Rate: 0.0")

        assert result.valid is True
        assert result.value == 0.0


# =============================================================================
# LÍNEAS IGNORADAS Y MALFORMADAS
# =============================================================================

class TestRejectedLines:
    """Líneas no reconocidas se ignoran; payloads inválidos se descartan."""

    def test_unrecognized_line_is_ignored(self):
        result = parse_line("DEBUG: booting")

        assert result.outcome is LineOutcome.IGNORED
        assert result.kind is None
        assert result.value is None

    def test_empty_line_is_ignored(self):
        assert parse_line("").outcome is LineOutcome.IGNORED

    @pytest.mark.parametrize(
        "line",
        [
            "Flow Rate: abc",
            "Flow Rate: nan",
            "Flow Rate: inf",
            "Flow Rate: -Infinity",
            "Flow Rate: 1e999",
            "Flow Rate:",
            "Water Level: 7.5",
            "Water Level: 1_000",
            "Hygrometer Value: 12abc",
            "Hygrometer Value:   ",
        ],
    )
    def test_malformed_payload_is_dropped(self, line):
        result = parse_line(line)

        assert result.outcome is LineOutcome.MALFORMED
        assert result.valid is False
        assert result.value is None
        assert result.error

    def test_malformed_keeps_metric_kind(self):
        result = parse_line("Flow Rate: abc")

        assert result.kind is MetricKind.FLOW_RATE

    def test_malformed_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            parse_line("Flow Rate: abc")

        assert "Malformed flow_rate line" in caplog.text


class TestParseValue:
    def test_integer_metric_rejects_decimal(self):
        with pytest.raises(ValueError):
            parse_value(MetricKind.HYGROMETER, "1.0")

    def test_float_metric_scientific_notation(self):
        assert parse_value(MetricKind.FLOW_RATE, "2.5e1") == 25.0
