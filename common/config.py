from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv


class ConfigurationError(RuntimeError):
    """Configuración inválida o incompleta; el proceso no debe arrancar."""


def _default_env_file() -> str:
    # .env en la raíz del repo, junto a pyproject.toml.
    repo_root = Path(__file__).resolve().parents[1]
    return str(repo_root / ".env")


# Métrica -> prefijo de variables de entorno de umbrales.
_THRESHOLD_ENV_PREFIXES = {
    "hygrometer": "HYGROMETER",
    "flow_rate": "FLOW_RATE",
    "water_level": "WATER_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    serial_port: str
    baud_rate: int = 9600
    line_delimiter: str = "\n"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origin: str = "http://localhost:5173"

    window_capacity: int = 20
    max_sample_age_ms: int = 25000
    zero_as_empty: bool = False
    eviction_sweep_seconds: float = 0.0

    log_level: str = "INFO"

    # metric -> (warning_min, warning_max)
    thresholds: Dict[str, Tuple[Optional[float], Optional[float]]] = field(default_factory=dict)


def _env_int(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _load_thresholds() -> Dict[str, Tuple[Optional[float], Optional[float]]]:
    thresholds: Dict[str, Tuple[Optional[float], Optional[float]]] = {}
    for metric, prefix in _THRESHOLD_ENV_PREFIXES.items():
        low = _env_float(f"{prefix}_WARNING_MIN", None)
        high = _env_float(f"{prefix}_WARNING_MAX", None)
        if low is None and high is None:
            continue
        if low is not None and high is not None and low > high:
            raise ConfigurationError(f"{prefix}_WARNING_MIN > {prefix}_WARNING_MAX")
        thresholds[metric] = (low, high)
    return thresholds


def get_settings(**overrides) -> Settings:
    """Construye Settings desde .env + variables de entorno.

    Los ``overrides`` con valor distinto de None (p.ej. flags del CLI)
    tienen prioridad sobre el entorno.

    Raises:
        ConfigurationError: si falta SERIAL_PORT o algún valor es inválido.
    """
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("BRIDGE_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    delimiter = os.getenv("SERIAL_LINE_DELIMITER", "")
    # "\\n" en .env -> "\n"
    delimiter = codecs.decode(delimiter, "unicode_escape") if delimiter else "\n"

    values = dict(
        serial_port=os.getenv("SERIAL_PORT", "").strip(),
        baud_rate=_env_int("SERIAL_BAUD_RATE", 9600, minimum=1),
        line_delimiter=delimiter,
        host=os.getenv("BRIDGE_HOST", "0.0.0.0").strip() or "0.0.0.0",
        port=_env_int("BRIDGE_PORT", 3000, minimum=1),
        cors_origin=os.getenv("CORS_ALLOWED_ORIGIN", "http://localhost:5173").strip(),
        window_capacity=_env_int("WINDOW_CAPACITY", 20, minimum=1),
        max_sample_age_ms=_env_int("WINDOW_MAX_AGE_MS", 25000, minimum=0),
        zero_as_empty=_env_flag("WINDOW_ZERO_AS_EMPTY"),
        eviction_sweep_seconds=_env_float("EVICTION_SWEEP_SECONDS", 0.0),
        log_level=os.getenv("BRIDGE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        thresholds=_load_thresholds(),
    )
    values.update({k: v for k, v in overrides.items() if v is not None})

    if not values["serial_port"]:
        raise ConfigurationError("Serial port path is not defined (set SERIAL_PORT or --serial-port)")
    if values["eviction_sweep_seconds"] < 0:
        raise ConfigurationError("EVICTION_SWEEP_SECONDS must be >= 0")
    if not values["line_delimiter"]:
        raise ConfigurationError("SERIAL_LINE_DELIMITER must not be empty")

    level_name = str(values["log_level"]).strip().upper()
    # getLevelName devuelve el número solo para niveles registrados.
    level_no = logging.getLevelName(level_name)
    if not isinstance(level_no, int) or level_no == logging.NOTSET:
        raise ConfigurationError(f"Unknown log level: {level_name!r}")
    # WARN -> WARNING, FATAL -> CRITICAL (uvicorn solo acepta los canónicos)
    values["log_level"] = logging.getLevelName(level_no)

    return Settings(**values)
