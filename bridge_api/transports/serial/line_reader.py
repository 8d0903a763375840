"""Lectura de líneas desde el dispositivo serie (Arduino).

Usa pyserial-asyncio para no bloquear el event loop: cada línea se entrega
cuando llega el delimitador configurado.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional

import serial_asyncio

from common.config import Settings

logger = logging.getLogger(__name__)


def decode_line(raw: bytes) -> str:
    return raw.decode("utf-8", errors="ignore")


async def read_lines(reader: asyncio.StreamReader, delimiter: str = "\n") -> AsyncIterator[str]:
    """Itera las líneas de un StreamReader hasta EOF.

    El delimitador no se incluye en la línea. Una línea más larga que el
    límite del reader se descarta con un warning.
    """
    separator = delimiter.encode("utf-8")

    while True:
        try:
            raw = await reader.readuntil(separator)
        except asyncio.IncompleteReadError as e:
            # EOF: la última línea puede venir sin delimitador.
            if e.partial:
                yield decode_line(e.partial)
            return
        except asyncio.LimitOverrunError as e:
            logger.warning("[SERIAL] Line exceeds buffer limit, discarding %d bytes", e.consumed)
            await reader.readexactly(e.consumed)
            continue

        yield decode_line(raw[: -len(separator)])


class SerialLineSource:
    """Conexión serie con el dispositivo de sensores."""

    def __init__(self, settings: Settings) -> None:
        self._port = settings.serial_port
        self._baud_rate = settings.baud_rate
        self._delimiter = settings.line_delimiter
        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None

    @property
    def is_connected(self) -> bool:
        return self._reader is not None and not self._reader.at_eof()

    async def open(self) -> None:
        """Abre el puerto. Un fallo aquí se propaga: el servicio no arranca."""
        self._reader, self._writer = await serial_asyncio.open_serial_connection(
            url=self._port,
            baudrate=self._baud_rate,
        )
        logger.info("[SERIAL] Opened %s @ %d baud", self._port, self._baud_rate)

    async def lines(self) -> AsyncIterator[str]:
        if self._reader is None:
            await self.open()
        async for line in read_lines(self._reader, self._delimiter):
            yield line

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            logger.info("[SERIAL] Closed %s", self._port)
        self._reader = None
        self._writer = None
