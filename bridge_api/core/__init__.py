"""Core module - Ingesta de líneas y ventanas de muestras.

Estructura:
- domain/      → Métricas y muestras
- parsing/     → Clasificación y parseo de líneas serie
- window/      → Ring buffer con expiración y escalar
- state/       → Contexto de sensores por conexión
- warnings/    → Advertencias por umbral
- monitoring/  → Estadísticas y métricas Prometheus
"""
