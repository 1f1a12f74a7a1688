"""Adaptadores de I/O (HTTP).

Por qué un paquete:
- Aísla httpx del dominio; el Core solo conoce `Request` y `ServiceResult`.
"""
