"""Adaptadores de I/O: el invocador HTTP y un cliente por servicio remoto."""
