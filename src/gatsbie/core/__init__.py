"""Core del SDK: configuración, errores y modelos (sin I/O)."""
