"""Core: configuración, dominio y serialización, sin I/O."""
