"""ShareSpace: workspaces con membresía y ciclo de vida de archivos."""

__version__ = "0.1.0"
