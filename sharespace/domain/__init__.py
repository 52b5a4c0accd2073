"""
Domain layer: entidades, tabla de capacidades y puertos (Protocols).
Sin dependencias de frameworks ni infraestructura.
"""
