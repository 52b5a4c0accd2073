"""
===============================================================================
APPLICATION LAYER
===============================================================================

Los casos de uso viven en `usecases/` (workspace/, files/). Devuelven
resultados tipados; nunca lanzan errores de negocio hacia la capa HTTP.
===============================================================================
"""
