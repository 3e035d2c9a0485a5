from sinaica.procesamiento.normalizar_sinaica import (
    cargar_estaciones,
    filtrar_valores,
    limpiar_datos_crudos,
    limpiar_datos_manuales,
    limpiar_fechas_estacion,
    limpiar_parametros_estacion,
    unir_estaciones,
)

__all__ = [
    "cargar_estaciones",
    "filtrar_valores",
    "limpiar_datos_crudos",
    "limpiar_datos_manuales",
    "limpiar_fechas_estacion",
    "limpiar_parametros_estacion",
    "unir_estaciones",
]
