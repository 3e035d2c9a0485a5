from sinaica.recopilacion.descargar_parametro import (
    sinaica_param_data,
    sinaica_param_data_range,
)
from sinaica.recopilacion.estaciones_sinaica import (
    sinaica_station_dates,
    sinaica_station_params,
)

__all__ = [
    "sinaica_param_data",
    "sinaica_param_data_range",
    "sinaica_station_dates",
    "sinaica_station_params",
]
