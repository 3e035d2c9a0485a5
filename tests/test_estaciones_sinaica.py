"""Tests for station parameter and date lookups."""

import logging
from unittest.mock import patch

import pytest

from sinaica import configuracion
from sinaica.catalogo import COLUMNAS_PARAMETROS
from sinaica.errores import InvalidArgumentError, TransportError
from sinaica.recopilacion.estaciones_sinaica import (
    main,
    sinaica_station_dates,
    sinaica_station_params,
    validar_estacion,
)

MODULE = "sinaica.recopilacion.estaciones_sinaica"


class TestValidarEstacion:
    """Tests for station id validation."""

    def test_integer_values_are_accepted(self) -> None:
        assert validar_estacion(271) == 271
        assert validar_estacion(271.0) == 271

    @pytest.mark.parametrize("value", ["271", 27.5, True, float("nan")])
    def test_non_integers_are_rejected(self, value) -> None:
        with pytest.raises(InvalidArgumentError, match="must be an integer"):
            validar_estacion(value)

    def test_missing_station(self) -> None:
        with pytest.raises(InvalidArgumentError, match="missing"):
            validar_estacion(None)


class TestSinaicaStationParams:
    """Tests for sinaica_station_params."""

    @patch(f"{MODULE}.post_sinaica")
    def test_returns_parameter_table(self, mock_post) -> None:
        """Given a parameter list, when querying, then param_code/param_name are returned."""
        mock_post.return_value = [
            {"parametro": "CO", "nombre": "Monóxido de carbono"},
            {"parametro": "O3", "nombre": "Ozono"},
        ]

        df = sinaica_station_params(271, "Crude")

        assert list(df.columns) == COLUMNAS_PARAMETROS
        assert list(df["param_code"]) == ["CO", "O3"]
        url, payload = mock_post.call_args[0][:2]
        assert url == configuracion.SINAICA_CNXN_URL
        assert payload == {"estId": 271, "metodo": "getParamsPorEstAjax", "tipoDatos": ""}

    @patch(f"{MODULE}.post_sinaica")
    def test_validated_type_suffix(self, mock_post) -> None:
        mock_post.return_value = []

        df = sinaica_station_params(271, "Validated")

        assert mock_post.call_args[0][1]["tipoDatos"] == "V"
        assert df.empty
        assert list(df.columns) == COLUMNAS_PARAMETROS

    @patch(f"{MODULE}.post_sinaica")
    def test_failures_are_logged_and_return_none(
        self, mock_post, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Given a transport failure, when querying, then a warning is logged and None returned."""
        mock_post.side_effect = TransportError("The request to <x> failed [500]")

        with caplog.at_level(logging.WARNING, logger="SINAICA"):
            result = sinaica_station_params(271)

        assert result is None
        assert "An error occurred downloading data from SINAICA" in caplog.text

    @patch(f"{MODULE}.post_sinaica")
    def test_unknown_field_names_return_none(self, mock_post) -> None:
        """Given a parameter list with unknown field names, when querying, then None is returned."""
        mock_post.return_value = [{"id": "O3", "text": "Ozono"}]

        assert sinaica_station_params(271) is None

    @patch(f"{MODULE}.post_sinaica")
    def test_invalid_type_still_raises(self, mock_post) -> None:
        with pytest.raises(InvalidArgumentError):
            sinaica_station_params(271, "Raw")

        mock_post.assert_not_called()


class TestSinaicaStationDates:
    """Tests for sinaica_station_dates."""

    @patch(f"{MODULE}.post_sinaica")
    def test_manual_dates_for_xalostoc(self, mock_post) -> None:
        mock_post.return_value = ["1997-01-02", "2018-04-28"]

        result = sinaica_station_dates(271, "Manual")

        assert result == ("1997-01-02", "2018-04-28")
        assert mock_post.call_args[0][1] == {
            "id": 271,
            "metodo": "getFechasLimiteEstacionAjax",
            "tipoDatos": "M",
        }

    @patch(f"{MODULE}.post_sinaica")
    def test_dates_as_a_single_record(self, mock_post) -> None:
        mock_post.return_value = [{"fechaIni": "2000-01-01", "fechaFin": "2018-01-01"}]

        assert sinaica_station_dates(271) == ("2000-01-01", "2018-01-01")

    @patch(f"{MODULE}.post_sinaica")
    def test_station_without_data(self, mock_post) -> None:
        mock_post.return_value = [None, None]

        assert sinaica_station_dates(271, "Manual") == (None, None)

    @patch(f"{MODULE}.post_sinaica")
    def test_failures_return_none(self, mock_post) -> None:
        mock_post.side_effect = TransportError("x did not return text/html")

        assert sinaica_station_dates(271) is None


class TestMain:
    """Tests for the sinaica-estacion command."""

    @pytest.fixture(autouse=True)
    def _logs(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(configuracion, "LOG_DIR", tmp_path / "logs")

    @patch(f"{MODULE}.post_sinaica")
    def test_reports_station(self, mock_post) -> None:
        mock_post.side_effect = [
            [{"parametro": "O3", "nombre": "Ozono"}],
            ["2000-01-01", "2018-01-01"],
        ]

        assert main(["271"]) == 0

    @patch(f"{MODULE}.post_sinaica")
    def test_unreachable_station_service(self, mock_post) -> None:
        mock_post.side_effect = TransportError("down")

        assert main(["271", "--type", "Manual"]) == 1
