"""Tests for the typed accessor layer and shared status views."""

import pytest

from thinqbridge.models.device_model import DeviceModel
from thinqbridge.status import AirQualityData, ApplianceStatus, BaseStatus


class CourseStatus(ApplianceStatus):
    """Minimal appliance status for exercising the shared durations."""

    @property
    def is_power_on(self) -> bool:
        return self.get_boolean("power")

    @property
    def is_running(self) -> bool:
        return self.get_string("state") == "RUNNING"


class TestDefaults:
    """Every accessor returns the supplied default for absent keys."""

    @pytest.mark.parametrize("data", [None, {}, {"other": 1}, "not-a-dict", 42, []])
    def test_missing_key_returns_default(self, data):
        """Test each accessor with a key that does not exist."""
        status = BaseStatus(data)

        assert status.get_value("a.b", "fallback") == "fallback"
        assert status.get_boolean("a.b", True) is True
        assert status.get_boolean("a.b") is False
        assert status.get_int("a.b", 7) == 7
        assert status.get_float("a.b", 2.5) == 2.5
        assert status.get_string("a.b", "x") == "x"
        assert status.has_property("a.b") is False

    def test_null_value_returns_default(self):
        """Test that an explicit null is replaced by the default."""
        status = BaseStatus({"a": {"b": None}})

        assert status.get_value("a.b", 3) == 3
        assert status.get_int("a.b", 3) == 3

    def test_intermediate_not_a_mapping(self):
        """Test a path that runs through a scalar."""
        status = BaseStatus({"a": 5})

        assert status.get_int("a.b", 9) == 9

    def test_data_is_empty_mapping_when_absent(self):
        """Test the data property for missing sub-trees."""
        assert BaseStatus(None).data == {}
        assert BaseStatus({"x": 1}).data == {"x": 1}


class TestPathResolution:
    """Tests for flat-then-nested key resolution."""

    def test_nested_path(self):
        """Test walking nested mappings."""
        status = BaseStatus({"airState": {"tempState": {"target": 22}}})

        assert status.get_int("airState.tempState.target") == 22

    def test_flat_key_with_dots(self):
        """Test a literal key that contains dots."""
        status = BaseStatus({"airState.operation": 1})

        assert status.get_boolean("airState.operation") is True
        assert status.has_property("airState.operation") is True

    def test_flat_key_wins_over_nested(self):
        """Test precedence when both layouts are present."""
        status = BaseStatus({"airState.operation": 0, "airState": {"operation": 1}})

        assert status.get_int("airState.operation") == 0

    def test_has_property_with_null(self):
        """Test that an existing null still counts as present."""
        status = BaseStatus({"a": None})

        assert status.has_property("a") is True


class TestTypedAccessors:
    """Tests for coercion in the typed accessors."""

    def test_get_boolean_scenario(self):
        """Test boolean coercion of common vendor encodings."""
        assert BaseStatus({"x": "TRUE"}).get_boolean("x") is True
        assert BaseStatus({"x": "0"}).get_boolean("x") is False
        assert BaseStatus({}).get_boolean("x", True) is True

    def test_get_int_non_numeric(self):
        """Test that non-numeric values fall back to the default."""
        status = BaseStatus({"speed": "HIGH", "level": "3"})

        assert status.get_int("speed", 1) == 1
        assert status.get_int("level") == 3

    def test_get_float(self):
        """Test float parsing from strings."""
        assert BaseStatus({"t": "21.5"}).get_float("t") == 21.5

    def test_get_string(self):
        """Test that non-string values are stringified."""
        assert BaseStatus({"mode": 4}).get_string("mode") == "4"

    def test_get_string_lowercases_booleans(self):
        """Test that booleans read as the lowercase words devices report."""
        status = BaseStatus({"on": True, "off": False})

        assert status.get_string("on") == "true"
        assert status.get_string("off") == "false"
        assert status.get_string("missing", "x") == "x"


class TestAirQuality:
    """Tests for get_air_quality_data()."""

    def test_none_without_quality_fields(self):
        """Test that devices without sensors report nothing."""
        status = BaseStatus({"airState": {"operation": 1}})

        assert status.get_air_quality_data(True) is None

    def test_reads_quality_fields(self):
        """Test assembling the readings."""
        status = BaseStatus(
            {"airState": {"quality": {"overall": 2, "PM2": "12", "PM10": 30}}}
        )

        assert status.get_air_quality_data(True) == AirQualityData(
            is_on=True, overall=2, pm2=12, pm10=30
        )

    def test_single_field_is_enough(self):
        """Test that any one of the three fields enables the reading."""
        status = BaseStatus({"airState.quality.PM10": 40})

        data = status.get_air_quality_data(False)
        assert data is not None
        assert data.pm10 == 40
        assert data.overall == 0

    def test_sensor_monitoring_counts_as_on(self):
        """Test the dedicated sensor flag while the device is off."""
        off = BaseStatus({"airState": {"quality": {"overall": 1}}})
        monitoring = BaseStatus({"airState": {"quality": {"overall": 1, "sensorMon": 1}}})

        assert off.get_air_quality_data(False).is_on is False
        assert monitoring.get_air_quality_data(False).is_on is True


class TestFilterLife:
    """Tests for get_filter_life_percent()."""

    @pytest.mark.parametrize(
        "used,rated,expected",
        [(0, 100, 100), (50, 100, 50), (100, 100, 0), (1, 3, 67), (1, 8, 88), (3, 8, 63)],
    )
    def test_percentage(self, used, rated, expected):
        """Test the remaining percentage, rounding halves up."""
        status = BaseStatus({"use": used, "max": rated})

        assert status.get_filter_life_percent("use", "max") == expected

    @pytest.mark.parametrize("rated", [0, None, "0", "abc"])
    def test_zero_max_returns_zero(self, rated):
        """Test that a missing or zero lifetime does not divide by zero."""
        status = BaseStatus({"use": 10, "max": rated})

        assert status.get_filter_life_percent("use", "max") == 0

    def test_missing_keys(self):
        """Test both keys absent."""
        assert BaseStatus({}).get_filter_life_percent("use", "max") == 0


class TestIsEnabled:
    """Tests for schema-coded enable flags."""

    def test_is_enabled(self, hood_model):
        """Test comparison against the model's enable code."""
        assert BaseStatus({"ventSet": "ENABLE"}, hood_model).is_enabled("ventSet", "VentSet")
        assert not BaseStatus({"ventSet": "DISABLE"}, hood_model).is_enabled("ventSet", "VentSet")

    def test_unknown_field_is_disabled(self):
        """Test a model without the field."""
        status = BaseStatus({"ventSet": "ENABLE"}, DeviceModel())

        assert status.is_enabled("ventSet", "VentSet") is False


class TestApplianceStatus:
    """Tests for the shared course durations."""

    def test_remain_duration_while_running(self):
        """Test hours and minutes are combined while running."""
        status = CourseStatus(
            {"state": "RUNNING", "remainTimeHour": 1, "remainTimeMinute": 5,
             "initialTimeHour": 2, "initialTimeMinute": "0"}
        )

        assert status.remain_duration == 3900
        assert status.initial_duration == 7200

    def test_remain_duration_zero_when_idle(self):
        """Test that stale remaining time is ignored while idle."""
        status = CourseStatus({"state": "END", "remainTimeHour": 1, "remainTimeMinute": 5})

        assert status.remain_duration == 0
        assert status.initial_duration == 0

    def test_is_abstract(self):
        """Test that the family contracts must be supplied."""
        with pytest.raises(TypeError):
            ApplianceStatus({})
