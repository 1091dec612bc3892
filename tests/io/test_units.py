# tests/io/test_units.py
from osm_qa.io.units import (
    decimal_coordinate_pair,
    display_area,
    display_length,
    dms_coordinate_pair,
)


def test_display_length_metric():
    assert display_length(999) == "999 m"
    assert display_length(12.3456) == "12.35 m"
    assert display_length(1500) == "1.5 km"


def test_display_length_imperial():
    assert display_length(1, imperial=True) == "3.281 ft"
    assert display_length(2000, imperial=True) == "1.243 mi"


def test_display_area_metric_with_hectares():
    assert display_area(500) == "500 m²"
    assert display_area(5000) == "5,000 m² (0.5 ha)"
    assert display_area(300000) == "0.3 km² (30 ha)"


def test_display_area_imperial():
    # 100 m2 is ~1076 sq ft, below the acre pairing threshold
    assert display_area(100, imperial=True) == "1,076 sq ft"


def test_decimal_pair_is_lat_first_and_wrapped():
    assert decimal_coordinate_pair((13.4, 52.5)) == "52.5000000, 13.4000000"
    assert decimal_coordinate_pair((190.0, 95.0)) == "90.0000000, -170.0000000"


def test_dms_pair():
    assert dms_coordinate_pair((13.5, 52.25)) == "52°15′ N, 13°30′ E"
    assert dms_coordinate_pair((-0.5, 0.0)) == "0°, 0°30′ W"
    assert dms_coordinate_pair((0.0, 10.5125)) == "10°30′45″ N, 0°"


def test_tiny_lengths_stay_in_fixed_point():
    assert display_length(0.00001) == "0.00001 m"
    assert display_length(0.5) == "0.5 m"
    assert display_length(0.0001234567) == "0.0001235 m"


def test_dms_rounds_half_seconds_up():
    # 10 + 1/32 degrees is exactly 10 deg 1 min 52.5 sec
    assert dms_coordinate_pair((0.0, 10.03125)) == "10°1′53″ N, 0°"
