import pytest

from src.app.models.domain import Region
from src.app.services.regions import (
    classify_coordinates,
    classify_postcode,
    classify_region,
    is_kl_postcode,
    is_langkawi_postcode,
)


@pytest.mark.parametrize(
    "coordinates",
    [None, (3.15, 101.65), (5.4, 100.3), (1.5, 103.7), (51.5, -0.12)],
)
def test_langkawi_postcode_wins_over_coordinates(coordinates):
    assert classify_region("07000", coordinates) == Region.LANGKAWI


def test_kl_postcode_range():
    assert is_kl_postcode("53300")
    assert is_kl_postcode("47400")
    assert is_kl_postcode("68000")
    assert not is_kl_postcode("07000")
    assert not is_kl_postcode("81200")
    assert not is_kl_postcode("")
    assert not is_kl_postcode(None)


def test_langkawi_postcode_prefix():
    assert is_langkawi_postcode("07000")
    assert is_langkawi_postcode(" 07100 ")
    assert not is_langkawi_postcode("70000")
    assert not is_langkawi_postcode(None)


def test_postcode_without_known_prefix_defers_to_coordinates():
    assert classify_postcode("81200") is None
    assert classify_region("81200", (1.5, 103.7)) == Region.JOHOR


@pytest.mark.parametrize(
    "coordinates,expected",
    [
        ((6.35, 99.8), Region.LANGKAWI),
        ((3.15, 101.65), Region.KUALA_LUMPUR),
        ((3.4, 101.4), Region.SELANGOR),
        ((5.4, 100.3), Region.PENANG),
        ((1.5, 103.7), Region.JOHOR),
        ((4.6, 101.1), Region.MALAYSIA),
        ((1.29, 110.3), Region.MALAYSIA),
        ((13.75, 100.5), Region.INTERNATIONAL),
        ((51.5, -0.12), Region.INTERNATIONAL),
    ],
)
def test_coordinate_boxes(coordinates, expected):
    assert classify_coordinates(coordinates) == expected


def test_overlapping_boxes_resolve_by_check_order():
    # Inside both the Kuala Lumpur and Selangor boxes
    assert classify_coordinates((3.1, 101.6)) == Region.KUALA_LUMPUR


def test_no_input_is_unknown():
    assert classify_region() == Region.UNKNOWN
    assert classify_region("", None) == Region.UNKNOWN
