"""Placeドメインモデルのテスト"""

import pytest

from geoplaces.features.geocoding.domain.coordinates import Coordinates
from geoplaces.features.geocoding.domain.enums import PlaceField
from geoplaces.features.geocoding.domain.models import DEFAULT_PLACE, Place, PlaceLocality
from geoplaces.features.geocoding.domain.provider_models import (
    AttributedText,
    AutocompletePrediction,
    GeocodeAddress,
    PlaceDetail,
    ReverseGeocodeResponse,
)

BANGALORE = Coordinates(latitude=12.97, longitude=77.59)


def make_address(**overrides: object) -> GeocodeAddress:
    values: dict[str, object] = {
        "lines": ["1 MG Road, Bengaluru, Karnataka 560001, India", "second line"],
        "thoroughfare": "1 MG Road",
        "locality": "Bengaluru",
        "administrative_area": "Karnataka",
        "postal_code": "560001",
        "country": "India",
        "coordinates": BANGALORE,
    }
    values.update(overrides)
    return GeocodeAddress(**values)  # type: ignore[arg-type]


def test_from_address_maps_fields() -> None:
    """逆ジオコーディング住所からの変換"""
    place = Place.from_address(make_address())

    assert place.id is None
    assert place.address == "1 MG Road, Bengaluru, Karnataka 560001, India"
    assert place.name == "1 MG Road"
    assert place.coordinates == BANGALORE
    assert place.postal_code == "560001"
    assert place.country == "India"
    assert place.state is None
    assert place.city is None


def test_from_address_without_lines_uses_empty_string() -> None:
    """住所行がない場合は空文字列"""
    place = Place.from_address(make_address(lines=[]))

    assert place.address == ""


@pytest.mark.parametrize(
    "overrides,expected",
    [
        ({}, "1 MG Road"),
        ({"thoroughfare": None}, "Bengaluru"),
        ({"thoroughfare": None, "locality": None}, "Karnataka"),
        ({"thoroughfare": None, "locality": None, "administrative_area": None}, None),
    ],
)
def test_from_address_name_fallback(overrides: dict[str, object], expected: str) -> None:
    """名前は 通り名 -> 市区町村 -> 州 の順で決まる"""
    assert Place.from_address(make_address(**overrides)).name == expected


def test_from_place_detail_maps_fields() -> None:
    """プレイス詳細からの変換"""
    detail = PlaceDetail(
        place_id="abc",
        name="Cubbon Park",
        formatted_address="Kasturba Road, Bengaluru",
        coordinates=BANGALORE,
    )

    place = Place.from_place_detail(detail)

    assert place.id == "abc"
    assert place.name == "Cubbon Park"
    assert place.address == "Kasturba Road, Bengaluru"
    assert place.coordinates == BANGALORE
    assert place.postal_code is None


def test_from_place_detail_without_address_uses_empty_string() -> None:
    place = Place.from_place_detail(PlaceDetail(place_id="abc", coordinates=BANGALORE))

    assert place.address == ""
    assert place.name is None


def test_from_prediction_has_no_coordinates() -> None:
    """オートコンプリート候補は座標を持たない"""
    prediction = AutocompletePrediction(
        place_id="p1",
        full_text=AttributedText("123 Main St, Springfield", matches=((4, 4),)),
        primary_text=AttributedText("123 Main St", matches=((4, 4),)),
    )

    place = Place.from_prediction(prediction)

    assert place.id == "p1"
    assert place.address == "123 Main St, Springfield"
    assert place.name == "123 Main St"
    assert place.coordinates is None
    assert place.postal_code is None


def test_default_place() -> None:
    """「現在地を使用」プレイス"""
    place = Place.default()

    assert place is DEFAULT_PLACE
    assert place.address == "Enable location services"
    assert place.name == "Use Current Location"
    assert place.id is None
    assert place.coordinates is None
    assert place.postal_code is None


def test_default_place_differs_from_place_with_coordinates() -> None:
    located = Place(
        address="Enable location services",
        name="Use Current Location",
        coordinates=BANGALORE,
    )

    assert located != DEFAULT_PLACE


def test_equality_ignores_postal_code_and_locality() -> None:
    """postal_code と地域情報は同一性に影響しない"""
    a = Place(id="x", address="addr", name="n", coordinates=BANGALORE, postal_code="111")
    b = Place(id="x", address="addr", name="n", coordinates=BANGALORE, postal_code="222")
    c = a.with_locality(country="Japan")
    d = a.with_locality(country="India")

    assert a == b
    assert c == d
    assert hash(a) == hash(b) == hash(c)


@pytest.mark.parametrize(
    "field_name,value",
    [
        ("id", "y"),
        ("address", "other"),
        ("name", "other"),
        ("coordinates", Coordinates(latitude=0.0, longitude=0.0)),
    ],
)
def test_equality_uses_identity_fields(field_name: str, value: object) -> None:
    base = Place(id="x", address="addr", name="n", coordinates=BANGALORE)
    fields: dict[str, object] = {"id": "x", "address": "addr", "name": "n", "coordinates": BANGALORE}
    fields[field_name] = value

    assert Place(**fields) != base  # type: ignore[arg-type]


def test_construction_is_idempotent() -> None:
    """同じペイロードからは等しいPlaceが得られる"""
    address = make_address()

    assert Place.from_address(address) == Place.from_address(address)


def test_with_locality_keeps_existing_country() -> None:
    place = Place.from_address(make_address())

    enriched = place.with_locality(state="Karnataka", city="Bengaluru")

    assert enriched.locality == PlaceLocality(state="Karnataka", city="Bengaluru", country="India")
    assert place.state is None


def test_with_locality_none_clears_field() -> None:
    """None を渡した項目は消去し、未指定の項目は引き継ぐ"""
    place = Place.from_address(make_address()).with_locality(state="Karnataka")

    cleared = place.with_locality(country=None)

    assert cleared.locality == PlaceLocality(state="Karnataka", city=None, country=None)


def test_to_dict() -> None:
    place = Place.from_address(make_address())

    assert place.to_dict() == {
        "id": None,
        "address": "1 MG Road, Bengaluru, Karnataka 560001, India",
        "name": "1 MG Road",
        "latitude": 12.97,
        "longitude": 77.59,
        "postal_code": "560001",
        "state": None,
        "city": None,
        "country": "India",
    }


def test_reverse_response_first_result() -> None:
    first = make_address()
    second = make_address(lines=["other"])

    assert ReverseGeocodeResponse(results=[first, second]).first_result() is first
    assert ReverseGeocodeResponse().first_result() is None


def test_coordinates_rounded_and_fallback() -> None:
    coordinates = Coordinates(latitude=12.971598, longitude=77.594566)

    assert coordinates.rounded(2) == Coordinates(latitude=12.97, longitude=77.59)
    assert Coordinates.fallback() == Coordinates(latitude=0.0, longitude=0.0)


def test_coordinates_distance() -> None:
    """1度の緯度差は約111km"""
    distance = Coordinates(0.0, 0.0).distance_to(Coordinates(1.0, 0.0))

    assert distance == pytest.approx(111_195, rel=1e-3)


def test_place_field_google_names() -> None:
    assert PlaceField.COORDINATE.google_fields == ["geometry/location"]
    assert (PlaceField.NAME | PlaceField.PLACE_ID).google_fields == ["place_id", "name"]
    assert PlaceField.from_names(["name", " coordinate"]) == PlaceField.NAME | PlaceField.COORDINATE


def test_place_field_invalid_name() -> None:
    with pytest.raises(ValueError):
        PlaceField.from_names(["rating"])
