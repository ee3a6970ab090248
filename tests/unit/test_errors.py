"""ジオコーディングエラーのテスト"""
from geoplaces.features.geocoding.domain.results import GeocodeOutcome
from geoplaces.shared.exceptions.errors import (
    GeocodeErrorKind,
    PlaceNotFoundError,
    ProviderFailureError,
)


def test_place_not_found_errors_are_equal() -> None:
    """結果なしのエラー同士は等しく、失敗結果も等しい"""
    assert PlaceNotFoundError() == PlaceNotFoundError()
    assert hash(PlaceNotFoundError()) == hash(PlaceNotFoundError())
    assert GeocodeOutcome.failure(PlaceNotFoundError()) == GeocodeOutcome.failure(PlaceNotFoundError())


def test_provider_failure_compares_message() -> None:
    assert ProviderFailureError("quota exceeded") == ProviderFailureError("quota exceeded")
    assert ProviderFailureError("quota exceeded") != ProviderFailureError("network unreachable")


def test_error_kinds_differ() -> None:
    assert PlaceNotFoundError() != ProviderFailureError("No usable place was returned")
    assert PlaceNotFoundError().kind is GeocodeErrorKind.PLACE_ERROR
    assert ProviderFailureError("x").kind is GeocodeErrorKind.CUSTOM
