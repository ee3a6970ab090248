"""テスト共通のフィクスチャ"""
import asyncio
from typing import Any, Optional

import pytest

from geoplaces.features.geocoding.domain.coordinates import Coordinates
from geoplaces.features.geocoding.domain.enums import PlaceField
from geoplaces.features.geocoding.domain.provider_models import (
    AutocompleteFilter,
    AutocompletePrediction,
    PlaceDetail,
    PlaceLikelihood,
    ReverseGeocodeResponse,
)
from geoplaces.features.geocoding.providers.base import PlacesProvider
from geoplaces.features.geocoding.providers.session_token import SessionTokenProvider
from geoplaces.shared.exceptions.errors import ProviderError


class FakePlacesProvider(PlacesProvider):
    """
    テスト用のプレイスプロバイダー

    各操作の戻り値・送出するエラーを属性で指定し、呼び出しを記録する。
    threaded=True の場合、結果はワーカースレッド上で生成される。
    """

    def __init__(self, threaded: bool = False) -> None:
        self.threaded = threaded
        self.predictions: list[AutocompletePrediction] = []
        self.reverse_response: Optional[ReverseGeocodeResponse] = None
        self.likelihoods: list[PlaceLikelihood] = []
        self.place: Optional[PlaceDetail] = None
        self.errors: dict[str, ProviderError] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def _respond(self, operation: str, value: Any, *args: Any) -> Any:
        self.calls.append((operation, args))

        def respond() -> Any:
            if operation in self.errors:
                raise self.errors[operation]
            return value

        if self.threaded:
            return await asyncio.to_thread(respond)
        return respond()

    async def find_autocomplete_predictions(
        self, query: str, filter: AutocompleteFilter
    ) -> list[AutocompletePrediction]:
        return await self._respond("autocomplete", self.predictions, query, filter)

    async def reverse_geocode(self, coordinates: Coordinates) -> Optional[ReverseGeocodeResponse]:
        return await self._respond("reverse", self.reverse_response, coordinates)

    async def find_place_likelihoods(self, fields: PlaceField) -> list[PlaceLikelihood]:
        return await self._respond("likelihoods", self.likelihoods, fields)

    async def fetch_place(
        self, place_id: str, fields: PlaceField, session_token: Optional[str]
    ) -> Optional[PlaceDetail]:
        return await self._respond("place", self.place, place_id, fields, session_token)


class FakeSessionTokenProvider(SessionTokenProvider):
    """呼び出しごとに連番のトークンを返す"""

    def __init__(self) -> None:
        self.issued: list[str] = []

    def get_session_token(self) -> str:
        token = f"token-{len(self.issued) + 1}"
        self.issued.append(token)
        return token


@pytest.fixture
def fake_provider() -> FakePlacesProvider:
    return FakePlacesProvider()


@pytest.fixture
def threaded_provider() -> FakePlacesProvider:
    return FakePlacesProvider(threaded=True)


@pytest.fixture
def session_tokens() -> FakeSessionTokenProvider:
    return FakeSessionTokenProvider()
