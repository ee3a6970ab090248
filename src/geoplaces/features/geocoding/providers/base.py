"""プレイスプロバイダーのインターフェース"""
from abc import ABC, abstractmethod
from typing import Optional

from ....shared.exceptions.errors import ProviderError
from ..domain.coordinates import Coordinates
from ..domain.enums import PlaceField
from ..domain.provider_models import (
    AutocompleteFilter,
    AutocompletePrediction,
    PlaceDetail,
    PlaceLikelihood,
    ReverseGeocodeResponse,
)


class PlacesProvider(ABC):
    """
    外部プレイスプロバイダーの4つの基本操作

    失敗時はいずれも ProviderError を送出する
    """

    @abstractmethod
    async def find_autocomplete_predictions(
        self, query: str, filter: AutocompleteFilter
    ) -> list[AutocompletePrediction]:
        """テキストからオートコンプリート候補を取得"""

    @abstractmethod
    async def reverse_geocode(self, coordinates: Coordinates) -> Optional[ReverseGeocodeResponse]:
        """座標から住所を取得"""

    @abstractmethod
    async def find_place_likelihoods(self, fields: PlaceField) -> list[PlaceLikelihood]:
        """現在地付近の候補プレイスを尤度付きで取得"""

    @abstractmethod
    async def fetch_place(
        self, place_id: str, fields: PlaceField, session_token: Optional[str]
    ) -> Optional[PlaceDetail]:
        """プレイスIDから詳細を取得"""


class CurrentLocationSource(ABC):
    """端末の現在地を提供する"""

    @abstractmethod
    async def current_location(self) -> Coordinates:
        """
        現在地を取得

        Raises:
            ProviderError: 現在地が取得できない場合
        """


class StaticLocationSource(CurrentLocationSource):
    """設定値など固定の座標を現在地として返す"""

    def __init__(self, coordinates: Optional[Coordinates]) -> None:
        self.coordinates = coordinates

    async def current_location(self) -> Coordinates:
        if self.coordinates is None:
            raise ProviderError("Current location is unavailable")
        return self.coordinates
