"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ....shared.utils.text import first_present
from .coordinates import Coordinates
from .provider_models import AutocompletePrediction, GeocodeAddress, PlaceDetail

# with_locality で既存の値を引き継ぐことを表す
_KEEP: Any = object()


@dataclass(frozen=True)
class PlaceLocality:
    """
    プレイスの地域情報（後から付与されるエンリッチメント）

    Placeの同一性には影響しない
    """

    state: Optional[str] = None  # 州・都道府県
    city: Optional[str] = None  # 市区町村
    country: Optional[str] = None  # 国


@dataclass(frozen=True)
class Place:
    """
    正規化されたプレイス

    同一性は address, id, name, coordinates の4項目のみで判定する。
    postal_code と locality は比較対象外。
    """

    id: Optional[str] = None  # プロバイダー発行のプレイスID
    address: Optional[str] = None  # 1行表示用の住所
    coordinates: Optional[Coordinates] = None
    name: Optional[str] = None  # 表示名
    postal_code: Optional[str] = field(default=None, compare=False)
    locality: Optional[PlaceLocality] = field(default=None, compare=False)

    @classmethod
    def from_address(cls, address: GeocodeAddress) -> "Place":
        """逆ジオコーディングの住所から生成"""
        return cls(
            id=None,
            address=address.lines[0] if address.lines else "",
            coordinates=address.coordinates,
            name=first_present(
                address.thoroughfare,
                address.locality,
                address.administrative_area,
            ),
            postal_code=address.postal_code,
            locality=PlaceLocality(country=address.country),
        )

    @classmethod
    def from_place_detail(cls, place: PlaceDetail) -> "Place":
        """プレイス詳細から生成"""
        return cls(
            id=place.place_id,
            address=place.formatted_address or "",
            coordinates=place.coordinates,
            name=place.name,
            postal_code=None,
        )

    @classmethod
    def from_prediction(cls, prediction: AutocompletePrediction) -> "Place":
        """オートコンプリート候補から生成（座標なし）"""
        return cls(
            id=prediction.place_id,
            address=prediction.full_text.string,
            coordinates=None,
            name=prediction.primary_text.string,
            postal_code=None,
        )

    @classmethod
    def default(cls) -> "Place":
        """「現在地を使用」を表す既定プレイス"""
        return DEFAULT_PLACE

    @property
    def state(self) -> Optional[str]:
        return self.locality.state if self.locality else None

    @property
    def city(self) -> Optional[str]:
        return self.locality.city if self.locality else None

    @property
    def country(self) -> Optional[str]:
        return self.locality.country if self.locality else None

    def with_locality(
        self,
        locality: Optional[PlaceLocality] = None,
        *,
        state: Optional[str] = _KEEP,
        city: Optional[str] = _KEEP,
        country: Optional[str] = _KEEP,
    ) -> "Place":
        """
        地域情報を付与した新しいPlaceを返す

        キーワード引数は未指定なら既存の値を引き継ぎ、None を渡すと消去する

        Args:
            locality: 付与する地域情報（指定時はキーワード引数より優先）
            state: 州・都道府県
            city: 市区町村
            country: 国

        Returns:
            Place: 地域情報付きのPlace（同一性は元のPlaceと等しい）
        """
        if locality is None:
            locality = PlaceLocality(
                state=self.state if state is _KEEP else state,
                city=self.city if city is _KEEP else city,
                country=self.country if country is _KEEP else country,
            )
        return replace(self, locality=locality)

    def to_dict(self) -> dict[str, Any]:
        """JSON出力用の辞書に変換"""
        return {
            "id": self.id,
            "address": self.address,
            "name": self.name,
            "latitude": self.coordinates.latitude if self.coordinates else None,
            "longitude": self.coordinates.longitude if self.coordinates else None,
            "postal_code": self.postal_code,
            "state": self.state,
            "city": self.city,
            "country": self.country,
        }


# 「現在地を使用」を表す既定プレイス
# NOTE: 同じ名前・住所を持つ実プレイスとは区別できない
DEFAULT_PLACE = Place(address="Enable location services", name="Use Current Location")
