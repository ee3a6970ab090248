"""ジオコーディングリクエストの種類

各リクエストは結果の形（単一のPlace / Placeのリスト）が静的に決まっている
"""
from dataclasses import dataclass
from typing import Union

from .coordinates import Coordinates
from .enums import PlaceField


@dataclass(frozen=True)
class ForwardGeocode:
    """テキスト検索（オートコンプリート） -> list[Place]"""

    query: str


@dataclass(frozen=True)
class ReverseGeocode:
    """座標から住所を取得 -> Place"""

    coordinates: Coordinates


@dataclass(frozen=True)
class PlaceRecommendations:
    """現在地付近のおすすめプレイス -> list[Place]"""

    fields: PlaceField = PlaceField.all()


@dataclass(frozen=True)
class PlaceById:
    """プレイスIDから詳細を取得 -> Place"""

    place_id: str


GeocodeRequest = Union[ForwardGeocode, ReverseGeocode, PlaceRecommendations, PlaceById]
