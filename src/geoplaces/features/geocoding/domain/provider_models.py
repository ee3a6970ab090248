"""プレイスプロバイダーのレスポンス形状

Google Maps Platformの各APIが返すデータを、プロバイダー非依存の
型付きレコードとして表現する。Placeへの変換は models.Place が担う。
"""
from dataclasses import dataclass, field
from typing import Optional

from .coordinates import Coordinates


@dataclass(frozen=True)
class GeocodeAddress:
    """逆ジオコーディングで得られる構造化住所"""

    lines: list[str] = field(default_factory=list)  # 住所行
    thoroughfare: Optional[str] = None  # 番地・通り名
    locality: Optional[str] = None  # 市区町村
    administrative_area: Optional[str] = None  # 州・都道府県
    postal_code: Optional[str] = None
    country: Optional[str] = None
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class ReverseGeocodeResponse:
    """逆ジオコーディングのレスポンス"""

    results: list[GeocodeAddress] = field(default_factory=list)

    def first_result(self) -> Optional[GeocodeAddress]:
        """先頭の住所（結果が空の場合はNone）"""
        return self.results[0] if self.results else None


@dataclass(frozen=True)
class PlaceDetail:
    """プレイス詳細"""

    place_id: Optional[str] = None
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class AttributedText:
    """
    強調表示（一致箇所）付きテキスト

    matches は (offset, length) のタプル。表示用の装飾であり、
    プレーンテキストとしては string のみを用いる
    """

    string: str
    matches: tuple[tuple[int, int], ...] = ()

    def __str__(self) -> str:
        return self.string


@dataclass(frozen=True)
class AutocompletePrediction:
    """オートコンプリート候補（座標を持たない）"""

    place_id: str
    full_text: AttributedText  # 住所全体
    primary_text: AttributedText  # 主要テキスト（施設名・通り名）
    secondary_text: Optional[AttributedText] = None


@dataclass(frozen=True)
class PlaceLikelihood:
    """現在地付近の候補プレイスと、その尤度（0〜1）"""

    place: PlaceDetail
    likelihood: float


@dataclass(frozen=True)
class AutocompleteFilter:
    """オートコンプリート呼び出しごとに生成するフィルター"""

    countries: tuple[str, ...] = ()  # 国コード制限（ISO 3166-1 alpha-2）
    session_token: Optional[str] = None
