"""座標の値オブジェクト"""
import math
from dataclasses import dataclass

# 地球の平均半径（メートル）
EARTH_RADIUS_METERS = 6_371_008.8


@dataclass(frozen=True)
class Coordinates:
    """緯度・経度"""

    latitude: float  # 緯度
    longitude: float  # 経度

    def rounded(self, places: int) -> "Coordinates":
        """指定した小数点以下桁数に丸めた座標を返す"""
        return Coordinates(
            latitude=round(self.latitude, places),
            longitude=round(self.longitude, places),
        )

    def distance_to(self, other: "Coordinates") -> float:
        """他の座標までの大円距離（メートル、ハバーサイン公式）"""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = lat2 - lat1
        d_lng = math.radians(other.longitude - self.longitude)

        a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
        return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.latitude, self.longitude)

    @classmethod
    def fallback(cls) -> "Coordinates":
        """位置情報が得られない場合の既定座標 (0, 0)"""
        return cls(latitude=0.0, longitude=0.0)
