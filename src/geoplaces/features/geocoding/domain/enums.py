"""ジオコーディング機能のEnum定義"""
from enum import Flag, auto


class PlaceField(Flag):
    """
    プレイス詳細で要求するフィールドの選択子

    複数フィールドは `|` で組み合わせる
    """

    PLACE_ID = auto()
    NAME = auto()
    FORMATTED_ADDRESS = auto()
    COORDINATE = auto()

    @classmethod
    def all(cls) -> "PlaceField":
        """全フィールド"""
        return cls.PLACE_ID | cls.NAME | cls.FORMATTED_ADDRESS | cls.COORDINATE

    @property
    def google_fields(self) -> list[str]:
        """Google Places Details APIのfieldsパラメータ名に変換"""
        return [GOOGLE_FIELD_NAMES[field] for field in GOOGLE_FIELD_NAMES if field in self]

    @classmethod
    def from_names(cls, names: list[str]) -> "PlaceField":
        """フィールド名（例: ["name", "coordinate"]）から取得"""
        fields = cls(0)
        for name in names:
            try:
                fields |= cls[name.strip().upper()]
            except KeyError:
                raise ValueError(f"Invalid place field: {name}")
        return fields


# Google Places Details APIのフィールド名マッピング
GOOGLE_FIELD_NAMES = {
    PlaceField.PLACE_ID: "place_id",
    PlaceField.NAME: "name",
    PlaceField.FORMATTED_ADDRESS: "formatted_address",
    PlaceField.COORDINATE: "geometry/location",
}
