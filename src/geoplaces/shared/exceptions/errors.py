"""カスタム例外定義"""
from enum import Enum


class GeocodeErrorKind(str, Enum):
    """ジオコーディングエラーの種別"""

    PLACE_ERROR = "place_error"  # 利用可能な結果なし
    CUSTOM = "custom"  # プロバイダーのエラーメッセージをそのまま保持


class GeoPlacesError(Exception):
    """geoplaces基底例外"""

    pass


class ConfigurationError(GeoPlacesError):
    """設定エラー"""

    pass


class ProviderError(GeoPlacesError):
    """
    プレイスプロバイダー（Google Maps等）の呼び出し失敗

    通信エラー、認証エラー、クォータ超過などを表す
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GeocodeError(GeoPlacesError):
    """ジオコーディング結果のエラー（呼び出し元に返される）"""

    kind: GeocodeErrorKind


class PlaceNotFoundError(GeocodeError):
    """プロバイダー呼び出しは成功したが、利用可能な結果が返らなかった"""

    kind = GeocodeErrorKind.PLACE_ERROR

    def __init__(self, message: str = "No usable place was returned") -> None:
        super().__init__(message)

    # 結果なしのエラーは種別のみで比較する
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlaceNotFoundError):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(self.kind)


class ProviderFailureError(GeocodeError):
    """プロバイダーが報告したエラー（メッセージはそのまま保持）"""

    kind = GeocodeErrorKind.CUSTOM

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProviderFailureError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))
