"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...features.geocoding.domain.coordinates import Coordinates


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="geoplaces",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # GCP
    gcp_project_id: Optional[str] = Field(
        default=None,
        description="GCPプロジェクトID（Secret Manager / Cloud Logging用）",
    )

    # Google Maps
    google_maps_api_key_secret_name: str = Field(
        default="google-maps-api-key",
        description="Google Maps API KeyのSecret Manager名",
    )
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API Key（ローカル開発用）",
    )
    google_maps_language: Optional[str] = Field(
        default=None,
        description="結果の言語（例: en, ja）",
    )
    google_maps_timeout: int = Field(
        default=10,
        description="Google Maps APIのタイムアウト（秒）",
    )
    google_maps_queries_per_second: int = Field(
        default=50,
        description="Google Maps APIのレート制限（リクエスト/秒）",
    )

    # Geocoding
    autocomplete_countries: str = Field(
        default="IN",
        description="テキスト検索の国コード制限（カンマ区切り）",
    )
    recommendation_radius_meters: int = Field(
        default=500,
        description="おすすめプレイスの検索半径（メートル）",
    )
    current_latitude: Optional[float] = Field(
        default=None,
        description="現在地の緯度（おすすめプレイス用）",
    )
    current_longitude: Optional[float] = Field(
        default=None,
        description="現在地の経度（おすすめプレイス用）",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Loggingを有効にするか",
    )

    # Cloud Run
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    def get_autocomplete_countries(self) -> list[str]:
        """国コード制限のリストを取得"""
        return [code.strip().upper() for code in self.autocomplete_countries.split(",") if code.strip()]

    def get_current_location(self) -> Optional[Coordinates]:
        """設定された現在地（緯度・経度のどちらかが未設定ならNone）"""
        if self.current_latitude is None or self.current_longitude is None:
            return None
        return Coordinates(latitude=self.current_latitude, longitude=self.current_longitude)

    @property
    def is_production(self) -> bool:
        """本番環境かどうか"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """開発環境かどうか"""
        return self.environment.lower() == "development"
