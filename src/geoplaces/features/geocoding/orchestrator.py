"""ジオコーディング機能の組み立て"""

from typing import Optional

from ...infrastructure.config.settings import Settings
from ...infrastructure.gcp.secret_manager import SecretManagerClient
from ...shared.exceptions.errors import ConfigurationError
from ...shared.logging.config import get_logger
from .providers.base import PlacesProvider, StaticLocationSource
from .providers.google_maps_places_provider import GoogleMapsPlacesProvider
from .providers.session_token import AutocompleteSessionTokenProvider
from .services.geocode_dispatcher import GeocodeDispatcher
from .services.place_enrichment import PlaceEnrichmentService

logger = get_logger(__name__)


class PlacesOrchestrator:
    """
    プレイス検索のオーケストレーター

    設定からプロバイダー・ディスパッチャー等を生成し、依存性注入を行う
    """

    def __init__(
        self,
        settings: Settings,
        provider: Optional[PlacesProvider] = None,
        secret_manager: Optional[SecretManagerClient] = None,
    ) -> None:
        """
        Args:
            settings: アプリケーション設定
            provider: プレイスプロバイダー（未指定時はGoogle Mapsを使用）
            secret_manager: APIキー取得用のSecret Managerクライアント

        Raises:
            ConfigurationError: APIキーが取得できない場合
        """
        self.settings = settings
        self.secret_manager = secret_manager

        self.provider = provider or self._create_google_provider()
        self.session_tokens = AutocompleteSessionTokenProvider()

        self.dispatcher = GeocodeDispatcher(
            provider=self.provider,
            session_tokens=self.session_tokens,
            countries=settings.get_autocomplete_countries(),
        )
        self.enrichment_service = PlaceEnrichmentService(self.provider)

        logger.info("PlacesOrchestrator initialized")

    def _create_google_provider(self) -> GoogleMapsPlacesProvider:
        """Google Mapsプロバイダーを生成"""
        return GoogleMapsPlacesProvider.from_api_key(
            api_key=self._resolve_api_key(),
            location_source=StaticLocationSource(self.settings.get_current_location()),
            timeout=self.settings.google_maps_timeout,
            queries_per_second=self.settings.google_maps_queries_per_second,
            nearby_radius_meters=self.settings.recommendation_radius_meters,
            language=self.settings.google_maps_language,
        )

    def _resolve_api_key(self) -> str:
        """
        Google Maps APIキーを取得

        ローカル開発では設定値、それ以外ではSecret Managerを使用する
        """
        if self.settings.google_maps_api_key:
            return self.settings.google_maps_api_key

        if self.settings.is_development:
            raise ConfigurationError("GOOGLE_MAPS_API_KEY is not set")

        if self.secret_manager is None:
            if not self.settings.gcp_project_id:
                raise ConfigurationError(
                    "GCP_PROJECT_ID is required to read the Google Maps API key from Secret Manager"
                )
            self.secret_manager = SecretManagerClient(self.settings.gcp_project_id)

        return self.secret_manager.get_secret(self.settings.google_maps_api_key_secret_name)
