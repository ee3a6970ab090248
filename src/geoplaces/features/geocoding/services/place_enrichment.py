"""プレイスの地域情報エンリッチメント"""
import asyncio

from ....shared.exceptions.errors import ProviderError
from ....shared.logging.config import get_logger
from ..domain.models import Place, PlaceLocality
from ..providers.base import PlacesProvider

logger = get_logger(__name__)


class PlaceEnrichmentService:
    """
    座標を持つプレイスに州・市区町村・国を付与する

    失敗してもエラーにはせず、元のプレイスをそのまま返す
    """

    def __init__(self, provider: PlacesProvider) -> None:
        """
        Args:
            provider: 逆ジオコーディングに使うプレイスプロバイダー
        """
        self.provider = provider

    async def enrich(self, place: Place) -> Place:
        """
        プレイスに地域情報を付与

        Args:
            place: 対象プレイス

        Returns:
            Place: 地域情報を付与したプレイス（付与できなければ元のプレイス）
        """
        if place.coordinates is None:
            logger.debug(f"Place {place.id} has no coordinates, skipping enrichment")
            return place

        try:
            response = await self.provider.reverse_geocode(place.coordinates)
        except ProviderError as e:
            logger.error(f"Enrichment failed for place {place.id}: {e.message}")
            return place

        address = response.first_result() if response is not None else None
        if address is None:
            logger.warning(f"No locality found for place {place.id}")
            return place

        locality = PlaceLocality(
            state=address.administrative_area,
            city=address.locality,
            country=address.country,
        )
        return place.with_locality(locality)

    async def enrich_all(self, places: list[Place]) -> list[Place]:
        """複数のプレイスを順番どおりにエンリッチ"""
        return list(await asyncio.gather(*(self.enrich(place) for place in places)))
