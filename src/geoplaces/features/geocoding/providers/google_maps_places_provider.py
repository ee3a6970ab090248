"""Google Maps Platform実装（Geocoding API / Places API）"""
import asyncio
from typing import Any, Callable, Optional, TypeVar

import googlemaps

from ....shared.exceptions.errors import ConfigurationError, ProviderError
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ..domain.coordinates import Coordinates
from ..domain.enums import PlaceField
from ..domain.provider_models import (
    AttributedText,
    AutocompleteFilter,
    AutocompletePrediction,
    GeocodeAddress,
    PlaceDetail,
    PlaceLikelihood,
    ReverseGeocodeResponse,
)
from .base import CurrentLocationSource, PlacesProvider

logger = get_logger(__name__)

T = TypeVar("T")


class GoogleMapsPlacesProvider(PlacesProvider):
    """
    googlemapsクライアントを用いたプレイスプロバイダー

    googlemapsは同期APIのため、各呼び出しはワーカースレッドで実行する
    """

    def __init__(
        self,
        client: googlemaps.Client,
        location_source: CurrentLocationSource,
        nearby_radius_meters: int = 500,
        language: Optional[str] = None,
    ) -> None:
        """
        Args:
            client: Google Maps クライアント（プロセス内で共有、読み取り専用）
            location_source: 現在地の取得元（おすすめプレイス用）
            nearby_radius_meters: おすすめプレイスの検索半径（メートル）
            language: 結果の言語（例: "en", "ja"）
        """
        self.client = client
        self.location_source = location_source
        self.nearby_radius_meters = nearby_radius_meters
        self.language = language

        logger.info(
            f"GoogleMapsPlacesProvider initialized: radius={nearby_radius_meters}m, "
            f"language={language}"
        )

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        location_source: CurrentLocationSource,
        timeout: int = 10,
        queries_per_second: int = 50,
        **kwargs: Any,
    ) -> "GoogleMapsPlacesProvider":
        """
        APIキーからクライアントを生成

        Raises:
            ConfigurationError: クライアントの初期化に失敗した場合（APIキー不正など）
        """
        try:
            client = googlemaps.Client(
                key=api_key,
                timeout=timeout,
                queries_per_second=queries_per_second,
            )
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize Google Maps client: {e}") from e

        return cls(client, location_source, **kwargs)

    async def find_autocomplete_predictions(
        self, query: str, filter: AutocompleteFilter
    ) -> list[AutocompletePrediction]:
        logger.debug(f"Autocomplete query: {query}")

        components = {"country": [c.lower() for c in filter.countries]} if filter.countries else None
        results = await self._call(
            self.client.places_autocomplete,
            query,
            session_token=filter.session_token,
            components=components,
            language=self.language,
        )

        return [_to_prediction(result) for result in results or []]

    async def reverse_geocode(self, coordinates: Coordinates) -> Optional[ReverseGeocodeResponse]:
        logger.debug(f"Reverse geocoding: {coordinates.to_tuple()}")

        results = await self._call(
            self.client.reverse_geocode,
            coordinates.to_tuple(),
            language=self.language,
        )

        if results is None:
            return None

        return ReverseGeocodeResponse(results=[_to_address(result) for result in results])

    async def find_place_likelihoods(self, fields: PlaceField) -> list[PlaceLikelihood]:
        origin = await self.location_source.current_location()
        logger.debug(f"Nearby search around {origin.to_tuple()} ({self.nearby_radius_meters}m)")

        response = await self._call(
            self.client.places_nearby,
            location=origin.to_tuple(),
            radius=self.nearby_radius_meters,
            language=self.language,
        )

        likelihoods = []
        for result in (response or {}).get("results", []):
            detail = _to_place_detail(result, fields)
            location = _to_coordinates(result)
            likelihoods.append(
                PlaceLikelihood(
                    place=detail,
                    likelihood=self._likelihood(origin, location),
                )
            )

        return likelihoods

    async def fetch_place(
        self, place_id: str, fields: PlaceField, session_token: Optional[str]
    ) -> Optional[PlaceDetail]:
        logger.debug(f"Fetching place: {place_id} fields={fields.google_fields}")

        response = await self._call(
            self.client.place,
            place_id,
            session_token=session_token,
            fields=fields.google_fields,
            language=self.language,
        )

        result = (response or {}).get("result")
        if not result:
            return None

        detail = _to_place_detail(result, fields)
        if detail.place_id is None:
            # IDを要求しなかった場合も、問い合わせたIDを引き継ぐ
            detail = PlaceDetail(
                place_id=place_id,
                name=detail.name,
                formatted_address=detail.formatted_address,
                coordinates=detail.coordinates,
            )
        return detail

    def _likelihood(self, origin: Coordinates, location: Optional[Coordinates]) -> float:
        """現在地からの距離に応じた尤度（中心で1.0、検索半径で0.0）"""
        if location is None or self.nearby_radius_meters <= 0:
            return 0.0
        distance = origin.distance_to(location)
        return max(0.0, 1.0 - distance / self.nearby_radius_meters)

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        googlemapsの呼び出しをワーカースレッドで実行し、例外をProviderErrorに変換

        Raises:
            ProviderError: APIエラー、通信エラー、タイムアウト
        """
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except googlemaps.exceptions.ApiError as e:
            raise ProviderError(e.message or e.status) from e
        except googlemaps.exceptions.Timeout as e:
            raise ProviderError("The request timed out") from e
        except googlemaps.exceptions.TransportError as e:
            raise ProviderError(str(e)) from e
        except ValueError as e:
            # googlemapsのパラメータ検証エラー
            raise ProviderError(str(e)) from e


def _to_coordinates(result: dict[str, Any]) -> Optional[Coordinates]:
    # geometry / location が null で返る場合がある
    location = (result.get("geometry") or {}).get("location") or {}
    latitude = location.get("lat")
    longitude = location.get("lng")

    if latitude is None or longitude is None:
        return None
    return Coordinates(latitude=latitude, longitude=longitude)


def _component(result: dict[str, Any], component_type: str) -> Optional[str]:
    for component in result.get("address_components", []):
        if component_type in component.get("types", []):
            return component.get("long_name")
    return None


def _to_address(result: dict[str, Any]) -> GeocodeAddress:
    """Geocoding APIの結果1件を構造化住所に変換"""
    formatted_address = result.get("formatted_address")
    street_number = _component(result, "street_number")
    route = _component(result, "route")

    return GeocodeAddress(
        lines=[formatted_address] if formatted_address is not None else [],
        thoroughfare=normalize_text(" ".join(p for p in (street_number, route) if p)),
        locality=_component(result, "locality"),
        administrative_area=_component(result, "administrative_area_level_1"),
        postal_code=_component(result, "postal_code"),
        country=_component(result, "country"),
        coordinates=_to_coordinates(result),
    )


def _to_place_detail(result: dict[str, Any], fields: PlaceField) -> PlaceDetail:
    """Places APIの結果を、要求したフィールドだけを持つプレイス詳細に変換"""
    return PlaceDetail(
        place_id=result.get("place_id") if PlaceField.PLACE_ID in fields else None,
        name=result.get("name") if PlaceField.NAME in fields else None,
        formatted_address=(
            result.get("formatted_address", result.get("vicinity"))
            if PlaceField.FORMATTED_ADDRESS in fields
            else None
        ),
        coordinates=_to_coordinates(result) if PlaceField.COORDINATE in fields else None,
    )


def _to_attributed_text(text: Optional[str], matches: list[dict[str, Any]]) -> AttributedText:
    return AttributedText(
        string=text or "",
        matches=tuple((m.get("offset", 0), m.get("length", 0)) for m in matches),
    )


def _to_prediction(result: dict[str, Any]) -> AutocompletePrediction:
    """Place Autocompleteの候補1件を変換"""
    formatting = result.get("structured_formatting") or {}

    secondary = formatting.get("secondary_text")
    return AutocompletePrediction(
        place_id=result.get("place_id", ""),
        full_text=_to_attributed_text(
            result.get("description"), result.get("matched_substrings", [])
        ),
        primary_text=_to_attributed_text(
            formatting.get("main_text"), formatting.get("main_text_matched_substrings", [])
        ),
        secondary_text=_to_attributed_text(secondary, []) if secondary is not None else None,
    )
