"""ジオコーディングディスパッチャー

4種類のリクエスト（テキスト検索・逆ジオコーディング・おすすめプレイス・
ID指定の詳細取得）を単一の非同期インターフェースで受け付け、
プロバイダーのレスポンスを Place に正規化する。
"""
import asyncio
import concurrent.futures
from typing import Callable, Optional, Sequence, overload

from ....shared.exceptions.errors import (
    GeocodeError,
    PlaceNotFoundError,
    ProviderError,
    ProviderFailureError,
)
from ....shared.logging.config import get_logger
from ..domain.coordinates import Coordinates
from ..domain.enums import PlaceField
from ..domain.models import Place
from ..domain.provider_models import AutocompleteFilter
from ..domain.requests import (
    ForwardGeocode,
    GeocodeRequest,
    PlaceById,
    PlaceRecommendations,
    ReverseGeocode,
)
from ..domain.results import GeocodeOutcome, PlaceOrPlaces
from ..providers.base import PlacesProvider
from ..providers.session_token import SessionTokenProvider

logger = get_logger(__name__)

# おすすめプレイスとして採用する尤度の下限
MIN_RECOMMENDATION_LIKELIHOOD = 0.1

# ID指定の詳細取得で要求するフィールド
PLACE_DETAIL_FIELDS = PlaceField.COORDINATE

# 想定外の形のレスポンスを変換したときに発生しうる例外
MALFORMED_PAYLOAD_ERRORS = (KeyError, TypeError, AttributeError, IndexError, ValueError)


class GeocodeDispatcher:
    """
    ジオコーディングリクエストのディスパッチャー

    リクエストの種類ごとに結果の形（単一 / リスト）が決まっており、
    変換処理はリクエストの種類によって選択される。
    """

    def __init__(
        self,
        provider: PlacesProvider,
        session_tokens: SessionTokenProvider,
        countries: Sequence[str] = ("IN",),
        delivery_loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Args:
            provider: プレイスプロバイダー
            session_tokens: セッショントークンの供給元
            countries: テキスト検索の国コード制限
            delivery_loop: submit() の結果を届けるイベントループ
                （未指定時は submit() を呼び出したループ）
        """
        self.provider = provider
        self.session_tokens = session_tokens
        self.countries = tuple(countries)
        self.delivery_loop = delivery_loop

        logger.info(f"GeocodeDispatcher initialized: countries={self.countries}")

    @overload
    async def fetch(self, request: ForwardGeocode) -> list[Place]: ...

    @overload
    async def fetch(self, request: ReverseGeocode) -> Place: ...

    @overload
    async def fetch(self, request: PlaceRecommendations) -> list[Place]: ...

    @overload
    async def fetch(self, request: PlaceById) -> Place: ...

    async def fetch(self, request: GeocodeRequest) -> PlaceOrPlaces:
        """
        リクエストを実行し、正規化したプレイスを返す

        Args:
            request: ジオコーディングリクエスト

        Returns:
            ForwardGeocode / PlaceRecommendations は list[Place]、
            ReverseGeocode / PlaceById は Place

        Raises:
            PlaceNotFoundError: 利用可能な結果が返らなかった場合
            ProviderFailureError: プロバイダーがエラーを返した場合
        """
        logger.debug(f"Dispatching geocode request: {request!r}")

        if isinstance(request, ForwardGeocode):
            return await self.forward_geocode(request.query)
        if isinstance(request, ReverseGeocode):
            return await self.reverse_geocode(request.coordinates)
        if isinstance(request, PlaceRecommendations):
            return await self.place_recommendations(request.fields)
        if isinstance(request, PlaceById):
            return await self.place_details(request.place_id)

        raise TypeError(f"Unsupported geocode request: {request!r}")

    async def fetch_result(self, request: GeocodeRequest) -> GeocodeOutcome:
        """fetch() の結果を、例外を送出せずに GeocodeOutcome として返す"""
        try:
            return GeocodeOutcome.success(await self.fetch(request))
        except GeocodeError as e:
            return GeocodeOutcome.failure(e)

    def submit(
        self,
        request: GeocodeRequest,
        callback: Callable[[GeocodeOutcome], None],
    ) -> "concurrent.futures.Future[GeocodeOutcome]":
        """
        リクエストを配信用イベントループで実行し、結果をコールバックで届ける

        プロバイダーの処理がどのスレッドで完了しても、コールバックは
        常に配信用イベントループのスレッドで呼び出される。
        任意のスレッドから呼び出せる。

        Args:
            request: ジオコーディングリクエスト
            callback: 結果を受け取るコールバック

        Returns:
            concurrent.futures.Future: コールバック呼び出し後に完了する

        Raises:
            RuntimeError: 配信用ループが未指定で、実行中のループもない場合
        """
        loop = self.delivery_loop or asyncio.get_running_loop()
        return asyncio.run_coroutine_threadsafe(self._deliver(request, callback), loop)

    async def _deliver(
        self,
        request: GeocodeRequest,
        callback: Callable[[GeocodeOutcome], None],
    ) -> GeocodeOutcome:
        outcome = await self.fetch_result(request)
        callback(outcome)
        return outcome

    async def forward_geocode(self, query: str) -> list[Place]:
        """テキスト検索（オートコンプリート候補）"""
        # フィルターは呼び出しごとに生成する
        filter = AutocompleteFilter(
            countries=self.countries,
            session_token=self.session_tokens.get_session_token(),
        )

        try:
            predictions = await self.provider.find_autocomplete_predictions(query, filter)
        except ProviderError as e:
            # TODO: 他の操作と同様にプロバイダーのエラーメッセージを返すか要確認
            logger.warning(f"Autocomplete failed for query {query!r}: {e.message}")
            raise PlaceNotFoundError() from e

        try:
            places = [Place.from_prediction(prediction) for prediction in predictions]
        except MALFORMED_PAYLOAD_ERRORS as e:
            logger.error(f"Malformed autocomplete response for {query!r}: {e!r}")
            raise PlaceNotFoundError() from e

        logger.debug(f"Autocomplete returned {len(places)} predictions for {query!r}")
        return places

    async def reverse_geocode(self, coordinates: Coordinates) -> Place:
        """座標から住所を取得（先頭の結果のみ使用）"""
        try:
            response = await self.provider.reverse_geocode(coordinates)
        except ProviderError as e:
            logger.warning(f"Reverse geocoding failed for {coordinates.to_tuple()}: {e.message}")
            raise ProviderFailureError(e.message) from e

        try:
            first_address = response.first_result() if response is not None else None
            place = Place.from_address(first_address) if first_address is not None else None
        except MALFORMED_PAYLOAD_ERRORS as e:
            logger.error(f"Malformed reverse geocoding response for {coordinates.to_tuple()}: {e!r}")
            raise PlaceNotFoundError() from e

        if place is None:
            logger.warning(f"No reverse geocoding results for {coordinates.to_tuple()}")
            raise PlaceNotFoundError()

        return place

    async def place_recommendations(self, fields: PlaceField) -> list[Place]:
        """現在地付近のおすすめプレイス（尤度の降順）"""
        try:
            likelihoods = await self.provider.find_place_likelihoods(fields)
        except ProviderError as e:
            logger.warning(f"Place likelihood lookup failed: {e.message}")
            raise ProviderFailureError(e.message) from e

        try:
            # sorted() は安定ソートのため、同じ尤度ではプロバイダーの順序を保つ
            candidates = sorted(
                (c for c in likelihoods if c.likelihood >= MIN_RECOMMENDATION_LIKELIHOOD),
                key=lambda c: c.likelihood,
                reverse=True,
            )
            places = [Place.from_place_detail(candidate.place) for candidate in candidates]
        except MALFORMED_PAYLOAD_ERRORS as e:
            logger.error(f"Malformed place likelihood response: {e!r}")
            raise PlaceNotFoundError() from e

        logger.debug(f"Place recommendations: {len(places)} of {len(likelihoods)} candidates kept")
        return places

    async def place_details(self, place_id: str) -> Place:
        """
        プレイスIDから詳細（座標）を取得

        詳細取得でオートコンプリートセッションは終了し、
        次のテキスト検索は新しいセッショントークンを使う
        """
        session_token = self.session_tokens.get_session_token()
        self.session_tokens.end_session()

        try:
            detail = await self.provider.fetch_place(place_id, PLACE_DETAIL_FIELDS, session_token)
        except ProviderError as e:
            logger.warning(f"Place details failed for {place_id}: {e.message}")
            raise ProviderFailureError(e.message) from e

        if detail is None:
            logger.warning(f"No place returned for {place_id}")
            raise PlaceNotFoundError()

        try:
            return Place.from_place_detail(detail)
        except MALFORMED_PAYLOAD_ERRORS as e:
            logger.error(f"Malformed place details for {place_id}: {e!r}")
            raise PlaceNotFoundError() from e
