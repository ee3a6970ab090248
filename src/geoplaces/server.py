"""Cloud Run用HTTPサーバー（FastAPI）"""
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .features.geocoding.domain.coordinates import Coordinates
from .features.geocoding.domain.enums import PlaceField
from .features.geocoding.domain.requests import (
    ForwardGeocode,
    PlaceById,
    PlaceRecommendations,
    ReverseGeocode,
)
from .features.geocoding.orchestrator import PlacesOrchestrator
from .features.geocoding.services.geocode_dispatcher import GeocodeDispatcher
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import (
    ConfigurationError,
    GeocodeError,
    PlaceNotFoundError,
    ProviderFailureError,
)
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(
    level=settings.log_level,
    enable_cloud_logging=settings.gcp_logging_enabled,
    project_id=settings.gcp_project_id,
)
logger = get_logger(__name__)

app = FastAPI(
    title="プレイス検索サービス",
    description="Google Maps のテキスト検索・逆ジオコーディング・周辺検索・詳細取得を統一形式で提供するサービス",
    version="1.0.0",
)


@lru_cache(maxsize=1)
def get_orchestrator() -> PlacesOrchestrator:
    """オーケストレーターを取得（初回呼び出し時に生成）"""
    return PlacesOrchestrator(settings)


def get_dispatcher() -> GeocodeDispatcher:
    """ディスパッチャーを取得"""
    return get_orchestrator().dispatcher


@app.on_event("startup")
async def startup_event() -> None:
    """起動時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Project: {settings.project_name}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """シャットダウン時の処理"""
    logger.info("Application shutting down")


@app.get("/")
async def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": "プレイス検索サービス",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.get("/places/search")
async def search_places(
    q: str = Query(..., min_length=1, description="検索文字列"),
    dispatcher: GeocodeDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """テキスト検索（オートコンプリート候補）"""
    places = await dispatcher.fetch(ForwardGeocode(q))
    return {"places": [place.to_dict() for place in places]}


@app.get("/places/reverse")
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90, description="緯度"),
    lng: float = Query(..., ge=-180, le=180, description="経度"),
    dispatcher: GeocodeDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """座標から住所を取得"""
    place = await dispatcher.fetch(ReverseGeocode(Coordinates(latitude=lat, longitude=lng)))
    return {"place": place.to_dict()}


@app.get("/places/nearby")
async def nearby_places(
    fields: Optional[str] = Query(None, description="取得するフィールド（カンマ区切り）"),
    dispatcher: GeocodeDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """現在地付近のおすすめプレイス"""
    try:
        selected = PlaceField.from_names(fields.split(",")) if fields else PlaceField.all()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    places = await dispatcher.fetch(PlaceRecommendations(selected))
    return {"places": [place.to_dict() for place in places]}


@app.get("/places/{place_id}")
async def place_details(
    place_id: str,
    dispatcher: GeocodeDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """プレイスIDから詳細を取得"""
    place = await dispatcher.fetch(PlaceById(place_id))
    return {"place": place.to_dict()}


@app.exception_handler(GeocodeError)
async def geocode_exception_handler(request: Request, exc: GeocodeError) -> JSONResponse:
    """ジオコーディングエラーのハンドラー"""
    if isinstance(exc, PlaceNotFoundError):
        status_code = 404
    elif isinstance(exc, ProviderFailureError):
        status_code = 502
    else:
        status_code = 500

    logger.warning(f"Geocode error on {request.url.path}: {exc.kind.value} {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.kind.value, "detail": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """設定エラーのハンドラー"""
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=503,
        content={"message": "Service is not configured", "detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "detail": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
