"""CLIエントリーポイント"""
import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from .features.geocoding.domain.coordinates import Coordinates
from .features.geocoding.domain.enums import PlaceField
from .features.geocoding.domain.models import Place
from .features.geocoding.domain.requests import (
    ForwardGeocode,
    GeocodeRequest,
    PlaceById,
    PlaceRecommendations,
    ReverseGeocode,
)
from .features.geocoding.orchestrator import PlacesOrchestrator
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import GeocodeError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(description="Google Maps プレイス検索ツール")

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )
    parser.add_argument(
        "--enrich",
        action="store_true",
        help="結果に州・市区町村・国を付与する",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="テキスト検索（オートコンプリート）")
    search.add_argument("query", type=str, help="検索文字列")

    reverse = subparsers.add_parser("reverse", help="座標から住所を取得")
    reverse.add_argument("latitude", type=float, help="緯度")
    reverse.add_argument("longitude", type=float, help="経度")

    nearby = subparsers.add_parser("nearby", help="現在地付近のおすすめプレイス")
    nearby.add_argument(
        "--fields",
        type=str,
        default="place_id,name,formatted_address,coordinate",
        help="取得するフィールド（カンマ区切り）",
    )

    place = subparsers.add_parser("place", help="プレイスIDから詳細を取得")
    place.add_argument("place_id", type=str, help="プレイスID")

    return parser


def build_request(args: argparse.Namespace) -> GeocodeRequest:
    """引数からリクエストを作成"""
    if args.command == "search":
        return ForwardGeocode(args.query)
    if args.command == "reverse":
        return ReverseGeocode(Coordinates(latitude=args.latitude, longitude=args.longitude))
    if args.command == "nearby":
        return PlaceRecommendations(PlaceField.from_names(args.fields.split(",")))
    return PlaceById(args.place_id)


async def run(orchestrator: PlacesOrchestrator, request: GeocodeRequest, enrich: bool) -> list[Place]:
    """リクエストを実行し、結果をリストで返す"""
    result = await orchestrator.dispatcher.fetch(request)
    places = result if isinstance(result, list) else [result]

    if enrich:
        places = await orchestrator.enrichment_service.enrich_all(places)

    return places


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗, 130: 中断）
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(
            level=settings.log_level,
            enable_cloud_logging=settings.gcp_logging_enabled,
            project_id=settings.gcp_project_id,
        )

        request = build_request(args)
        logger.info(f"Running {args.command}: {request!r}")

        orchestrator = PlacesOrchestrator(settings)
        places = asyncio.run(run(orchestrator, request, args.enrich))

        print(json.dumps([place.to_dict() for place in places], ensure_ascii=False, indent=2))
        return 0

    except GeocodeError as e:
        logger.error(f"Lookup failed ({e.kind.value}): {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
