"""ロギング設定"""
import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# WARNING未満を抑制するサードパーティのロガー
QUIET_LOGGERS = ("urllib3", "googlemaps", "google", "uvicorn.access")

_logger_configured = False


def setup_logging(
    level: str = "INFO",
    enable_cloud_logging: bool = False,
    project_id: Optional[str] = None,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    """
    ルートロガーを設定（プロセス内で1回のみ）

    CLIは検索結果のJSONを標準出力に書くため、ログは既定で標準エラー出力に出す。

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_cloud_logging: Cloud Loggingにも送信するか
        project_id: GCPプロジェクトID (Cloud Logging有効時に使用)
        stream: コンソール出力先（未指定時は sys.stderr）
        force: 設定済みでも再設定する
    """
    global _logger_configured

    if _logger_configured and not force:
        return

    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if enable_cloud_logging:
        _add_cloud_logging_handler(root_logger, project_id)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logger_configured = True
    logging.getLogger(__name__).info(f"Logging configured with level: {logging.getLevelName(log_level)}")


def _add_cloud_logging_handler(root_logger: logging.Logger, project_id: Optional[str]) -> None:
    """Cloud Loggingハンドラーを追加（失敗してもコンソール出力は継続）"""
    try:
        from google.cloud import logging as cloud_logging

        client = cloud_logging.Client(project=project_id)
        root_logger.addHandler(cloud_logging.handlers.CloudLoggingHandler(client, name="geoplaces"))
        logging.getLogger(__name__).info(f"Cloud Logging enabled: project={project_id}")
    except Exception as e:
        logging.getLogger(__name__).warning(f"Failed to enable Cloud Logging: {e}")


def get_logger(name: str) -> logging.Logger:
    """モジュール用のロガーを取得（通常は __name__ を渡す）"""
    return logging.getLogger(name)
