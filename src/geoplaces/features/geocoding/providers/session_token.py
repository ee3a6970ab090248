"""オートコンプリート用セッショントークン"""
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class SessionTokenProvider(ABC):
    """セッショントークンの供給元"""

    @abstractmethod
    def get_session_token(self) -> str:
        """現在のセッショントークンを取得"""

    def end_session(self) -> None:
        """現在のセッションを終了する（既定では何もしない）"""


class AutocompleteSessionTokenProvider(SessionTokenProvider):
    """
    1つの論理的なオートコンプリートセッションで同じトークンを使い回す

    プレイス詳細の取得（候補の選択）で end_session() が呼ばれ、
    次のテキスト検索から新しいセッションが始まる
    """

    def __init__(self) -> None:
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    def get_session_token(self) -> str:
        with self._lock:
            if self._token is None:
                self._token = str(uuid.uuid4())
                logger.debug(f"Started autocomplete session: {self._token}")
            return self._token

    def end_session(self) -> None:
        """セッションを終了し、次回取得時に新しいトークンを発行する"""
        with self._lock:
            ended, self._token = self._token, None
        if ended is not None:
            logger.debug(f"Ended autocomplete session: {ended}")
