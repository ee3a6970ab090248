"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    テキストを正規化

    - 前後の空白を除去
    - 連続する空白を1つに
    - 全角スペースを半角スペースに変換
    """
    if not text:
        return None

    text = text.replace("　", " ")
    text = re.sub(r"\s+", " ", text)
    text = text.strip()

    return text if text else None


def first_present(*values: Optional[str]) -> Optional[str]:
    """
    最初にNoneでない値を返す

    空文字列はNoneとは区別し、そのまま返す
    """
    for value in values:
        if value is not None:
            return value
    return None
