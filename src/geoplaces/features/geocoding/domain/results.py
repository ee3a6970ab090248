"""ジオコーディング結果のラッパー"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from ....shared.exceptions.errors import GeocodeError
from .models import Place

T = TypeVar("T", Place, list[Place])


@dataclass(frozen=True)
class GeocodeOutcome(Generic[T]):
    """
    成功値またはエラーのどちらか一方を保持する結果

    例外を送出せずに結果を受け渡したい呼び出し元（コールバック等）向け
    """

    value: Optional[T] = None
    error: Optional[GeocodeError] = None

    @classmethod
    def success(cls, value: T) -> "GeocodeOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GeocodeError) -> "GeocodeOutcome[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        成功値を返す

        Raises:
            GeocodeError: 失敗結果の場合は保持しているエラー
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


PlaceOrPlaces = Union[Place, list[Place]]
