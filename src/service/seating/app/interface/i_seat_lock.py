from abc import ABC, abstractmethod
from typing import AsyncContextManager


def seat_lock_key(seat_id: int) -> str:
    return f'seat:{seat_id}'


def user_lock_key(user_id: int) -> str:
    return f'user:{user_id}'


class ISeatLock(ABC):
    @abstractmethod
    def hold(self, *keys: str) -> AsyncContextManager[None]:
        """
        Hold every key for the duration of the block.

        Keys are taken in sorted order so two callers asking for overlapping
        sets cannot deadlock.

        Raises:
            ConflictError: A key stayed busy past the wait limit
        """
        pass
