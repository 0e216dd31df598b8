from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Literal, Protocol, Union

from app.domain.services import default_key_hasher


@dataclass(frozen=True)
class CustomHasher:
    hash: Callable[[str], Awaitable[str]]
    type: Literal["custom-hasher"] = "custom-hasher"


StoreTokenOption = Union[Literal["plain", "hashed"], CustomHasher]


class TokenStorage(Protocol):
    async def transform(self, token: str) -> str:
        """Map a logical token to the form persisted in the verification store."""


class PlainTokenStorage:
    async def transform(self, token: str) -> str:
        return token


class HashedTokenStorage:
    async def transform(self, token: str) -> str:
        return default_key_hasher(token)


class CustomHasherTokenStorage:
    def __init__(self, hash: Callable[[str], Awaitable[str]]) -> None:
        self._hash = hash

    async def transform(self, token: str) -> str:
        # hasher errors propagate to the caller
        return await self._hash(token)


def make_token_storage(store_token: StoreTokenOption) -> TokenStorage:
    if store_token == "plain":
        return PlainTokenStorage()
    if store_token == "hashed":
        return HashedTokenStorage()
    if isinstance(store_token, CustomHasher):
        return CustomHasherTokenStorage(store_token.hash)
    raise ValueError(f"unsupported store_token option: {store_token!r}")
