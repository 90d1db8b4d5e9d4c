"""
Async API wrapper around the Animal Registry endpoints.

Provides a typed interface for:
- Listing filtered, paginated animals (`list_animals`, `iter_animals`)
- Fetching, creating, updating and deleting a single animal
- Picking a random animal (`random_animal`)

All methods return typed dicts from `models.py`.
"""
from __future__ import annotations
import math
from typing import Any, AsyncIterator, Dict, Optional

import httpx
from http_client import HttpClient

from .models import AnimalPage, AnimalPayload

class AnimalsClient:

    def __init__(self, http: HttpClient, prefix: str = "/api/v2"):
        self.http = http
        self.prefix = prefix.rstrip("/")

    def _path(self, suffix: str = "") -> str:
        return f"{self.prefix}/animals{suffix}"

    async def list_animals(
        self,
        species: Optional[str] = None,
        name: Optional[str] = None,
        minimum_age: int = 0,
        page: Optional[int] = None,
    ) -> AnimalPage:
        params: Dict[str, Any] = {}
        if species is not None:
            params["species"] = species
        if name is not None:
            params["name"] = name
        if minimum_age > 0:
            params["minimumAge"] = minimum_age
        if page is not None:
            params["page"] = page
        resp = await self.http.request("GET", self._path(), params=params)
        return resp.json()

    async def iter_animals(
        self,
        species: Optional[str] = None,
        name: Optional[str] = None,
        minimum_age: int = 0,
    ) -> AsyncIterator[AnimalPayload]:
        """
        Walk every page of a listing.
        Page 1 gives pageItems/pageSize, the remaining pages are fetched sequentially.
        """
        first = await self.list_animals(species, name, minimum_age, page=1)
        for item in first["animals"]:
            yield item
        total_pages = math.ceil(first["pageItems"] / first["pageSize"]) if first["pageSize"] else 1
        for p in range(2, total_pages + 1):
            page = await self.list_animals(species, name, minimum_age, page=p)
            for item in page["animals"]:
                yield item

    async def get_animal(self, animal_id: int) -> Optional[AnimalPayload]:
        try:
            resp = await self.http.request("GET", self._path(f"/{animal_id}"))
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise
        return resp.json()

    async def create_animal(self, animal: AnimalPayload) -> AnimalPayload:
        resp = await self.http.request("POST", self._path(), json=dict(animal))
        return resp.json()

    async def update_animal(self, animal_id: int, animal: AnimalPayload) -> None:
        await self.http.request("PUT", self._path(f"/{animal_id}"), json=dict(animal))

    async def delete_animal(self, animal_id: int) -> None:
        await self.http.request("DELETE", self._path(f"/{animal_id}"))

    async def random_animal(self) -> AnimalPayload:
        resp = await self.http.request("GET", self._path("/random"))
        return resp.json()
