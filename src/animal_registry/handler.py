"""
Transport-neutral request handler for the Animals endpoint.

Each call is stateless: the store and the random-index generator are injected
through the constructor. Store calls are blocking and run in a worker thread.
"""
from __future__ import annotations
import asyncio, enum, logging, random
from typing import Callable, Optional

from .errors import AnimalNotFoundError, EmptyCollectionError, IdMismatchError
from .models import Animal, AnimalResponse
from .query import AnimalFilter, PageRequest
from .store import AnimalStore, WriteOutcome

logger = logging.getLogger(__name__)

# pick_index(n) -> int in [0, n)
IndexPicker = Callable[[int], int]


class UpdateResult(enum.Enum):
    UPDATED = "updated"
    # write race lost while the record still exists; fatal for the caller
    CONFLICT = "conflict"


class AnimalsHandler:

    def __init__(self, store: AnimalStore, pick_index: Optional[IndexPicker] = None):
        self.store = store
        self.pick_index = pick_index or random.Random().randrange

    async def list_animals(
        self,
        species: Optional[str] = None,
        name: Optional[str] = None,
        minimum_age: int = 0,
        page: Optional[int] = None,
    ) -> AnimalResponse:
        flt = AnimalFilter(species=species, name=name, minimum_age=minimum_age)
        req = PageRequest.from_query(page)
        # total is counted before paging, in the same read as the window
        total, animals = await asyncio.to_thread(self.store.page, flt, req.offset, req.limit)
        logger.debug("list %s page=%d -> %d/%d", flt, req.page, len(animals), total)
        return AnimalResponse(animals=animals, current_page=req.page, page_items=total, page_size=req.size)

    async def get_animal(self, animal_id: int) -> Animal:
        animal = await asyncio.to_thread(self.store.get, animal_id)
        if animal is None:
            raise AnimalNotFoundError(animal_id)
        return animal

    async def create_animal(self, animal: Animal) -> Animal:
        new_id = await asyncio.to_thread(self.store.insert, animal)
        logger.info("Created animal %d (%s %r)", new_id, animal.species, animal.name)
        return animal.model_copy(update={"animal_id": new_id})

    async def update_animal(self, animal_id: int, animal: Animal) -> UpdateResult:
        if animal.animal_id != animal_id:
            raise IdMismatchError(animal_id, animal.animal_id)

        outcome = await asyncio.to_thread(self.store.replace, animal)
        if outcome is WriteOutcome.APPLIED:
            logger.info("Updated animal %d", animal_id)
            return UpdateResult.UPDATED

        if not await asyncio.to_thread(self.store.exists, animal_id):
            raise AnimalNotFoundError(animal_id)
        logger.warning("Concurrency conflict updating animal %d", animal_id)
        return UpdateResult.CONFLICT

    async def delete_animal(self, animal_id: int) -> None:
        if not await asyncio.to_thread(self.store.delete, animal_id):
            raise AnimalNotFoundError(animal_id)
        logger.info("Deleted animal %d", animal_id)

    async def random_animal(self) -> Animal:
        """Uniform pick: count, then read the single row at a random offset, under one store lock."""
        picked = await asyncio.to_thread(self.store.pick, self.pick_index)
        if picked is None:
            raise EmptyCollectionError("no animals to pick from")
        return picked
