from __future__ import annotations


class AnimalRegistryError(Exception):
    """Base class for registry errors."""
    pass


class AnimalNotFoundError(AnimalRegistryError):
    def __init__(self, animal_id: int):
        super().__init__(f"animal {animal_id} not found")
        self.animal_id = animal_id


class IdMismatchError(AnimalRegistryError):
    """Path id and payload id of an update disagree."""
    def __init__(self, path_id: int, body_id: int | None):
        super().__init__(f"path id {path_id} does not match body id {body_id}")
        self.path_id = path_id
        self.body_id = body_id


class EmptyCollectionError(AnimalRegistryError):
    """Random pick requested while the table holds no animals."""
    pass


class ConcurrencyConflictError(AnimalRegistryError):
    """Replace lost a write race while the record still exists."""
    def __init__(self, animal_id: int):
        super().__init__(f"concurrent modification of animal {animal_id}")
        self.animal_id = animal_id
