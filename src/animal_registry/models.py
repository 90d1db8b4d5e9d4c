"""
Models for requests and responses to/from the Animals API.

Server side (pydantic, camelCase on the wire):
- Animal: a single record; `animalId` is assigned by the store
- AnimalResponse: one page of a filtered listing

Client side (TypedDict, same wire shape):
- AnimalPayload: body of GET /animals/{id}, POST and PUT
- AnimalPage: body of GET /animals
"""

from __future__ import annotations
from typing import List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from .query import INT32_MAX, INT32_MIN


class Animal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    animal_id: Optional[int] = Field(None, alias="animalId", ge=INT32_MIN, le=INT32_MAX)
    species: str
    name: str
    age: int = Field(..., ge=0, le=INT32_MAX)


class AnimalResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    animals: List[Animal]
    current_page: int = Field(..., alias="currentPage")
    # total matching the filter, before pagination
    page_items: int = Field(..., alias="pageItems")
    page_size: int = Field(..., alias="pageSize")


# GET /animals/{id}, POST /animals, PUT /animals/{id}
class AnimalPayload(TypedDict, total=False):
    animalId: int
    species: str
    name: str
    age: int


# GET /animals
class AnimalPage(TypedDict):
    animals: List[AnimalPayload]
    currentPage: int
    pageItems: int
    pageSize: int
