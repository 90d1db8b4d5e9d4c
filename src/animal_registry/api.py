"""
HTTP routes for the Animals endpoint.

Routes only translate between HTTP and `AnimalsHandler`:
- registry errors become HTTPException (404 / 400)
- a concurrency conflict on update is raised as ConcurrencyConflictError and
  left to the server, which answers with a generic 500
"""
from __future__ import annotations
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response

from .errors import (
    AnimalNotFoundError,
    ConcurrencyConflictError,
    EmptyCollectionError,
    IdMismatchError,
)
from .handler import AnimalsHandler, UpdateResult
from .models import Animal, AnimalResponse
from .query import INT32_MAX, INT32_MIN

# path ids outside 32-bit range fail validation (422) instead of overflowing sqlite
AnimalId = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]

router = APIRouter()


def get_handler(request: Request) -> AnimalsHandler:
    return request.app.state.handler


@router.get(
    "/animals",
    response_model=AnimalResponse,
    summary="List animals, filtered and paginated (3 per page)",
)
async def list_animals(
    species: Optional[str] = None,
    name: Optional[str] = None,
    minimum_age: int = Query(0, alias="minimumAge", ge=INT32_MIN, le=INT32_MAX),
    page: Optional[int] = Query(None, ge=1, le=INT32_MAX),
    handler: AnimalsHandler = Depends(get_handler),
):
    return await handler.list_animals(species=species, name=name, minimum_age=minimum_age, page=page)


# registered before /animals/{animal_id} so "random" is not parsed as an id
@router.get(
    "/animals/random",
    response_model=Animal,
    summary="Pick one animal uniformly at random",
    responses={404: {"description": "No animals stored"}},
)
async def random_animal(handler: AnimalsHandler = Depends(get_handler)):
    try:
        return await handler.random_animal()
    except EmptyCollectionError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get(
    "/animals/{animal_id}",
    response_model=Animal,
    responses={404: {"description": "Animal not found"}},
)
async def get_animal(animal_id: AnimalId, handler: AnimalsHandler = Depends(get_handler)):
    try:
        return await handler.get_animal(animal_id)
    except AnimalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/animals", response_model=Animal, status_code=201)
async def create_animal(
    animal: Animal,
    request: Request,
    response: Response,
    handler: AnimalsHandler = Depends(get_handler),
):
    created = await handler.create_animal(animal)
    response.headers["Location"] = str(request.url_for("get_animal", animal_id=created.animal_id))
    return created


@router.put(
    "/animals/{animal_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Path id and body id differ"},
        404: {"description": "Animal not found"},
    },
)
async def update_animal(animal_id: AnimalId, animal: Animal, handler: AnimalsHandler = Depends(get_handler)):
    try:
        result = await handler.update_animal(animal_id, animal)
    except IdMismatchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnimalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if result is UpdateResult.CONFLICT:
        raise ConcurrencyConflictError(animal_id)
    return Response(status_code=204)


@router.delete(
    "/animals/{animal_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Animal not found"}},
)
async def delete_animal(animal_id: AnimalId, handler: AnimalsHandler = Depends(get_handler)):
    try:
        await handler.delete_animal(animal_id)
    except AnimalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
