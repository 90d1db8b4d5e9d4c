import pytest

from animal_registry.models import Animal
from animal_registry.store import AnimalStore


def make_animals(*rows):
    return [Animal(species=s, name=n, age=a) for s, n, a in rows]


SEVEN_CATS = make_animals(*[("cat", f"cat{i}", i) for i in range(1, 8)])


@pytest.fixture
def store():
    s = AnimalStore.open(":memory:")
    yield s
    s.close()


@pytest.fixture
def cat_and_dog(store):
    store.seed(make_animals(("cat", "Tom", 2), ("dog", "Rex", 5)))
    return store
