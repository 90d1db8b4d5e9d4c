import pytest

from animal_registry.models import Animal
from animal_registry.query import AnimalFilter
from animal_registry.store import WriteOutcome
from conftest import SEVEN_CATS, make_animals

def test_insert_assigns_ids_and_ignores_incoming_id(store):
    first = store.insert(Animal(animal_id=99, species="cat", name="Tom", age=2))
    second = store.insert(Animal(species="dog", name="Rex", age=5))
    assert second == first + 1
    assert store.get(99) is None
    assert store.get(first).name == "Tom"

def test_count_and_fetch_respect_filter(cat_and_dog):
    cats = AnimalFilter(species="cat")
    assert cat_and_dog.count(cats) == 1
    [tom] = cat_and_dog.fetch(cats, offset=0, limit=3)
    assert (tom.animal_id, tom.species, tom.age) == (1, "cat", 2)
    assert cat_and_dog.count(AnimalFilter(minimum_age=3)) == 1
    assert cat_and_dog.count(AnimalFilter()) == 2

def test_fetch_is_ordered_and_paged(store):
    store.seed(SEVEN_CATS)
    page = store.fetch(AnimalFilter(), offset=3, limit=3)
    assert [a.animal_id for a in page] == [4, 5, 6]

def test_replace_reports_conflict_for_missing_row(cat_and_dog):
    ok = cat_and_dog.replace(Animal(animal_id=1, species="cat", name="Tommy", age=3))
    assert ok is WriteOutcome.APPLIED
    assert cat_and_dog.get(1).name == "Tommy"
    gone = cat_and_dog.replace(Animal(animal_id=42, species="cat", name="Ghost", age=1))
    assert gone is WriteOutcome.CONFLICT

def test_delete_and_exists(cat_and_dog):
    assert cat_and_dog.exists(2)
    assert cat_and_dog.delete(2) is True
    assert not cat_and_dog.exists(2)
    assert cat_and_dog.delete(2) is False

def test_seed_only_fills_empty_table(store):
    assert store.seed(make_animals(("cat", "A", 1), ("cat", "B", 2))) == 2
    assert store.seed(make_animals(("dog", "C", 3))) == 0
    assert store.count(AnimalFilter()) == 2

def test_page_returns_total_and_window_together(store):
    store.seed(SEVEN_CATS)
    total, rows = store.page(AnimalFilter(minimum_age=3), offset=3, limit=3)
    assert total == 5
    assert [a.animal_id for a in rows] == [6, 7]

def test_pick_reads_row_at_generated_offset(store):
    assert store.pick(lambda n: 0) is None
    store.seed(SEVEN_CATS)
    seen = []
    def pick(n):
        seen.append(n)
        return 4
    assert store.pick(pick).animal_id == 5
    assert seen == [7]
    with pytest.raises(ValueError):
        store.pick(lambda n: n)
