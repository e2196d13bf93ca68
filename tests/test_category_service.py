"""Car categories"""
import pytest
from dealership.errors import NotFoundError
from dealership.models.category import CategoryCreate, CategoryUpdate
from dealership.services import CategoryService


@pytest.fixture
def categories(db):
    return CategoryService(db)


async def test_find_all_sorted_by_name(categories):
    await categories.create(CategoryCreate(name='SUV'))
    await categories.create(CategoryCreate(name='Hatchback'))

    assert [c.name for c in await categories.find_all()] == ['Hatchback', 'SUV']


async def test_soft_delete(categories, db):
    category = await categories.create(CategoryCreate(name='Van'))

    await categories.delete(category.category_id)

    assert await categories.find_all() == []
    with pytest.raises(NotFoundError):
        await categories.find_by_id(category.category_id)
    assert (await db.categories.get(category.category_id)) is not None


async def test_update(categories):
    category = await categories.create(CategoryCreate(name='Truck'))

    updated = await categories.update(category.category_id, CategoryUpdate(description='Cargo'))
    assert updated.name == 'Truck'
    assert updated.description == 'Cargo'


async def test_update_missing(categories):
    with pytest.raises(NotFoundError):
        await categories.update(99, CategoryUpdate(name='Nope'))
