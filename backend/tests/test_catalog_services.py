"""
Glee Threads Backend — Catalogue & Showcase Service Unit Tests
================================================================

What:  Tests for categories, products and the featured/hero pin ordering.
How:   Mock DB sessions; result objects are MagicMocks shaped like SQLAlchemy's.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.showcase import FeaturedProduct, HeroProduct
from app.schemas.catalog import CategoryInput, ProductInput, SizeStock
from app.services.category_service import CategoryService, slugify
from app.services.product_service import ProductService, normalize_stock, parse_sizes
from app.services.showcase_service import ShowcaseService


def _first_result(row):
    result = MagicMock()
    result.first.return_value = row
    return result


def _scalars_result(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


def _scalar_result(value):
    result = MagicMock()
    result.scalar.return_value = value
    result.scalar_one_or_none.return_value = value
    return result


def _product(**overrides):
    fields = dict(
        id=5,
        name="Classic Tee",
        description="Cotton",
        price=499,
        image_url="https://cdn/x.png",
        category_id=1,
        is_out_of_stock=False,
        sizes=["M", "S"],
    )
    fields.update(overrides)
    # `name` is reserved by the MagicMock constructor, so set attributes afterwards.
    product = MagicMock()
    for key, value in fields.items():
        setattr(product, key, value)
    return product


class TestSizeHelpers:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, []),
            ("", []),
            (["s", "M", "m"], ["S", "M"]),
            ('["L", "XL"]', ["L", "XL"]),
            ("S, M ,L", ["S", "M", "L"]),
            ([{"size_name": "m"}, {"size": "l"}, {"other": 1}], ["M", "L"]),
            (42, []),
        ],
    )
    def test_parse_sizes(self, raw, expected):
        assert parse_sizes(raw) == expected

    def test_normalize_stock_merges_and_orders(self):
        rows = [SizeStock(size="xl", quantity=2), SizeStock(size=" s ", quantity=1),
                SizeStock(size="XL", quantity=3), SizeStock(size="  ", quantity=9)]
        merged = normalize_stock(rows)
        assert [(r.size, r.quantity) for r in merged] == [("S", 1), ("XL", 5)]

    def test_slugify(self):
        assert slugify("Oversized Tees!") == "oversized-tees"
        assert slugify("  Graphic  & Print ") == "graphic-print"


class TestCategoryService:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_create_requires_name(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, CategoryInput(name="   "))
        assert exc_info.value.message == "Category name is required"

    @pytest.mark.asyncio
    async def test_create_sets_slug(self, mock_db_session):
        await self.service.create(mock_db_session, CategoryInput(name="Oversized Tees"))
        category = mock_db_session.add.call_args[0][0]
        assert category.slug == "oversized-tees"

    @pytest.mark.asyncio
    async def test_delete_refuses_non_empty(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(3)
        with pytest.raises(ValidationError) as exc_info:
            await self.service.delete(mock_db_session, 1)
        assert exc_info.value.message.startswith("Cannot delete category with products")

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_db_session):
        deleted = MagicMock(rowcount=0)
        mock_db_session.execute.side_effect = [_scalar_result(0), deleted]
        with pytest.raises(NotFoundError):
            await self.service.delete(mock_db_session, 1)

    @pytest.mark.asyncio
    async def test_list_public_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(DatabaseError):
            await self.service.list_public(mock_db_session)


class TestProductService:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_get_public_missing(self, mock_db_session):
        mock_db_session.execute.return_value = _first_result(None)
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_public(mock_db_session, 99)
        assert exc_info.value.message == "Product not found"

    @pytest.mark.asyncio
    async def test_get_public_out_of_stock_has_no_sizes(self, mock_db_session):
        mock_db_session.execute.side_effect = [
            _first_result((_product(is_out_of_stock=True), "Tees")),
            _scalars_result([]),
        ]
        detail = await self.service.get_public(mock_db_session, 5)
        assert detail.is_out_of_stock is True
        assert detail.sizes == []
        assert detail.images[0].image_url == "https://cdn/x.png"

    @pytest.mark.asyncio
    async def test_get_public_falls_back_to_inventory(self, mock_db_session):
        mock_db_session.execute.side_effect = [
            _first_result((_product(sizes=None), "Tees")),
            _scalars_result(["XL", "S", "S"]),
            _scalars_result([]),
        ]
        detail = await self.service.get_public(mock_db_session, 5)
        assert [s.size_name for s in detail.sizes] == ["S", "XL"]

    @pytest.mark.asyncio
    async def test_get_public_survives_colour_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = [
            _first_result((_product(), "Tees")),
            OperationalError("SELECT", {}, Exception("no table")),
        ]
        detail = await self.service.get_public(mock_db_session, 5)
        assert detail.colors == []
        assert [s.size_name for s in detail.sizes] == ["M", "S"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            ProductInput(price=10, category_id=1),
            ProductInput(name="Tee", category_id=1),
            ProductInput(name="Tee", price=10),
        ],
    )
    async def test_create_requires_fields(self, mock_db_session, data):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, data)
        assert exc_info.value.message == "Name, price, and category are required"

    @pytest.mark.asyncio
    async def test_create_negative_price(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.create(mock_db_session, ProductInput(name="Tee", price=-1, category_id=1))

    @pytest.mark.asyncio
    async def test_create_writes_sizes_and_inventory(self, mock_db_session):
        data = ProductInput(
            name=" Tee ",
            price=499,
            category_id=2,
            sizes=[SizeStock(size="l", quantity=4), SizeStock(size="s", quantity=1)],
        )
        await self.service.create(mock_db_session, data)

        added = [call[0][0] for call in mock_db_session.add.call_args_list]
        product, inventory = added[0], added[1:]
        assert product.name == "Tee"
        assert product.sizes == ["S", "L"]
        assert product.is_active is True
        assert [(row.size, row.quantity) for row in inventory] == [("S", 1), ("L", 4)]

    @pytest.mark.asyncio
    async def test_update_rejects_blank_name(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update(mock_db_session, 5, ProductInput(name=" "))
        assert exc_info.value.message == "Product name cannot be empty"

    @pytest.mark.asyncio
    async def test_set_out_of_stock_missing(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)
        with pytest.raises(NotFoundError):
            await self.service.set_out_of_stock(mock_db_session, 5, True)


class TestShowcaseService:

    def setup_method(self):
        self.featured = ShowcaseService(FeaturedProduct, "featured")
        self.hero = ShowcaseService(HeroProduct, "hero section", flag_column="is_hero")

    def _pins(self, *product_ids, position=0):
        return [MagicMock(product_id=pid, position=position) for pid in product_ids]

    @pytest.mark.asyncio
    async def test_list_keeps_inactive_pins(self, mock_db_session):
        pin = MagicMock(id=1, product_id=5, position=0)
        result = MagicMock()
        result.all.return_value = [(pin, _product(is_active=False), "Tees")]
        mock_db_session.execute.return_value = result

        entries = await self.hero.list_entries(mock_db_session)

        assert [entry.product_id for entry in entries] == [5]
        assert entries[0].product.category_name == "Tees"
        query = str(mock_db_session.execute.await_args[0][0])
        assert "WHERE" not in query

    @pytest.mark.asyncio
    async def test_move_invalid_direction(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.featured.move(mock_db_session, 1, "sideways")
        assert exc_info.value.message == "Invalid direction"

    @pytest.mark.asyncio
    async def test_move_unpinned_product(self, mock_db_session):
        mock_db_session.execute.return_value = _scalars_result(self._pins(1, 2))
        with pytest.raises(NotFoundError) as exc_info:
            await self.featured.move(mock_db_session, 9, "up")
        assert exc_info.value.message == "Product not found in featured"

    @pytest.mark.asyncio
    async def test_move_at_edges(self, mock_db_session):
        mock_db_session.execute.return_value = _scalars_result(self._pins(1, 2))
        assert await self.featured.move(mock_db_session, 1, "up") == "Already at the top"
        assert await self.featured.move(mock_db_session, 2, "down") == "Already at the bottom"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_move_swaps_with_duplicate_positions(self, mock_db_session):
        pins = self._pins(1, 2, 3)  # all at position 0
        mock_db_session.execute.return_value = _scalars_result(pins)

        message = await self.hero.move(mock_db_session, 3, "UP")

        assert message == "Position updated successfully"
        assert [pin.position for pin in pins] == [0, 2, 1]
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_pin_missing_product(self, mock_db_session):
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError):
            await self.featured.set_pinned(mock_db_session, 9, True)

    @pytest.mark.asyncio
    async def test_pin_appends_after_last(self, mock_db_session):
        mock_db_session.get.return_value = _product()
        mock_db_session.execute.side_effect = [_scalar_result(None), _scalar_result(4)]

        await self.featured.set_pinned(mock_db_session, 5, True)

        pin = mock_db_session.add.call_args[0][0]
        assert isinstance(pin, FeaturedProduct)
        assert pin.position == 5

    @pytest.mark.asyncio
    async def test_hero_pin_mirrors_flag(self, mock_db_session):
        mock_db_session.get.return_value = _product()
        mock_db_session.execute.side_effect = [_scalar_result(None), _scalar_result(None), MagicMock()]

        await self.hero.set_pinned(mock_db_session, 5, True)

        pin = mock_db_session.add.call_args[0][0]
        assert pin.position == 0
        assert mock_db_session.execute.await_count == 3

    @pytest.mark.asyncio
    async def test_pin_database_error(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(DatabaseError) as exc_info:
            await self.featured.set_pinned(mock_db_session, 5, False)
        assert exc_info.value.public_message == "Failed to update featured"
