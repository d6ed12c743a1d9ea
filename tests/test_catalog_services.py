"""Tests for the category and product stores (app.services.categories / products)."""

import unittest
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import IntegrityError

from app.core.result import Err, ErrorKind, Ok
from app.models import Category, Product
from app.services import categories, products
from app.services.products import normalize_price
from factories import category_in, make_session, product_in


class TestNormalizePrice(unittest.TestCase):
    """normalize_price rounds half up to cents and rejects anything that is not a price."""

    def test_rounds_to_two_places(self) -> None:
        self.assertEqual(normalize_price("12.5").value, Decimal("12.50"))
        self.assertEqual(normalize_price(Decimal("0.005")).value, Decimal("0.01"))
        self.assertEqual(normalize_price(19.999).value, Decimal("20.00"))
        self.assertEqual(normalize_price(7).value, Decimal("7.00"))

    def test_zero_is_allowed(self) -> None:
        self.assertEqual(normalize_price("0").value, Decimal("0.00"))

    def test_rejects_negative_non_numeric_and_non_finite(self) -> None:
        for value in ("-0.01", -5, "abc", "", None, True, "NaN", "Infinity"):
            with self.subTest(value=value):
                result = normalize_price(value)
                self.assertIsInstance(result, Err)
                self.assertEqual(result.kind, ErrorKind.VALIDATION)

    def test_rejects_values_beyond_column_precision(self) -> None:
        self.assertIsInstance(normalize_price("99999999.99"), Ok)
        self.assertIsInstance(normalize_price("99999999.995"), Err)
        self.assertIsInstance(normalize_price("1e12"), Err)


class CatalogTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session()

    def tearDown(self) -> None:
        self.db.close()


class TestCategoryStore(CatalogTestCase):
    def test_create_and_get(self) -> None:
        created = categories.create_category(self.db, category_in())
        self.assertIsInstance(created, Ok)
        found = categories.get_category(self.db, "Electronics")
        self.assertEqual(found.value.id, created.value.id)
        self.assertEqual(found.value.description, "Electronics items for the home.")

    def test_duplicate_name_is_conflict(self) -> None:
        categories.create_category(self.db, category_in())
        result = categories.create_category(self.db, category_in(description="Again"))
        self.assertEqual(result.kind, ErrorKind.CONFLICT)
        self.assertEqual(self.db.query(Category).count(), 1)

    def test_missing_category_is_not_found(self) -> None:
        self.assertEqual(categories.get_category(self.db, "Nope").kind, ErrorKind.NOT_FOUND)
        self.assertEqual(
            categories.update_category(self.db, "Nope", category_in()).kind,
            ErrorKind.NOT_FOUND,
        )
        self.assertEqual(categories.delete_category(self.db, "Nope").kind, ErrorKind.NOT_FOUND)

    def test_update_renames_and_redescribes(self) -> None:
        categories.create_category(self.db, category_in())
        result = categories.update_category(
            self.db, "Electronics", category_in(name="Gadgets", description="Small devices.")
        )
        self.assertIsInstance(result, Ok)
        self.assertEqual(categories.get_category(self.db, "Electronics").kind, ErrorKind.NOT_FOUND)
        self.assertEqual(categories.get_category(self.db, "Gadgets").value.description, "Small devices.")

    def test_update_keeping_own_name_is_allowed(self) -> None:
        categories.create_category(self.db, category_in())
        result = categories.update_category(
            self.db, "Electronics", category_in(description="New text.")
        )
        self.assertIsInstance(result, Ok)

    def test_rename_onto_existing_name_is_conflict(self) -> None:
        categories.create_category(self.db, category_in())
        categories.create_category(self.db, category_in(name="Books"))
        result = categories.update_category(self.db, "Books", category_in(name="Electronics"))
        self.assertEqual(result.kind, ErrorKind.CONFLICT)

    def test_delete_empty_category(self) -> None:
        categories.create_category(self.db, category_in())
        self.assertIsInstance(categories.delete_category(self.db, "Electronics"), Ok)
        self.assertEqual(categories.list_categories(self.db), [])

    def test_delete_category_with_products_is_rejected(self) -> None:
        categories.create_category(self.db, category_in())
        products.create_product(self.db, product_in())
        result = categories.delete_category(self.db, "Electronics")
        self.assertEqual(result.kind, ErrorKind.CONFLICT)
        self.assertEqual(self.db.query(Category).count(), 1)
        self.assertEqual(self.db.query(Product).count(), 1)


    def test_delete_losing_race_to_new_product_is_conflict(self) -> None:
        categories.create_category(self.db, category_in())
        fk_violation = IntegrityError("DELETE FROM categories", {}, Exception("foreign key"))
        with patch.object(self.db, "commit", side_effect=fk_violation):
            result = categories.delete_category(self.db, "Electronics")
        self.assertEqual(result.kind, ErrorKind.CONFLICT)
        self.assertIsInstance(categories.get_category(self.db, "Electronics"), Ok)


class TestProductStore(CatalogTestCase):
    def setUp(self) -> None:
        super().setUp()
        categories.create_category(self.db, category_in())
        categories.create_category(self.db, category_in(name="Books", description="Paper."))

    def test_create_normalizes_price_and_links_category(self) -> None:
        result = products.create_product(self.db, product_in(price="10.5"))
        self.assertIsInstance(result, Ok)
        product = result.value
        self.assertEqual(product.price, Decimal("10.50"))
        self.assertEqual(product.category.name, "Electronics")

    def test_unknown_category_is_not_found_and_writes_nothing(self) -> None:
        result = products.create_product(self.db, product_in(category="Garden"))
        self.assertEqual(result.kind, ErrorKind.NOT_FOUND)
        self.assertEqual(self.db.query(Product).count(), 0)

    def test_duplicate_name_is_conflict(self) -> None:
        products.create_product(self.db, product_in())
        result = products.create_product(self.db, product_in(category="Books"))
        self.assertEqual(result.kind, ErrorKind.CONFLICT)
        self.assertEqual(self.db.query(Product).count(), 1)

    def test_negative_price_is_validation_error(self) -> None:
        result = products.create_product(self.db, product_in(price="-1"))
        self.assertEqual(result.kind, ErrorKind.VALIDATION)
        self.assertEqual(self.db.query(Product).count(), 0)

    def test_get_product(self) -> None:
        created = products.create_product(self.db, product_in()).value
        self.assertEqual(products.get_product(self.db, created.id).value.name, "Laptop")
        self.assertEqual(products.get_product(self.db, 999).kind, ErrorKind.NOT_FOUND)
        self.assertEqual(products.get_product(self.db, 0).kind, ErrorKind.VALIDATION)
        self.assertEqual(products.get_product(self.db, 2**63).kind, ErrorKind.NOT_FOUND)
        self.assertEqual(products.delete_product(self.db, 2**31).kind, ErrorKind.NOT_FOUND)

    def test_list_by_category(self) -> None:
        products.create_product(self.db, product_in(name="Laptop"))
        products.create_product(self.db, product_in(name="Phone"))
        products.create_product(self.db, product_in(name="Novel", category="Books"))

        found = products.list_products_by_category(self.db, "Electronics")
        self.assertEqual([p.name for p in found.value], ["Laptop", "Phone"])
        self.assertEqual(len(products.list_products(self.db)), 3)

    def test_list_by_category_missing_or_empty_is_not_found(self) -> None:
        self.assertEqual(
            products.list_products_by_category(self.db, "Garden").kind, ErrorKind.NOT_FOUND
        )
        result = products.list_products_by_category(self.db, "Books")
        self.assertEqual(result.kind, ErrorKind.NOT_FOUND)
        self.assertIn("Books", result.message)

    def test_update_moves_product_to_other_category(self) -> None:
        created = products.create_product(self.db, product_in()).value
        result = products.update_product(
            self.db,
            created.id,
            product_in(name="Laptop Pro", category="Books", price="1200"),
        )
        self.assertIsInstance(result, Ok)
        self.assertEqual(result.value.name, "Laptop Pro")
        self.assertEqual(result.value.price, Decimal("1200.00"))
        self.assertEqual(result.value.category.name, "Books")

    def test_update_with_unknown_category_is_not_found(self) -> None:
        created = products.create_product(self.db, product_in()).value
        result = products.update_product(self.db, created.id, product_in(category="Garden"))
        self.assertEqual(result.kind, ErrorKind.NOT_FOUND)
        self.db.refresh(created)
        self.assertEqual(created.category.name, "Electronics")

    def test_update_onto_other_products_name_is_conflict(self) -> None:
        products.create_product(self.db, product_in(name="Laptop"))
        phone = products.create_product(self.db, product_in(name="Phone")).value
        result = products.update_product(self.db, phone.id, product_in(name="Laptop"))
        self.assertEqual(result.kind, ErrorKind.CONFLICT)

    def test_update_missing_product_is_not_found(self) -> None:
        self.assertEqual(
            products.update_product(self.db, 42, product_in()).kind, ErrorKind.NOT_FOUND
        )

    def test_delete_product(self) -> None:
        product_id = products.create_product(self.db, product_in()).value.id
        self.assertIsInstance(products.delete_product(self.db, product_id), Ok)
        self.assertEqual(self.db.query(Product).count(), 0)
        self.assertEqual(products.delete_product(self.db, product_id).kind, ErrorKind.NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
