import unittest
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from domain.entities import IndexDocument, SortType
from domain.exceptions import FieldMappingNotFoundError
from infrastructure.mapping.dataclass_mapper import DataclassDocumentMapper


class Genre(Enum):
    SCIFI = "scifi"
    HISTORY = "history"


@dataclass
class Book:
    isbn: str
    title: str
    year: int
    rating: float
    genre: Genre
    published: date
    updated_at: Optional[datetime] = None
    in_print: bool = True
    tags: list[str] = field(default_factory=list)


BOOK = Book(
    isbn="978-0441013593",
    title="Dune",
    year=1965,
    rating=4.3,
    genre=Genre.SCIFI,
    published=date(1965, 8, 1),
    updated_at=datetime(2020, 5, 17, 12, 30),
    in_print=True,
    tags=["desert", "classic"],
)


class TestDataclassDocumentMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = DataclassDocumentMapper(Book, analyzed=("title",), field_names={"isbn": "_id"})

    def test_to_document_converts_values(self):
        document = self.mapper.to_document(BOOK)

        self.assertEqual(document.fields["_id"], "978-0441013593")
        self.assertEqual(document.fields["genre"], "scifi")
        self.assertEqual(document.fields["published"], "1965-08-01")
        self.assertEqual(document.fields["updated_at"], "2020-05-17T12:30:00")
        self.assertEqual(document.analyzed, frozenset({"title"}))

    def test_map_document_restores_domain_object(self):
        restored = self.mapper.map_document(self.mapper.to_document(BOOK))

        self.assertEqual(restored, BOOK)
        self.assertIsNot(restored, BOOK)

    def test_missing_fields_use_defaults_or_none(self):
        restored = self.mapper.map_document(IndexDocument(fields={"_id": "x", "year": "1999"}))

        self.assertEqual(restored.isbn, "x")
        self.assertEqual(restored.year, 1999)
        self.assertIsNone(restored.title)
        self.assertIsNone(restored.updated_at)
        self.assertTrue(restored.in_print)
        self.assertEqual(restored.tags, [])

    def test_mapping_info(self):
        year = self.mapper.get_mapping_info("year")
        title = self.mapper.get_mapping_info("title")
        isbn = self.mapper.get_mapping_info("isbn")

        self.assertEqual(year.sort_type, SortType.INT)
        self.assertEqual(self.mapper.get_mapping_info("rating").sort_type, SortType.FLOAT)
        self.assertEqual(self.mapper.get_mapping_info("in_print").sort_type, SortType.INT)
        self.assertEqual(title.sort_type, SortType.STRING)
        self.assertTrue(title.analyzed)
        self.assertFalse(year.analyzed)
        self.assertEqual(isbn.field_name, "_id")
        self.assertEqual(self.mapper.get_mapping_info("genre").field_value(Genre.HISTORY), "history")

    def test_unknown_property(self):
        with self.assertRaises(FieldMappingNotFoundError) as ctx:
            self.mapper.get_mapping_info("author")
        self.assertEqual(ctx.exception.property_name, "author")
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIn("author", str(ctx.exception))

    def test_invalid_configuration(self):
        with self.assertRaises(ValueError):
            DataclassDocumentMapper(Book, analyzed=("summary",))
        with self.assertRaises(TypeError):
            DataclassDocumentMapper(dict)

    def test_ignored_properties_are_not_mapped(self):
        mapper = DataclassDocumentMapper(Book, ignored=("tags",))

        self.assertNotIn("tags", mapper.to_document(BOOK).fields)
        with self.assertRaises(FieldMappingNotFoundError):
            mapper.get_mapping_info("tags")


if __name__ == "__main__":
    unittest.main()
