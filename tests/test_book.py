import pytest

from book_manager.book import Book, BookForm, FormField, format_number
from utils.validators import FormValidator


def test_from_dict_reads_mongo_identifier():
    book = Book.from_dict({"_id": "64f0", "name": "Dune", "quantity": 3, "price": 12.5, "author": "Frank Herbert"})
    assert book.id == "64f0"
    assert book.quantity == 3
    assert book.price == 12.5


def test_from_dict_falls_back_to_id_and_coerces_text_numbers():
    book = Book.from_dict({"id": 7, "name": "Emma", "quantity": "2", "price": "8.25", "author": "Jane Austen"})
    assert book.id == "7"
    assert book.quantity == 2
    assert book.price == 8.25


def test_from_dict_without_identifier_raises():
    with pytest.raises(ValueError):
        Book.from_dict({"name": "Dune", "quantity": 1, "price": 1, "author": "X"})


def test_from_dict_rejects_fractional_quantity():
    with pytest.raises(ValueError):
        Book.from_dict({"_id": "a", "name": "Dune", "quantity": 1.5, "price": 1, "author": "X"})


def test_to_form_has_no_identifier():
    form = Book(id="a1", name="Dune", quantity=3, price=20.0, author="Frank Herbert").to_form()
    assert form == BookForm(name="Dune", quantity="3", price="20", author="Frank Herbert")
    assert "id" not in form.to_payload()


def test_format_number():
    assert format_number(12.0) == "12"
    assert format_number(12.5) == "12.5"
    assert format_number(3) == "3"


def test_form_missing_fields_and_labels():
    form = BookForm(name="Dune", quantity="", price=" ", author="X")
    assert form.missing_fields() == [FormField.QUANTITY, FormField.PRICE]
    assert FormField.NAME.label == "Book Name"
    assert FormField.PRICE.label == "Price"


@pytest.mark.parametrize("field,text,ok", [
    (FormField.NAME, "Dune", True),
    (FormField.NAME, "   ", False),
    (FormField.AUTHOR, None, False),
    (FormField.QUANTITY, "3", True),
    (FormField.QUANTITY, "3.5", False),
    (FormField.QUANTITY, "-1", False),
    (FormField.PRICE, "12.99", True),
    (FormField.PRICE, "0", True),
    (FormField.PRICE, "abc", False),
    (FormField.PRICE, "nan", False),
])
def test_validate_field(field, text, ok):
    assert (FormValidator.validate_field(field, text) is None) is ok


def test_from_dict_null_mongo_identifier_falls_back_to_id():
    book = Book.from_dict({"_id": None, "id": "x1", "name": "Dune", "quantity": 1, "price": 1, "author": "X"})
    assert book.id == "x1"


def test_str_describes_book():
    book = Book(id="a1", name="Dune", quantity=3, price=20.0, author="Frank Herbert")
    assert str(book) == "Dune by Frank Herbert (3 x 20)"
