from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Book:
    """Uzak envanterdeki tek bir kitap kaydını temsil eder."""

    def __init__(self, name: str, quantity: int, price: float, author: str, id: str | None = None) -> None:
        self.id = id
        self.name = name
        self.quantity = quantity
        self.price = price
        self.author = author

    def __str__(self) -> str:
        return f"{self.name} by {self.author} ({self.quantity} x {format_number(self.price)})"

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, name={self.name!r}, quantity={self.quantity!r}, price={self.price!r}, author={self.author!r})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
            "author": self.author,
        }

    def to_form(self) -> "BookForm":
        return BookForm(
            name=self.name,
            quantity=format_number(self.quantity),
            price=format_number(self.price),
            author=self.author,
        )

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # Sunucu MongoDB tarzı "_id" döndürür; "id" yedek olarak kabul edilir
        book_id = data.get("_id") or data.get("id")
        if book_id is None or book_id == "":
            raise ValueError("Book record has no identifier.")

        # Sayılar JSON sayısı ya da metin olarak gelebilir
        quantity = float(data["quantity"])
        if not quantity.is_integer():
            raise ValueError(f"Quantity must be a whole number, got {data['quantity']!r}.")

        return Book(
            id=str(book_id),
            name=str(data["name"]),
            quantity=int(quantity),
            price=float(data["price"]),
            author=str(data["author"]),
        )


class FormField(str, Enum):
    """Editable fields of the draft form."""

    NAME = "name"
    QUANTITY = "quantity"
    PRICE = "price"
    AUTHOR = "author"

    @property
    def label(self) -> str:
        return "Book Name" if self is FormField.NAME else self.value.title()


@dataclass
class BookForm:
    """Draft of a book's editable fields, kept as the text the user typed."""

    name: str = ""
    quantity: str = ""
    price: str = ""
    author: str = ""

    def get(self, field: FormField) -> str:
        return getattr(self, field.value)

    def set(self, field: FormField, value: str) -> None:
        setattr(self, field.value, value)

    def missing_fields(self) -> list[FormField]:
        return [field for field in FormField if not self.get(field).strip()]

    def to_payload(self) -> dict:
        return {field.value: self.get(field) for field in FormField}


def format_number(value) -> str:
    """12.0 -> "12", 12.5 -> "12.5"; anything else is passed through str()."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
