import pytest

from book_manager.book import Book
from book_manager.manager import BookManager
from book_manager.services.http_client import ApiEnvelope
from utils.ui_helpers import OUTPUT_MODE_ENV


class FakeBookApiClient:
    """In-memory stand-in for BookApiClient that records every call."""

    def __init__(self, books=None):
        self.books = list(books or [])
        self.calls = []
        self.list_envelope = None
        self.list_error = None
        self.mutation_envelope = ApiEnvelope(success=True, message="ok")
        self.closed = False

    def list_books(self):
        self.calls.append(("list",))
        if self.list_error is not None:
            raise self.list_error
        if self.list_envelope is not None:
            return self.list_envelope
        return ApiEnvelope(success=True, data=list(self.books))

    def create_book(self, form):
        self.calls.append(("create", form.to_payload()))
        return self.mutation_envelope

    def update_book(self, book_id, form):
        self.calls.append(("update", book_id, form.to_payload()))
        return self.mutation_envelope

    def delete_book(self, book_id):
        self.calls.append(("delete", book_id))
        return self.mutation_envelope

    def close(self):
        self.closed = True

    def mutations(self):
        return [call for call in self.calls if call[0] != "list"]


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # Her test düz çıktı modunda başlar; set_output_mode ortamı değiştirebilir
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def sample_books():
    return [
        Book(id="b1", name="Dune", quantity=3, price=12.5, author="Frank Herbert"),
        Book(id="b2", name="Emma", quantity=0, price=8.0, author="Jane Austen"),
    ]


@pytest.fixture
def fake_client(sample_books):
    return FakeBookApiClient(sample_books)


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def manager(fake_client, alerts):
    return BookManager(fake_client, confirm=lambda message: True, alert=alerts.append)
