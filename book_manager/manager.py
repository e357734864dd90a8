import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from book_manager.book import Book, BookForm, FormField
from book_manager.services.http_client import BookApiClient

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this book?"
MODAL_TITLE = "Edit Book"
MODAL_SUBMIT_LABEL = "Save Changes"


class ActionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ActionResult:
    """Outcome of a mutation, returned instead of relying on a dialog."""
    status: ActionStatus
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ActionStatus.SUCCESS


def _deny(message: str) -> bool:
    return False


def _discard(message: str) -> None:
    pass


class BookManager:
    """Kitap listesini ve taslak formu uzak servisle tutarlı tutar.

    The list is never patched locally: every successful mutation is followed
    by a full reload. ``confirm`` answers the delete prompt and ``alert``
    receives server-reported failure messages; by default deletes are
    denied and alerts only reach the log.
    """

    def __init__(
        self,
        client: BookApiClient,
        confirm: Callable[[str], bool] = _deny,
        alert: Callable[[str], None] = _discard,
    ) -> None:
        self.client = client
        self.confirm = confirm
        self.alert = alert

        self.books: List[Book] = []
        self.form = BookForm()
        self.editing_id: Optional[str] = None
        self.is_modal_open = False
        self.last_error: Optional[str] = None

    # ------------------------- Durum ------------------------- #
    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def submit_label(self) -> str:
        return "Update Book" if self.is_editing else "Add Book"

    def find_book(self, book_id: str) -> Optional[Book]:
        return next((book for book in self.books if book.id == book_id), None)

    # ------------------------- Çekirdek işlemler ------------------------- #
    def load_books(self) -> bool:
        """Listeyi sunucudan yeniden yükle.

        On a failure envelope the current list is kept, the server message is
        stored in ``last_error`` and False is returned. Transport errors are
        raised to the caller.
        """
        envelope = self.client.list_books()
        if not envelope.success:
            self.last_error = envelope.message or "Could not load books."
            logger.warning("Loading books failed: %s", self.last_error)
            return False
        self.books = envelope.data
        self.last_error = None
        logger.debug("Loaded %d books", len(self.books))
        return True

    def update_field(self, field: FormField, value: str) -> None:
        self.form.set(field, value)

    def set_name(self, value: str) -> None:
        self.update_field(FormField.NAME, value)

    def set_quantity(self, value: str) -> None:
        self.update_field(FormField.QUANTITY, value)

    def set_price(self, value: str) -> None:
        self.update_field(FormField.PRICE, value)

    def set_author(self, value: str) -> None:
        self.update_field(FormField.AUTHOR, value)

    def submit(self) -> ActionResult:
        """Taslağı gönder: düzenleme kimliği varsa güncelle, yoksa oluştur."""
        missing = self.form.missing_fields()
        if missing:
            raise ValueError("Please fill in: " + ", ".join(f.label for f in missing))

        if self.is_editing:
            logger.info("Updating book %s", self.editing_id)
            envelope = self.client.update_book(self.editing_id, self.form)
        else:
            logger.info("Creating book %r", self.form.name)
            envelope = self.client.create_book(self.form)

        if not envelope.success:
            return self._fail(envelope.message)

        self._reset_form()
        self.is_modal_open = False
        self.load_books()
        return ActionResult(ActionStatus.SUCCESS, envelope.message)

    def begin_edit(self, book: Book) -> None:
        self.form = book.to_form()
        self.editing_id = book.id
        self.is_modal_open = True

    def delete(self, book_id: str) -> ActionResult:
        if not self.confirm(DELETE_CONFIRMATION):
            logger.debug("Delete of %s cancelled", book_id)
            return ActionResult(ActionStatus.CANCELLED)

        logger.info("Deleting book %s", book_id)
        envelope = self.client.delete_book(book_id)
        if not envelope.success:
            return self._fail(envelope.message)

        self.load_books()
        return ActionResult(ActionStatus.SUCCESS, envelope.message)

    def close_modal(self) -> None:
        self.is_modal_open = False
        self._reset_form()

    def _reset_form(self) -> None:
        self.form = BookForm()
        self.editing_id = None

    def _fail(self, message: Optional[str]) -> ActionResult:
        message = message or "The books service rejected the request."
        logger.warning("Books service reported failure: %s", message)
        self.alert(message)
        return ActionResult(ActionStatus.FAILED, message)
