import os
import json
from typing import List
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel

from book_manager.book import Book, BookForm, FormField, format_number

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOKS_CLI_OUTPUT"

EMPTY_LIST_MESSAGE = "No books found."
COLUMNS = ("ID", "Name", "Quantity", "Price", "Author", "Actions")

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode
    # Geçersiz değerler yoksayılır; mevcut mod korunur


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def book_actions(book: Book) -> str:
    return f"edit {book.id} | delete {book.id}"


def build_books_table(books: List[Book]) -> Table:
    """Kitap tablosunu oluştur; boş listede tek bir yer tutucu satır olur."""
    table = Table(title="📚 Book Manager", show_lines=True, header_style="bold green")
    table.add_column(COLUMNS[0], style="magenta", no_wrap=True)
    for name in COLUMNS[1:5]:
        table.add_column(name, style="white")
    table.add_column(COLUMNS[5], style="dim")

    for book in books:
        table.add_row(
            escape(book.id or ""),
            escape(book.name),
            str(book.quantity),
            format_number(book.price),
            escape(book.author),
            book_actions(book),
        )
    if not books:
        table.add_row(f"[dim]{EMPTY_LIST_MESSAGE}[/]", "", "", "", "", "")
    return table


def print_books(books: List[Book]) -> None:
    """Kitap listesini mevcut çıktı moduna göre yazdır.
    - plain: 'ID - Name by Author (quantity x price)' satırları, veya 'No books found.'
    - json: JSON dizisi
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        _console.print(build_books_table(books))
    elif not books:
        print(EMPTY_LIST_MESSAGE)
    else:
        for b in books:
            print(f"{b.id} - {b}")


def form_panel(form: BookForm, title: str) -> Panel:
    content = "\n".join(
        f"[bold]{field.label}:[/] {escape(form.get(field))}" for field in FormField
    )
    return Panel.fit(content, title=title, border_style="green")
