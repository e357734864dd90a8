from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from book_manager.book import FormField
from book_manager.manager import ActionStatus, BookManager, MODAL_SUBMIT_LABEL, MODAL_TITLE
from book_manager.services.http_client import BookApiClient, BookApiError
from config import settings, configure_logging
from utils.ui_helpers import build_books_table, form_panel, print_books, set_output_mode
from utils.validators import FormValidator

console = Console()
# Uyarı ve hatalar stderr'e gider; stdout json modunda ayrıştırılabilir kalır
err_console = Console(stderr=True)

app = typer.Typer(help=f"{settings.app_name} CLI")


def _ask_confirmation(message: str) -> bool:
    return Confirm.ask(f"🗑️ {message}", default=False, console=console)


def _show_alert(message: str) -> None:
    err_console.print(f"[bold red]❌ {escape(message)}[/]")


def build_manager(base_url: str, confirm: Optional[Callable[[str], bool]] = None) -> BookManager:
    """Uzak servis istemcisini ve kontrolcüyü oluştur."""
    client = BookApiClient(base_url, timeout=settings.books_api_timeout)
    return BookManager(client, confirm=confirm or _ask_confirmation, alert=_show_alert)


@contextmanager
def open_manager(
    ctx: typer.Context,
    confirm: Optional[Callable[[str], bool]] = None,
    load: bool = True,
) -> Iterator[BookManager]:
    """Kontrolcüyü aç, istenirse listeyi yükle; servis hatalarını komut düzeyinde raporla."""
    manager = build_manager(ctx.obj["base_url"], confirm=confirm)
    try:
        if load and not manager.load_books():
            err_console.print(f"[yellow]⚠️ Could not load books: {escape(manager.last_error or '')}[/]")
        yield manager
    except BookApiError as e:
        err_console.print(f"[bold red]Books service error:[/] {escape(str(e))}")
        raise typer.Exit(code=1)
    finally:
        manager.client.close()


def _field_option(field: FormField):
    """Typer callback enforcing the form's input constraints."""
    def callback(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        error = FormValidator.validate_field(field, value)
        if error:
            raise typer.BadParameter(error)
        return value.strip()
    return callback


def _ask_field(field: FormField, default: str) -> str:
    while True:
        if default:
            value = Prompt.ask(field.label, default=default, console=console)
        else:
            value = Prompt.ask(field.label, console=console)
        error = FormValidator.validate_field(field, value)
        if not error:
            return value.strip()
        console.print(f"[yellow]{error}[/]")


def _fill_form(manager: BookManager, values: dict) -> None:
    """Verilen alanları taslağa yaz, eksik olanları mevcut değerle sor."""
    for field in FormField:
        value = values.get(field)
        if value is None:
            value = _ask_field(field, manager.form.get(field))
        manager.update_field(field, value)


def _submit(manager: BookManager) -> bool:
    label = manager.submit_label
    name = manager.form.name
    try:
        result = manager.submit()
    except ValueError as e:
        err_console.print(f"[bold red]Error:[/] {e}")
        return False
    if result.ok:
        console.print(f"[green]✅ {label}: [bold]{escape(name)}[/][/]")
    return result.ok


# --- Typer CLI Uygulaması ---
@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Books service base URL (default: BOOKS_API_BASE_URL)",
    ),
):
    """Global options; with no command the interactive menu opens."""
    configure_logging()
    set_output_mode(output or settings.output_mode)
    ctx.obj = {"base_url": base_url or settings.books_api_base_url}
    if ctx.invoked_subcommand is None:
        cli_menu(ctx)


@app.command("list")
def cli_list(ctx: typer.Context):
    """List all books."""
    with open_manager(ctx) as manager:
        print_books(manager.books)


@app.command("add")
def cli_add(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", prompt=FormField.NAME.label, callback=_field_option(FormField.NAME)),
    quantity: str = typer.Option(..., "--quantity", prompt=FormField.QUANTITY.label, callback=_field_option(FormField.QUANTITY)),
    price: str = typer.Option(..., "--price", prompt=FormField.PRICE.label, callback=_field_option(FormField.PRICE)),
    author: str = typer.Option(..., "--author", prompt=FormField.AUTHOR.label, callback=_field_option(FormField.AUTHOR)),
):
    """Add a new book."""
    with open_manager(ctx, load=False) as manager:
        manager.set_name(name)
        manager.set_quantity(quantity)
        manager.set_price(price)
        manager.set_author(author)
        if not _submit(manager):
            raise typer.Exit(code=1)


@app.command("edit")
def cli_edit(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="ID of the book to edit"),
    name: Optional[str] = typer.Option(None, "--name", callback=_field_option(FormField.NAME)),
    quantity: Optional[str] = typer.Option(None, "--quantity", callback=_field_option(FormField.QUANTITY)),
    price: Optional[str] = typer.Option(None, "--price", callback=_field_option(FormField.PRICE)),
    author: Optional[str] = typer.Option(None, "--author", callback=_field_option(FormField.AUTHOR)),
):
    """Edit a book; fields not given are prompted for with their current value."""
    with open_manager(ctx) as manager:
        book = manager.find_book(book_id)
        if not book:
            err_console.print(f"[yellow]⚠️ Book with ID {escape(book_id)} not found.[/]")
            raise typer.Exit(code=1)
        manager.begin_edit(book)
        _fill_form(manager, {
            FormField.NAME: name,
            FormField.QUANTITY: quantity,
            FormField.PRICE: price,
            FormField.AUTHOR: author,
        })
        if not _submit(manager):
            raise typer.Exit(code=1)


@app.command("delete")
def cli_delete(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="ID of the book to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a book after confirmation."""
    confirm = (lambda message: True) if yes else None
    with open_manager(ctx, confirm=confirm) as manager:
        book = manager.find_book(book_id)
        if not book:
            # Yerel listede yoksa da istek gönderilir; karar sunucunun
            err_console.print(f"[yellow]⚠️ Book with ID {escape(book_id)} is not in the loaded list.[/]")
        else:
            console.print(Panel(
                f"[bold]Name:[/] {escape(book.name)}\n"
                f"[bold]Author:[/] {escape(book.author)}\n"
                f"[bold]ID:[/] {escape(book.id)}",
                title="📚 Book to delete",
                border_style="yellow"
            ))
        result = manager.delete(book_id)
        if result.ok:
            console.print(f"[green]✅ [bold]{escape(book.name if book else book_id)}[/] deleted.[/]")
        elif result.status is ActionStatus.CANCELLED:
            console.print("[blue]🚫 Delete cancelled.[/]")
        else:
            raise typer.Exit(code=1)


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Interactive book manager."""
    with open_manager(ctx) as manager:
        run_menu(manager)


def _menu_edit(manager: BookManager) -> None:
    if not manager.books:
        console.print("[yellow]No books to edit.[/]")
        return
    book_id = Prompt.ask("Book ID", choices=[b.id for b in manager.books], console=console)
    manager.begin_edit(manager.find_book(book_id))
    console.print(form_panel(manager.form, MODAL_TITLE))
    _fill_form(manager, {})
    if Confirm.ask(MODAL_SUBMIT_LABEL + "?", default=True, console=console):
        _submit(manager)
    else:
        manager.close_modal()
        console.print("[blue]🚫 Edit discarded.[/]")


def _menu_delete(manager: BookManager) -> None:
    if not manager.books:
        console.print("[yellow]No books to delete.[/]")
        return
    book_id = Prompt.ask("Book ID", choices=[b.id for b in manager.books], console=console)
    result = manager.delete(book_id)
    if result.ok:
        console.print("[green]✅ Book deleted.[/]")
    elif result.status is ActionStatus.CANCELLED:
        console.print("[blue]🚫 Delete cancelled.[/]")


def run_menu(manager: BookManager) -> None:
    """Tek sayfalık arayüzün etkileşimli karşılığı."""
    while True:
        # Düzenleme yarım kaldıysa 1 numaralı seçenek güncelleme yapar
        menu_items = [
            ("1", manager.submit_label, "➕"),
            ("2", "Edit a book", "✏️"),
            ("3", "Delete a book", "🗑️"),
            ("4", "Reload list", "🔄"),
            ("0", "Exit", "🚪"),
        ]
        console.print(build_books_table(manager.books))

        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="right", style="bold cyan", width=4)
        grid.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            grid.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        console.print(Panel(grid, title=settings.app_name, border_style="green", box=box.HEAVY, padding=(1, 2)))

        choice = Prompt.ask("Choose an option", choices=[key for key, _, _ in menu_items], default="1", console=console)

        if choice == "1":
            _fill_form(manager, {})
            _submit(manager)
        elif choice == "2":
            _menu_edit(manager)
        elif choice == "3":
            _menu_delete(manager)
        elif choice == "4":
            if not manager.load_books():
                console.print(f"[yellow]⚠️ Could not load books: {escape(manager.last_error or '')}[/]")
        elif choice == "0":
            console.print("[green]Goodbye![/]")
            break
        console.print()  # işlemler arasında boşluk bırakır


def main() -> None:
    app()


if __name__ == "__main__":
    main()
