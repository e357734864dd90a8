from typing import Optional

from book_manager.book import FormField


class FormValidator:
    """Input constraints of the book form: every field required, quantity and
    price numeric. Mirrors what the form widgets enforce; the server does the
    actual coercion.
    """

    @staticmethod
    def is_filled(text: Optional[str]) -> bool:
        return text is not None and bool(text.strip())

    @staticmethod
    def is_non_negative_number(text: Optional[str], whole: bool = False) -> bool:
        if not FormValidator.is_filled(text):
            return False
        try:
            value = float(text.strip())
        except ValueError:
            return False
        # nan/inf reddedilir
        if value != value or value in (float("inf"), float("-inf")):
            return False
        if value < 0:
            return False
        return value.is_integer() if whole else True

    @staticmethod
    def validate_field(field: FormField, text: Optional[str]) -> Optional[str]:
        """Return an error message for ``text``, or None when it is acceptable."""
        if not FormValidator.is_filled(text):
            return f"{field.label} is required."
        if field is FormField.QUANTITY and not FormValidator.is_non_negative_number(text, whole=True):
            return "Quantity must be a whole number of zero or more."
        if field is FormField.PRICE and not FormValidator.is_non_negative_number(text):
            return "Price must be a number of zero or more."
        return None
