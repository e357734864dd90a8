import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import httpx

from book_manager.book import Book, BookForm

logger = logging.getLogger(__name__)


class BookApiError(Exception):
    """Kitap servisinden yorumlanamayan yanıt (JSON değil ya da nesne değil)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BookApiConnectionError(BookApiError):
    """Servise hiç ulaşılamadı (DNS, bağlantı, zaman aşımı)."""
    pass


@dataclass
class ApiEnvelope:
    """Servisin tek tip yanıt zarfı: { success, data | message }"""
    success: bool
    data: List[Book] = field(default_factory=list)
    message: Optional[str] = None
    status_code: Optional[int] = None


class BookApiClient:
    """Uzak kitap servisi için senkron HTTP istemcisi"""

    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")

        # Bağlantı limitleri; istekler sıralı olduğundan küçük bir havuz yeterli
        limits = httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0
        )

        self._client = httpx.Client(
            base_url=self.base_url,
            limits=limits,
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    def list_books(self) -> ApiEnvelope:
        """GET /books"""
        response = self._request("GET", "/books")
        envelope = self._parse_envelope(response)
        if envelope.success:
            envelope.data = self._parse_books(response, self._body(response).get("data"))
        return envelope

    def create_book(self, form: BookForm) -> ApiEnvelope:
        """POST /add"""
        return self._parse_envelope(self._request("POST", "/add", json=form.to_payload()))

    def update_book(self, book_id: str, form: BookForm) -> ApiEnvelope:
        """PUT /books/{id}"""
        return self._parse_envelope(self._request("PUT", f"/books/{book_id}", json=form.to_payload()))

    def delete_book(self, book_id: str) -> ApiEnvelope:
        """DELETE /books/{id}"""
        return self._parse_envelope(self._request("DELETE", f"/books/{book_id}"))

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            # json= gövdesi httpx tarafından application/json olarak gönderilir
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise BookApiConnectionError(f"Could not reach books service: {e}") from e
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    @staticmethod
    def _body(response: httpx.Response) -> Dict[str, Any]:
        # Durum kodundan bağımsız olarak gövde okunur; 4xx de bir zarf taşıyabilir
        try:
            body = response.json()
        except ValueError as e:
            raise BookApiError(
                f"Books service returned a non-JSON response (HTTP {response.status_code}).",
                status_code=response.status_code,
            ) from e
        # Her JSON nesnesi bir zarftır; "success" true değilse sunucu hatasıdır
        if not isinstance(body, dict):
            raise BookApiError(
                f"Books service returned an unexpected response (HTTP {response.status_code}).",
                status_code=response.status_code,
            )
        return body

    def _parse_envelope(self, response: httpx.Response) -> ApiEnvelope:
        body = self._body(response)
        message = body.get("message")
        return ApiEnvelope(
            success=body.get("success") is True,
            message=str(message) if message is not None else None,
            status_code=response.status_code,
        )

    @staticmethod
    def _parse_books(response: httpx.Response, data: Any) -> List[Book]:
        if not isinstance(data, list):
            raise BookApiError("Books service returned no book list.", status_code=response.status_code)
        books = []
        for index, item in enumerate(data):
            try:
                books.append(Book.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                # Bozuk kayıt listenin geri kalanını engellemez
                logger.warning("Skipping malformed book at index %d: %s", index, e)
        return books

    def close(self):
        """HTTP istemcisini kapat"""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
