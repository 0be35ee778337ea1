"""API client for the Shelfwise server."""

from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog

from shelfwise_cli.config import Settings
from shelfwise_cli.search import SearchPage

logger = structlog.get_logger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch books. Please try again later."


class ApiError(Exception):
    """Raised when the server cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class Book:
    """A catalogue entry."""
    id: str
    accession_number: str
    title: str
    subtitle: Optional[str]
    isbn: Optional[str]
    author_primary: Optional[str]
    author_secondary: Optional[str]
    publisher: Optional[str]
    publication_year: Optional[int]
    language: Optional[str]
    classification_number: Optional[str]
    location_shelf: Optional[str]
    location_rack: Optional[str]
    book_condition: Optional[str]
    book_status: str
    total_copies: int
    available_copies: int
    is_reference_only: bool

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Book":
        return cls(
            id=str(data.get("id", "")),
            accession_number=data.get("accessionNumber", ""),
            title=data.get("title") or "Untitled",
            subtitle=data.get("subtitle"),
            isbn=data.get("isbn"),
            author_primary=data.get("authorPrimary"),
            author_secondary=data.get("authorSecondary"),
            publisher=data.get("publisher"),
            publication_year=data.get("publicationYear"),
            language=data.get("language"),
            classification_number=data.get("classificationNumber"),
            location_shelf=data.get("locationShelf"),
            location_rack=data.get("locationRack"),
            book_condition=data.get("bookCondition"),
            book_status=data.get("bookStatus") or "AVAILABLE",
            total_copies=data.get("totalCopies") or 0,
            available_copies=data.get("availableCopies") or 0,
            is_reference_only=bool(data.get("isReferenceOnly", False)),
        )

    @property
    def authors(self) -> str:
        return ", ".join(a for a in (self.author_primary, self.author_secondary) if a)

    @property
    def location(self) -> Optional[str]:
        parts = [p for p in (self.location_shelf, self.location_rack) if p]
        return " / ".join(parts) if parts else None


@dataclass
class BookPage:
    """One page of book search results."""
    books: list[Book]
    total_pages: int
    current_page: int
    total_elements: int
    page_size: int

    def to_search_page(self) -> SearchPage[Book]:
        return SearchPage(
            data=self.books,
            total_pages=self.total_pages,
            current_page=self.current_page,
        )


class ApiClient:
    """Async API client for the Shelfwise server."""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 30.0,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.token = token
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiClient":
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            token=settings.api_token,
        )

    async def __aenter__(self):
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("ApiClient must be used as async context manager")
        return self._client

    async def health_check(self) -> bool:
        """Check that the catalogue answers searches."""
        try:
            response = await self.client.get(
                "/api/books/search",
                params={"query": "", "page": 0, "size": 1},
                timeout=2.0,
            )
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def search_books(
        self,
        query: str,
        page: int = 0,
        size: int = 10,
        sort_by: str = "accessionNumber",
        sort_dir: str = "ASC",
    ) -> BookPage:
        """Search the catalogue by title, author, publisher, accession number or keywords."""
        params = {
            "query": query,
            "page": page,
            "size": size,
            "sortBy": sort_by,
            "sortDir": sort_dir,
        }

        try:
            response = await self.client.get("/api/books/search", params=params)
        except httpx.HTTPError as e:
            logger.warning("Book search request failed", error=str(e))
            raise ApiError(FETCH_FAILED_MESSAGE) from e

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            logger.warning("Unexpected search response", status=response.status_code)
            raise ApiError(FETCH_FAILED_MESSAGE, status_code=response.status_code)

        pagination = body.get("pagination") or {}
        books = [Book.from_json(b) for b in body.get("data") or []]

        return BookPage(
            books=books,
            total_pages=pagination.get("totalPages", 0),
            current_page=pagination.get("currentPage", page),
            total_elements=pagination.get("totalElements", len(books)),
            page_size=pagination.get("pageSize", size),
        )


def _error_message(response: httpx.Response) -> str:
    """Pull the server's message out of an error envelope."""
    try:
        body = response.json()
    except ValueError:
        return FETCH_FAILED_MESSAGE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return FETCH_FAILED_MESSAGE


def book_search_fetcher(api: ApiClient, settings: Settings):
    """Adapt ``api`` to the search controller's ``(query, page)`` signature."""

    async def fetch(query: str, page: int) -> SearchPage[Book]:
        result = await api.search_books(
            query,
            page=page,
            size=settings.page_size,
            sort_by=settings.sort_by,
            sort_dir=settings.sort_dir,
        )
        return result.to_search_page()

    return fetch
