"""
FlowRouter Backend - Book Handlers
==================================

What:  CRUD handlers over BookRepository, selected by ApplicationRouter.
How:   Bound methods of a BookHandler built around the repository. Each
       one is a coroutine with the `HttpRequestHandler` shape.

Endpoints:
    GET    /api/v10/book        → get_books          (200, JSON list)
    PUT    /api/v10/book        → save_book          (200, saved book)
    GET    /api/v10/book/{id}   → get_book           (200 / 404)
    PATCH  /api/v10/book/{id}   → update_book_title  (200 / 404)
    DELETE /api/v10/book/{id}   → delete_book        (204 / 404)

Missing bodies answer 400 with the received body echoed back as text.
Bodies that do not validate raise ValidationError (400 JSON error).
"""

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from flowrouter.exceptions import NotFoundError
from flowrouter.flow import body_as, path_variables
from flowrouter.models.book import MAX_BOOK_ID, Book
from flowrouter.repositories.book import BookRepository
from flowrouter.schemas.book import BookCreate, BookResponse, BookTitleUpdate

logger = logging.getLogger(__name__)


def _book_json(book: Book) -> dict:
    return BookResponse.model_validate(book).model_dump()


def _book_id(request: Request) -> int:
    """The `{id:int}` path variable; ids the column cannot hold are simply not found."""
    book_id = path_variables(request)["id"]
    if book_id > MAX_BOOK_ID:
        raise NotFoundError(resource="book", resource_id=str(book_id))
    return book_id


async def _bad_request(request: Request) -> Response:
    body = (await request.body()).decode("utf-8", errors="replace")
    return PlainTextResponse(body, status_code=400)


class BookHandler:
    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    async def get_books(self, request: Request) -> Response:
        books = await self.book_repository.find_all()
        return JSONResponse([_book_json(book) for book in books])

    async def save_book(self, request: Request) -> Response:
        payload = await body_as(request, BookCreate)
        if payload is None:
            return await _bad_request(request)

        book = await self.book_repository.save(Book(**payload.model_dump()))
        logger.info("Saved book %s: %s (%d)", book.id, book.title, book.first_edition)
        return JSONResponse(_book_json(book))

    async def get_book(self, request: Request) -> Response:
        book_id = _book_id(request)
        book = await self.book_repository.find_by_id(book_id)
        if book is None:
            raise NotFoundError(resource="book", resource_id=str(book_id))
        return JSONResponse(_book_json(book))

    async def update_book_title(self, request: Request) -> Response:
        book_id = _book_id(request)
        payload = await body_as(request, BookTitleUpdate)
        if payload is None:
            return await _bad_request(request)

        if await self.book_repository.update(book_id, payload.title) == 0:
            raise NotFoundError(resource="book", resource_id=str(book_id))

        book = await self.book_repository.find_by_id(book_id)
        if book is None:
            raise NotFoundError(resource="book", resource_id=str(book_id))
        return JSONResponse(_book_json(book))

    async def delete_book(self, request: Request) -> Response:
        book_id = _book_id(request)
        if not await self.book_repository.delete_by_id(book_id):
            raise NotFoundError(resource="book", resource_id=str(book_id))
        return Response(status_code=204)
