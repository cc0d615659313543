"""
Books Controllers (API Routes)
==============================

FastAPI routes for creating and listing books.

Controllers are thin - they delegate to the book gateway. The create body
is decoded as JSON whatever its Content-Type. Decode failures never reach
the handler: the dependency raises RequestValidationError, the registered
validation handler answers 400, and nothing is inserted.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from bookshelf.books.application import (
    BookCreateRequest,
    BookResponse,
    ErrorResponse,
    IBookGateway,
)
from bookshelf.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/books", tags=["Books"])


ERROR_RESPONSES = {
    500: {"model": ErrorResponse, "description": "Persistence failure"},
}


# ========== Dependencies ==========

def get_book_gateway(request: Request) -> IBookGateway:
    """Get the gateway created at startup (or injected by tests)."""
    gateway = getattr(request.app.state, "book_gateway", None)
    if gateway is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="service unavailable"
        )
    return gateway


async def decode_book_payload(request: Request) -> BookCreateRequest:
    """Decode the raw body as a book, ignoring the declared Content-Type."""
    body = await request.body()
    try:
        return BookCreateRequest.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=body) from e


# ========== Route Handlers ==========

@router.post(
    "",
    response_model=BookResponse,
    summary="Create a book",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid JSON payload"},
        **ERROR_RESPONSES,
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": BookCreateRequest.model_json_schema()}},
        }
    }
)
async def create_book(
    payload: BookCreateRequest = Depends(decode_book_payload),
    gateway: IBookGateway = Depends(get_book_gateway)
) -> BookResponse:
    created = await gateway.insert(payload.to_entity())
    return BookResponse.from_entity(created)


@router.get(
    "",
    response_model=List[BookResponse],
    summary="List all books",
    responses=ERROR_RESPONSES
)
async def list_books(
    gateway: IBookGateway = Depends(get_book_gateway)
) -> List[BookResponse]:
    books = await gateway.list()
    return [BookResponse.from_entity(book) for book in books]
