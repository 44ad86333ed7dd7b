"""
Jotter Backend: Notes Route Handlers
=====================================

What:  The five notes routes: create, list, delete all, get by id, delete by id.
How:   Each handler follows the same shape:
           parse input → call NoteStore → map outcome → write response
       Success answers with JSON (or a plain-text confirmation for deletes).
       Any JotterError answers 500 with the route's fixed plain-text message;
       the underlying error is written to the log, never to the body.

Route Table:
    POST   /notes        201 [Note...]      | 500 "Error creating note"
    GET    /notes        200 [Note...]      | 500 "Error getting notes"
    DELETE /notes        200 confirmation   | 500 "Error deleting notes"
    GET    /notes/{id}   200 [Note] or []   | 500 "Error getting note"
    DELETE /notes/{id}   200 confirmation   | 500 "Error deleting notes"
"""

import logging
from typing import List

import pydantic
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from jotter.exceptions import JotterError, ValidationError
from jotter.schemas.note import NoteCreate, NoteResponse
from jotter.services.note_store import NoteStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

CREATE_ERROR = "Error creating note"
LIST_ERROR = "Error getting notes"
GET_ERROR = "Error getting note"
DELETE_ERROR = "Error deleting notes"
DELETED_MESSAGE = "Notes deleted successfully"

_error_responses = {500: {"description": "Failure (fixed plain-text message)"}}


def _failure(message: str, exc: JotterError) -> PlainTextResponse:
    """Log the underlying error and build the route's fixed 500 response."""
    logger.error(
        "%s: %s | Context: %s",
        message,
        exc.message,
        exc.context,
    )
    return PlainTextResponse(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _to_response(notes) -> List[NoteResponse]:
    return [NoteResponse.model_validate(note) for note in notes]


async def parse_note_create(request: Request) -> NoteCreate:
    """
    Read and validate the POST /notes body.

    Done by hand instead of declaring a body parameter so that bad input
    takes the route's 500 path instead of FastAPI's automatic 422.

    Raises:
        ValidationError: body is not JSON, or `content` is missing, not a
            string, or not storable UTF-8 text
    """
    raw = await request.body()
    try:
        return NoteCreate.model_validate_json(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(
            message="Request body must be {\"content\": string}",
            field="content",
            context={"errors": e.errors(include_url=False, include_input=False)},
        )


@router.post(
    "/notes",
    response_model=List[NoteResponse],
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses,
    summary="Create a note",
    description="Stores a new note and returns every stored note.",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": NoteCreate.model_json_schema()}},
        }
    },
)
async def create_note(request: Request, store: NoteStore = Depends(get_store)):
    """
    Create a note.

    The insert and the re-read of the table happen in one transaction, so the
    returned list always includes the new note.
    """
    try:
        payload = await parse_note_create(request)
        notes = await store.create_and_list(payload.content)
    except JotterError as e:
        return _failure(CREATE_ERROR, e)
    return _to_response(notes)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses=_error_responses,
    summary="List all notes",
    description="Returns every stored note. The order of the list is not specified.",
)
async def list_notes(store: NoteStore = Depends(get_store)):
    """List all notes."""
    try:
        notes = await store.list_all()
    except JotterError as e:
        return _failure(LIST_ERROR, e)
    return _to_response(notes)


@router.delete(
    "/notes",
    response_class=PlainTextResponse,
    responses=_error_responses,
    summary="Delete all notes",
)
async def delete_notes(store: NoteStore = Depends(get_store)):
    """Delete every note. Deleting from an empty store still succeeds."""
    try:
        await store.delete_all()
    except JotterError as e:
        return _failure(DELETE_ERROR, e)
    return PlainTextResponse(DELETED_MESSAGE)


@router.get(
    "/notes/{note_id}",
    response_model=List[NoteResponse],
    responses=_error_responses,
    summary="Get a note by id",
    description="Returns a list with the matching note, or an empty list when there is none.",
)
async def get_note(note_id: str, store: NoteStore = Depends(get_store)):
    """
    Get a single note.

    Args:
        note_id: Taken as a string and coerced by the store; a non-integer
                 id is a ValidationError (500), an unknown id is `[]` (200).
    """
    try:
        notes = await store.get_by_id(note_id)
    except JotterError as e:
        return _failure(GET_ERROR, e)
    return _to_response(notes)


@router.delete(
    "/notes/{note_id}",
    response_class=PlainTextResponse,
    responses=_error_responses,
    summary="Delete a note by id",
)
async def delete_note(note_id: str, store: NoteStore = Depends(get_store)):
    """Delete one note; answers the same confirmation whether or not it existed."""
    try:
        await store.delete_by_id(note_id)
    except JotterError as e:
        return _failure(DELETE_ERROR, e)
    return PlainTextResponse(DELETED_MESSAGE)
