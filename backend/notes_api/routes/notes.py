"""
Notes API — Notes Route Handlers
==================================

What:  GET/POST /notes and PUT/DELETE /notes/{id}.
How:   Each handler extracts the query string, path id or JSON body, calls
       one NoteService method, and returns the result.

Response bodies (kept for compatibility with existing clients):
    GET    /notes       → JSON array of notes
    POST   /notes       → text "Note added successfully."
    PUT    /notes/{id}  → text "Note updated successfully." | 404 text "Note not found."
    DELETE /notes/{id}  → JSON {"ok": true | false}

Failures raised by the service (400, 404, 500, 503) are rendered as plain
text by the exception handlers registered in main.py.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import PlainTextResponse

from notes_api.schemas.note import DeleteResult, Note, StoredNote
from notes_api.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_TEXT_ERROR = {"content": {"text/plain": {"schema": {"type": "string"}}}}


@router.get(
    "/notes",
    response_model=None,
    responses={
        200: {"description": "Successful operation", "model": List[StoredNote]},
        500: {"description": "Store error", **_TEXT_ERROR},
        503: {"description": "Store unavailable", **_TEXT_ERROR},
    },
    summary="Retrieve all notes",
    description=(
        "Get a list of all notes. Any query parameter is used as an equality "
        "filter on the stored field of the same name, e.g. `?title=Groceries`."
    ),
)
async def list_notes(
    request: Request,
    service: NoteService = Depends(get_note_service),
) -> List[Dict[str, Any]]:
    return await service.list_notes(dict(request.query_params))


@router.post(
    "/notes",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Successful operation"},
        500: {"description": "Store error"},
        503: {"description": "Store unavailable"},
    },
    summary="Create a new note",
    description="Create a new note with the given title and content.",
)
async def create_note(
    note: Optional[Note] = None,
    service: NoteService = Depends(get_note_service),
) -> str:
    # No body at all stores an empty note
    await service.create_note(note.to_document() if note is not None else {})
    return "Note added successfully."


@router.delete(
    "/notes/{note_id}",
    response_model=DeleteResult,
    responses={
        200: {"description": "Successful operation; `ok` is false when no note matched"},
        400: {"description": "Malformed note id", **_TEXT_ERROR},
        500: {"description": "Store error", **_TEXT_ERROR},
        503: {"description": "Store unavailable", **_TEXT_ERROR},
    },
    summary="Delete a note",
    description="Deletes a note based on its unique ID.",
)
async def delete_note(
    note_id: str = Path(..., description="The ID of the note (24-character hex ObjectId)."),
    service: NoteService = Depends(get_note_service),
) -> DeleteResult:
    deleted = await service.delete_note(note_id)
    return DeleteResult(ok=deleted)


@router.put(
    "/notes/{note_id}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Successful operation"},
        400: {"description": "Malformed note id"},
        404: {"description": "Note not found"},
        500: {"description": "Store error"},
        503: {"description": "Store unavailable"},
    },
    summary="Update a note",
    description=(
        "Update an existing note with the given ID. Fields in the body replace "
        "the stored ones; fields not mentioned are left untouched."
    ),
)
async def update_note(
    note: Optional[Note] = None,
    note_id: str = Path(..., description="The ID of the note (24-character hex ObjectId)."),
    service: NoteService = Depends(get_note_service),
) -> str:
    await service.update_note(note_id, note.to_document() if note is not None else {})
    return "Note updated successfully."
