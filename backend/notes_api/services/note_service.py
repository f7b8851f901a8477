"""
Notes API — Note Service (Note Repository)
============================================

What:  The four note operations: list, create, delete, update.
How:   Each operation is exactly one call on the motor collection handle.
       Client data is passed through unchanged; the store assigns ids and
       enforces whatever it enforces.
Who:   Called by the route handlers in routes/notes.py.

Operation → store call:
    list_notes(filter)       → find(filter).to_list()
    create_note(document)    → insert_one(document)
    delete_note(id)          → delete_one({"_id": ObjectId(id)})
    update_note(id, fields)  → update_one({"_id": ObjectId(id)}, {"$set": fields})

Error Handling Strategy:
    Malformed ids raise InvalidIdentifierError before the store is touched.
    An update that matches nothing raises NotFoundError. A delete that
    removes nothing is an ordinary False result. Any store failure is logged
    and wrapped in DatabaseError carrying the operation's client message.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from bson import Binary, Code, DBRef, Decimal128, MaxKey, MinKey, ObjectId, Regex, Timestamp, json_util
from bson.errors import InvalidId
from bson.json_util import RELAXED_JSON_OPTIONS
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from motor.motor_asyncio import AsyncIOMotorCollection

from notes_api.exceptions import DatabaseError, InvalidIdentifierError, NotFoundError

logger = logging.getLogger(__name__)


def parse_note_id(raw_id: str) -> ObjectId:
    """
    Parse a path segment into an ObjectId.

    Raises:
        InvalidIdentifierError: raw_id is not a 24-character hex string
    """
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError):
        raise InvalidIdentifierError(raw_id)


def _extended_json(value: Any) -> Any:
    return json.loads(json_util.dumps(value, json_options=RELAXED_JSON_OPTIONS))


# BSON values jsonable_encoder cannot render on its own. bytes covers
# Binary subtype 0, which pymongo decodes to plain bytes.
BSON_ENCODERS = {
    ObjectId: str,
    bytes: _extended_json,
    Binary: _extended_json,
    Code: _extended_json,
    DBRef: _extended_json,
    Decimal128: _extended_json,
    MaxKey: _extended_json,
    MinKey: _extended_json,
    Regex: _extended_json,
    Timestamp: _extended_json,
}


def serialize_notes(documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Render stored documents JSON-safe.

    ObjectIds become hex strings; other BSON-only types use pymongo's
    relaxed Extended JSON form, e.g. {"$numberDecimal": "1.50"}.
    """
    return jsonable_encoder(documents, custom_encoder=BSON_ENCODERS)


class NoteService:
    """
    Note repository bound to one collection handle.

    Stateless apart from the handle; a fresh instance is built for each
    request by `get_note_service`.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def list_notes(self, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Return every note matching an equality filter.

        The whole result set is materialized in memory; there is no
        pagination. An empty or missing filter matches all notes. Order is
        whatever the store returns.

        Raises:
            DatabaseError: the query failed
        """
        query = dict(filter or {})
        try:
            cursor = self.collection.find(query)
            documents = await cursor.to_list(length=None)
        except Exception as e:
            logger.error("Error retrieving notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while retrieving notes.",
                context={"filter": query, "error_type": type(e).__name__},
            )

        logger.debug("Listed %d notes (filter=%s)", len(documents), query)
        return serialize_notes(documents)

    async def create_note(self, document: Dict[str, Any]) -> None:
        """
        Insert a document as a new note.

        The generated id is deliberately not returned to the caller.

        Raises:
            DatabaseError: the insert failed
        """
        # insert_one writes the generated _id back into its argument
        payload = dict(document)
        try:
            result = await self.collection.insert_one(payload)
        except Exception as e:
            logger.error("Error adding note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while adding a note.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Note created: %s", result.inserted_id)

    async def delete_note(self, raw_id: str) -> bool:
        """
        Delete at most one note by id.

        Returns:
            True if exactly one note was removed, False if none matched.

        Raises:
            InvalidIdentifierError: raw_id is malformed
            DatabaseError: the delete failed
        """
        note_id = parse_note_id(raw_id)
        try:
            result = await self.collection.delete_one({"_id": note_id})
        except Exception as e:
            logger.error("Error deleting note %s: %s", raw_id, str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while deleting the note.",
                context={"note_id": raw_id, "error_type": type(e).__name__},
            )

        deleted = result.deleted_count == 1
        logger.info("Delete note %s: deleted=%s", raw_id, deleted)
        return deleted

    async def update_note(self, raw_id: str, fields: Dict[str, Any]) -> None:
        """
        Merge `fields` into an existing note with `$set`.

        Named fields are overwritten, all others are kept; nothing is removed.

        Raises:
            InvalidIdentifierError: raw_id is malformed
            NotFoundError: no note has this id
            DatabaseError: the update failed
        """
        note_id = parse_note_id(raw_id)
        try:
            result = await self.collection.update_one({"_id": note_id}, {"$set": dict(fields)})
        except Exception as e:
            logger.error("Error updating note %s: %s", raw_id, str(e), exc_info=True)
            raise DatabaseError(
                message="An error occurred while updating the note.",
                context={"note_id": raw_id, "error_type": type(e).__name__},
            )

        if result.matched_count != 1:
            raise NotFoundError(resource="Note", resource_id=raw_id)
        logger.info("Note updated: %s (%d fields)", raw_id, len(fields))


# ── Dependency ────────────────────────────────────────────────────────────
def get_note_service(request: Request) -> NoteService:
    """
    FastAPI dependency building a NoteService over the app's collection.

    Raises:
        StoreUnavailableError: the store connector is not connected (→ 503)
    """
    return NoteService(request.app.state.store.collection)
