"""
Entries router — the record store surface.

POST   /entries          — append a record
GET    /entries          — list an owner's records (newest first)
GET    /entries/{id}     — fetch one record
PATCH  /entries/{id}     — edit a record in place
DELETE /entries/{id}     — remove a record
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from diary_insight.db.base import get_db
from diary_insight.models.entry import DiaryEntry
from diary_insight.schemas.common import ErrorResponse
from diary_insight.schemas.entry import (
    EntryCreate,
    EntryKindIn,
    EntryListResponse,
    EntryResponse,
    EntryUpdate,
)
from diary_insight.services import store
from diary_insight.services.records import primary_rating
from diary_insight.services.scoring import rating_label
from diary_insight.routers.deps import resolve_owner, resolve_today

router = APIRouter(prefix="/entries", tags=["entries"])


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def _entry_to_response(e: DiaryEntry) -> EntryResponse:
    return EntryResponse(
        id=e.id,
        owner_key=e.owner_key,
        kind=store.enum_value(e.kind),
        day=str(e.day),
        mood=e.mood,
        energy=e.energy,
        relation=e.relation,
        achievement=e.achievement,
        progress=e.progress,
        tags=store.entry_tags(e),
        text=e.text,
        adherence_status=store.enum_value(e.adherence_status) if e.adherence_status is not None else None,
        adherence_note=e.adherence_note,
        rating_label=rating_label(primary_rating(store.to_record(e))),
        created_at=e.created_at.isoformat() if e.created_at else "",
        updated_at=e.updated_at.isoformat() if e.updated_at else None,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=EntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a diary record",
    responses={
        201: {"description": "Record stored."},
        422: {"model": ErrorResponse, "description": "Validation error (`VALIDATION_ERROR`)."},
    },
)
def create_entry(
    payload: EntryCreate,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    """
    Store one dated record. Several records may share a day; listings show
    all of them while insights use the first one saved.

    Child records may send `situation` / `intervention` / `outcome` instead
    of `text`; they are composed into the stored text.
    """
    text = payload.text
    if payload.kind == EntryKindIn.child.value and not text.strip():
        text = store.compose_child_text(payload.situation, payload.intervention, payload.outcome)

    entry = store.create_entry(
        db,
        owner_key=payload.owner_key,
        day=payload.day or today,
        kind=payload.kind,
        ratings=payload.ratings(),
        tags=payload.tags,
        text=text.strip(),
        adherence_status=payload.adherence_status,
        adherence_note=payload.adherence_note,
    )
    return _entry_to_response(entry)


@router.get(
    "",
    response_model=EntryListResponse,
    summary="List an owner's records (newest first)",
)
def list_entries(
    owner_key: str = Depends(resolve_owner),
    kind: Optional[EntryKindIn] = Query(default=None),
    start: Optional[date] = Query(default=None, description="Inclusive lower bound."),
    end: Optional[date] = Query(default=None, description="Inclusive upper bound."),
    limit: int = Query(default=50, ge=1, le=500, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    db: Session = Depends(get_db),
):
    total, items = store.list_entries(
        db,
        owner_key=owner_key,
        kind=kind.value if kind else None,
        start=start,
        end=end,
        limit=limit,
        offset=offset,
    )
    return EntryListResponse(total=total, items=[_entry_to_response(e) for e in items])


@router.get(
    "/{entry_id}",
    response_model=EntryResponse,
    summary="Fetch one record",
    responses={
        404: {"model": ErrorResponse, "description": "No such entry (`ENTRY_NOT_FOUND`)."},
        403: {"model": ErrorResponse, "description": "Entry belongs to someone else (`ENTRY_OWNER_MISMATCH`)."},
    },
)
def get_entry(
    entry_id: int,
    owner_key: str = Depends(resolve_owner),
    db: Session = Depends(get_db),
):
    return _entry_to_response(store.get_entry(db, entry_id, owner_key))


@router.patch(
    "/{entry_id}",
    response_model=EntryResponse,
    summary="Edit a record in place",
    responses={
        404: {"model": ErrorResponse, "description": "No such entry (`ENTRY_NOT_FOUND`)."},
        403: {"model": ErrorResponse, "description": "Entry belongs to someone else (`ENTRY_OWNER_MISMATCH`)."},
    },
)
def update_entry(entry_id: int, payload: EntryUpdate, db: Session = Depends(get_db)):
    """Only fields present in the body change. The record keeps its id."""
    entry = store.get_entry(db, entry_id, payload.owner_key)
    changes = payload.model_dump(exclude_unset=True, exclude={"owner_key"})
    return _entry_to_response(store.update_entry(db, entry, changes))


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a record",
    responses={
        404: {"model": ErrorResponse, "description": "No such entry (`ENTRY_NOT_FOUND`)."},
        403: {"model": ErrorResponse, "description": "Entry belongs to someone else (`ENTRY_OWNER_MISMATCH`)."},
    },
)
def delete_entry(
    entry_id: int,
    owner_key: str = Depends(resolve_owner),
    db: Session = Depends(get_db),
):
    store.delete_entry(db, store.get_entry(db, entry_id, owner_key))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
