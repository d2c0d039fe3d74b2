"""
Digest schemas.

POST /digest → DigestRequest → DigestResponse
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from diary_insight.schemas.entry import EntryKindIn, OwnerKey


class DigestRequest(BaseModel):
    owner_key: OwnerKey = None
    kind: EntryKindIn = EntryKindIn.journal
    start: Optional[date] = Field(
        default=None,
        description="Window start. Omit start and end for the trailing 7 days.",
    )
    end: Optional[date] = None
    include_adherence: Optional[bool] = Field(
        default=None,
        description="Append adherence status/notes. Defaults to the server setting.",
    )
    include_composite: bool = False


class DigestResponse(BaseModel):
    start: str
    end: str
    line_count: int
    digest: str = Field(description="One line per record, oldest first. Empty when no data.")
    analysis_request: str = Field(description="Instruction header + digest, or empty.")
    risk_signal: bool = Field(description="True when any record's text matches a crisis keyword.")
