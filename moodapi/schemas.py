import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_iso_date(v: Optional[str]) -> Optional[str]:
    # Presence is checked by the service; only the shape is checked here.
    if not v:
        return v
    if not ISO_DATE.match(v):
        raise ValueError("date must be YYYY-MM-DD")
    try:
        date.fromisoformat(v)
    except ValueError:
        raise ValueError("date must be a real calendar day in YYYY-MM-DD form")
    return v


def validate_text(v: Optional[str]) -> Optional[str]:
    # Lone surrogates survive JSON decoding but cannot be stored as BSON strings.
    if v is not None:
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid UTF-8 text")
    return v


class MoodCreate(BaseModel):
    userId: Optional[str] = Field(None, description="owner of the entry")
    mood: Optional[str] = Field(None, description="mood keyword, e.g., happy, sad, etc.")
    note: Optional[str] = Field(None, description="optional note")
    date: Optional[str] = Field(None, description="YYYY-MM-DD")
    deleted: Optional[bool] = Field(None, description="soft-delete marker")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        return validate_iso_date(v)

    @field_validator("userId", "mood", "note")
    @classmethod
    def validate_encodable(cls, v: Optional[str]) -> Optional[str]:
        return validate_text(v)


class MoodUpdate(BaseModel):
    mood: Optional[str] = Field(None, description="mood keyword")
    note: Optional[str] = Field(None, description="optional note")
    date: Optional[str] = Field(None, description="YYYY-MM-DD")
    deleted: Optional[bool] = Field(None, description="soft-delete marker")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        return validate_iso_date(v)

    @field_validator("mood", "note")
    @classmethod
    def validate_encodable(cls, v: Optional[str]) -> Optional[str]:
        return validate_text(v)
