"""
Training session schemas.

Two stored shapes coexist:

- **legacy**: one session per player, owned through ``player_id``;
- **group**: one session shared by a list of ``participants``.

Both are validated as a tagged union and converted by :func:`parse_session`
into the canonical :class:`Session`, which is the only shape the
aggregation code ever sees.
"""

import datetime
from typing import Annotated, Any, Optional, Union

from pydantic import (
    BaseModel,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)


class ExerciseEntry(BaseModel):
    """One exercise block performed within a session."""

    type: str = Field(..., description="Training type, e.g. 'Rally' or 'Baskets'")
    area: str = Field(..., description="Training area, e.g. 'Base game'")
    exercise: str = ""
    specific_exercise: Optional[str] = None
    duration: Union[float, str] = Field(
        "",
        description="Free-form duration ('20 min', '1 hour') or minutes as a number",
    )
    # Logged as-is; not used by the comparison.
    intensity: Optional[float] = None


class Session(BaseModel):
    """Canonical training session."""

    id: Optional[str] = None
    date: datetime.datetime
    player_ids: list[str] = Field(default_factory=list)
    exercises: list[ExerciseEntry] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def _naive_utc(cls, value: datetime.datetime) -> datetime.datetime:
        if value.tzinfo is not None:
            return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids


# ----------------------------------------------------------------------
# Stored shapes
# ----------------------------------------------------------------------


class LegacySessionRecord(BaseModel):
    """Single-player session with a direct ownership field."""

    id: Optional[str] = None
    player_id: str
    coach_id: Optional[str] = None
    date: datetime.datetime
    exercises: list[ExerciseEntry] = Field(default_factory=list)
    notes: Optional[str] = None

    def to_session(self) -> Session:
        return Session(id=self.id, date=self.date, player_ids=[self.player_id], exercises=self.exercises)


class Participant(BaseModel):
    player_id: str
    player_name: Optional[str] = None


class GroupSessionRecord(BaseModel):
    """Session shared by several players."""

    id: Optional[str] = None
    date: datetime.datetime
    participants: list[Participant] = Field(default_factory=list)
    exercises: list[ExerciseEntry] = Field(default_factory=list)
    notes: Optional[str] = None

    def to_session(self) -> Session:
        return Session(id=self.id, date=self.date, player_ids=[p.player_id for p in self.participants],
                       exercises=self.exercises, )


def _session_shape(value: Any) -> str:
    if isinstance(value, dict):
        return "group" if "participants" in value else "legacy"
    return "group" if hasattr(value, "participants") else "legacy"


SessionRecord = Annotated[
    Union[
        Annotated[LegacySessionRecord, Tag("legacy")],
        Annotated[GroupSessionRecord, Tag("group")],
    ],
    Discriminator(_session_shape),
]

_session_record_adapter: TypeAdapter = TypeAdapter(SessionRecord)


def validate_session_record(raw: Any) -> Union[LegacySessionRecord, GroupSessionRecord]:
    """Validate *raw* as whichever stored shape it has."""
    return _session_record_adapter.validate_python(raw)


def parse_session(raw: Any) -> Session:
    """Validate a stored session of either shape into a :class:`Session`.

    Raises:
        pydantic.ValidationError: if *raw* matches neither shape.
    """
    if isinstance(raw, Session):
        return raw
    return validate_session_record(raw).to_session()
