"""Intent payloads accepted from the UI and gesture layers."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from tripboard.domain.models import MoveIntent, Place, PlaceCandidate


class AddPlaceIntent(BaseModel):
    """Add to the pool: a search result by index, a raw candidate, or a pre-built place."""

    type: Literal["add_place"] = "add_place"
    search_index: Optional[int] = None
    candidate: Optional[PlaceCandidate] = None
    place: Optional[Place] = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "AddPlaceIntent":
        given = [v for v in (self.search_index, self.candidate, self.place) if v is not None]
        if len(given) != 1:
            raise ValueError("add_place needs exactly one of search_index, candidate, place")
        return self


class MovePlaceIntent(BaseModel):
    """Flat gesture form; a missing destination means the drag was aborted."""

    type: Literal["move_place"] = "move_place"
    source_location: str = Field(min_length=1)
    source_index: int
    dest_location: Optional[str] = None
    dest_index: Optional[int] = None

    def to_move(self) -> MoveIntent:
        return MoveIntent.from_gesture(
            self.source_location,
            self.source_index,
            self.dest_location,
            self.dest_index,
        )


class RemovePlaceIntent(BaseModel):
    type: Literal["remove_place"] = "remove_place"
    location: str = Field(min_length=1)
    index: int


class UpdatePlaceIntent(BaseModel):
    type: Literal["update_place"] = "update_place"
    day_id: str = Field(min_length=1)
    index: int
    fields: dict[str, Any] = Field(default_factory=dict)


class AddDayIntent(BaseModel):
    type: Literal["add_day"] = "add_day"


class RemoveDayIntent(BaseModel):
    type: Literal["remove_day"] = "remove_day"
    day_id: str = Field(min_length=1)


class MoveDayIntent(BaseModel):
    type: Literal["move_day"] = "move_day"
    day_id: str = Field(min_length=1)
    index: int


class UpdateDayIntent(BaseModel):
    type: Literal["update_day"] = "update_day"
    day_id: str = Field(min_length=1)
    start_time: Optional[str] = None
    title: Optional[str] = None


class SelectDayIntent(BaseModel):
    type: Literal["select_day"] = "select_day"
    day_id: str = Field(min_length=1)


class AddExpenseIntent(BaseModel):
    type: Literal["add_expense"] = "add_expense"
    description: str = ""
    amount: Union[float, str] = 0
    payer: str = ""
    involved: list[str] = Field(default_factory=list)


class RemoveExpenseIntent(BaseModel):
    type: Literal["remove_expense"] = "remove_expense"
    expense_id: str = Field(min_length=1)


class AddParticipantIntent(BaseModel):
    type: Literal["add_participant"] = "add_participant"
    name: str = ""


class RemoveParticipantIntent(BaseModel):
    type: Literal["remove_participant"] = "remove_participant"
    name: str = Field(min_length=1)
    confirmed: bool = False


class SetSearchResultsIntent(BaseModel):
    type: Literal["set_search_results"] = "set_search_results"
    candidates: list[PlaceCandidate] = Field(default_factory=list)


class UndoIntent(BaseModel):
    type: Literal["undo"] = "undo"


class RedoIntent(BaseModel):
    type: Literal["redo"] = "redo"


Intent = Annotated[
    Union[
        AddPlaceIntent,
        MovePlaceIntent,
        RemovePlaceIntent,
        UpdatePlaceIntent,
        AddDayIntent,
        RemoveDayIntent,
        MoveDayIntent,
        UpdateDayIntent,
        SelectDayIntent,
        AddExpenseIntent,
        RemoveExpenseIntent,
        AddParticipantIntent,
        RemoveParticipantIntent,
        SetSearchResultsIntent,
        UndoIntent,
        RedoIntent,
    ],
    Field(discriminator="type"),
]

IntentAdapter: TypeAdapter[Intent] = TypeAdapter(Intent)


def parse_intent(payload: dict[str, Any]) -> Intent:
    return IntentAdapter.validate_python(payload)


__all__ = [
    "AddDayIntent",
    "AddExpenseIntent",
    "AddParticipantIntent",
    "AddPlaceIntent",
    "Intent",
    "IntentAdapter",
    "MoveDayIntent",
    "MovePlaceIntent",
    "RedoIntent",
    "RemoveDayIntent",
    "RemoveExpenseIntent",
    "RemoveParticipantIntent",
    "RemovePlaceIntent",
    "SelectDayIntent",
    "SetSearchResultsIntent",
    "UndoIntent",
    "UpdateDayIntent",
    "UpdatePlaceIntent",
    "parse_intent",
]
