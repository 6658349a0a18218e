from typing import Annotated
from datetime import datetime
from decimal import Decimal
from pydantic import Field, model_validator
from liftlog.schemas.base import ApiModel

# Bounds keep a set's num_reps * weight, and a user's running total, inside
# the INTEGER / NUMERIC columns that store them.
MAX_REPS = 10_000
MAX_WEIGHT_KG = 1000

RepCount = Annotated[int, Field(ge=1, le=MAX_REPS)]
# kilograms, stored to the cent; more decimals are rejected rather than rounded
WeightKg = Annotated[Decimal, Field(ge=0, le=MAX_WEIGHT_KG, decimal_places=2)]

class SetCreate(ApiModel):
    num_reps: RepCount
    weight: WeightKg

class SetUpdate(ApiModel):
    num_reps: RepCount | None = None
    weight: WeightKg | None = None

    @model_validator(mode="after")
    def at_least_one_field(self) -> "SetUpdate":
        if self.num_reps is None and self.weight is None:
            raise ValueError("numReps or weight is required")
        return self

class SetRead(ApiModel):
    id: int
    exercise_id: int
    num_reps: int
    weight: float
    created_at: datetime
    updated_at: datetime
