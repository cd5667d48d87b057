from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class GuestEnsureRequest(BaseModel):
    device_id: str = Field(..., min_length=1, max_length=64, alias="deviceId")

    class Config:
        populate_by_name = True


class GuestPredictRequest(BaseModel):
    device_id: str = Field(..., min_length=1, max_length=64)
    game_id: str = Field(..., min_length=1, max_length=100)
    predicted_home_score: float
    predicted_away_score: float
    confidence: Optional[float] = None
    user_configuration: Optional[Dict[str, Any]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GuestCreditsResponse(BaseModel):
    used: int
    remaining: int


class GuestPredictResponse(GuestCreditsResponse):
    ok: bool = True
    created: Optional[bool] = None
    updated: Optional[bool] = None
