from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.models import PredictionSettings


class SettingsIn(BaseModel):
    recent_form: Optional[float] = None
    home_field_advantage: Optional[float] = None
    defensive_strength: Optional[float] = None
    fpi_edge: Optional[float] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_settings(self) -> PredictionSettings:
        return PredictionSettings.from_mapping(self.model_dump(exclude_none=True))


class PredictRequest(BaseModel):
    home_id: str = Field(..., alias="homeId")
    away_id: str = Field(..., alias="awayId")
    settings: Optional[SettingsIn] = None

    class Config:
        populate_by_name = True
