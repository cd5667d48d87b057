from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.errors import ConflictError, PaywallError
from app.schemas.guest import (
    GuestCreditsResponse,
    GuestEnsureRequest,
    GuestPredictRequest,
    GuestPredictResponse,
)
from app.services.guest_credits import ensure_session, record_prediction

router = APIRouter(prefix="/guest", tags=["Guest"])


@router.post("/ensure", response_model=GuestCreditsResponse)
def ensure(body: GuestEnsureRequest, db: Session = Depends(get_db)):
    return ensure_session(db, body.device_id)


@router.post("/predict", response_model=GuestPredictResponse, response_model_exclude_none=True)
def save_guest_prediction(body: GuestPredictRequest, db: Session = Depends(get_db)):
    try:
        return record_prediction(
            db,
            device_id=body.device_id,
            game_id=body.game_id,
            predicted_home_score=body.predicted_home_score,
            predicted_away_score=body.predicted_away_score,
            confidence=body.confidence,
            user_configuration=body.user_configuration,
        )
    except PaywallError:
        raise HTTPException(status_code=402, detail="PAYWALL")
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
