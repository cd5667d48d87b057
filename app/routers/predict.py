from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.db import get_db
from app.errors import InvalidArgumentError, NotFoundError
from app.schemas.predict import PredictRequest
from app.services.predictor import run_prediction

router = APIRouter(tags=["Predictions"])


@router.post("/predict")
def predict(body: PredictRequest, db: Session = Depends(get_db)):
    """
    Predict the score of a matchup from the latest season both teams have
    stats for. Sending `settings` switches to the tunable model.
    """
    settings = body.settings.to_settings() if body.settings is not None else None
    try:
        return run_prediction(db, body.home_id, body.away_id, settings)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/predict")
def predict_method_not_allowed():
    return JSONResponse(
        status_code=405,
        content={"detail": "Method not allowed. Use POST to generate predictions."},
        headers={"Allow": "POST"},
    )
