"""
Guest Credit Metering

Anonymous devices get a fixed number of free predictions. Re-submitting a
prediction for a game the device already predicted is free; a new game
costs one credit. The prediction insert and the credit increment are
committed together.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import GUEST_CREDIT_LIMIT
from app.db import GuestPrediction, GuestSession
from app.errors import ConflictError, PaywallError
from app.utils.logging import get_logger

logger = get_logger(__name__)


def credits_summary(used: int, limit: int = GUEST_CREDIT_LIMIT) -> Dict[str, int]:
    used = used or 0
    return {"used": used, "remaining": max(0, limit - used)}


def _get_or_create_session(db: Session, device_id: str) -> GuestSession:
    session = db.query(GuestSession).filter(GuestSession.device_id == device_id).first()
    if session is None:
        session = GuestSession(device_id=device_id, credits_used=0)
        db.add(session)
        db.flush()
        logger.info(f"Created guest session for device {device_id}")
    return session


def ensure_session(db: Session, device_id: str, limit: int = GUEST_CREDIT_LIMIT) -> Dict[str, int]:
    session = _get_or_create_session(db, device_id)
    session.last_seen = datetime.utcnow()
    db.commit()
    return credits_summary(session.credits_used, limit)


def record_prediction(
    db: Session,
    device_id: str,
    game_id: str,
    predicted_home_score: float,
    predicted_away_score: float,
    confidence: Optional[float] = None,
    user_configuration: Optional[Dict[str, Any]] = None,
    limit: int = GUEST_CREDIT_LIMIT,
) -> Dict[str, Any]:
    """
    Store a guest prediction.

    Raises PaywallError when a new prediction would exceed the credit limit
    and ConflictError when a concurrent request inserted the same game or
    spent the same credit first.
    """
    configuration = json.dumps(user_configuration) if user_configuration is not None else None
    session = _get_or_create_session(db, device_id)

    existing = (
        db.query(GuestPrediction)
        .filter(GuestPrediction.device_id == device_id, GuestPrediction.game_id == game_id)
        .first()
    )
    if existing is not None:
        existing.predicted_home_score = predicted_home_score
        existing.predicted_away_score = predicted_away_score
        existing.confidence = confidence
        existing.user_configuration = configuration
        existing.updated_at = datetime.utcnow()
        session.last_seen = datetime.utcnow()
        db.commit()
        return {"ok": True, **credits_summary(session.credits_used, limit), "updated": True}

    used = session.credits_used or 0
    if used >= limit:
        db.rollback()
        logger.info(f"Guest device {device_id} hit the paywall at {used} credits")
        raise PaywallError("PAYWALL")

    db.add(GuestPrediction(
        device_id=device_id,
        game_id=game_id,
        predicted_home_score=predicted_home_score,
        predicted_away_score=predicted_away_score,
        confidence=confidence,
        user_configuration=configuration,
    ))

    # Compare-and-set so two requests cannot spend the same credit
    updated_rows = (
        db.query(GuestSession)
        .filter(GuestSession.device_id == device_id, GuestSession.credits_used == used)
        .update(
            {GuestSession.credits_used: used + 1, GuestSession.last_seen: datetime.utcnow()},
            synchronize_session=False,
        )
    )
    if updated_rows != 1:
        db.rollback()
        raise ConflictError("Guest credits changed during the request")

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Prediction already exists for this game")

    return {"ok": True, **credits_summary(used + 1, limit), "created": True}
