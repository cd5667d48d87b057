from sqlalchemy import create_engine, Column, Integer, String, Float, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import sessionmaker, relationship, declarative_base
from datetime import datetime
from app.config import DATABASE_URL

is_sqlite = DATABASE_URL.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine_options = {
    "pool_pre_ping": True,
}
if not is_sqlite:
    engine_options["pool_recycle"] = 300

engine = create_engine(DATABASE_URL, connect_args=connect_args, **engine_options)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class Team(Base):
    __tablename__ = "teams"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    abbreviation = Column(String(10), nullable=False)
    conference = Column(String(3), nullable=False)
    division = Column(String(10), nullable=False)
    logo_url = Column(String(500), nullable=True)
    primary_color = Column(String(20), nullable=True)
    secondary_color = Column(String(20), nullable=True)

    season_stats = relationship("SeasonStats", back_populates="team")


class SeasonStats(Base):
    __tablename__ = "season_stats"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(String(64), ForeignKey("teams.id"), nullable=False, index=True)
    year = Column(Integer, nullable=True, index=True)

    yards_per_game = Column(Float, nullable=True)
    yards_per_game_last_3 = Column(Float, nullable=True)
    yards_per_game_last_1 = Column(Float, nullable=True)
    yards_per_game_home = Column(Float, nullable=True)
    yards_per_game_away = Column(Float, nullable=True)

    points_per_game = Column(Float, nullable=True)
    points_per_game_last_3 = Column(Float, nullable=True)
    points_per_game_last_1 = Column(Float, nullable=True)
    points_per_game_home = Column(Float, nullable=True)
    points_per_game_away = Column(Float, nullable=True)

    touchdowns_per_game = Column(Float, nullable=True)
    touchdowns_per_game_last_3 = Column(Float, nullable=True)
    touchdowns_per_game_last_1 = Column(Float, nullable=True)
    touchdowns_per_game_home = Column(Float, nullable=True)
    touchdowns_per_game_away = Column(Float, nullable=True)

    passing_yards_per_game = Column(Float, nullable=True)
    rushing_yards_per_game = Column(Float, nullable=True)

    opponent_yards_per_game = Column(Float, nullable=True)
    opponent_points_per_game = Column(Float, nullable=True)

    average_scoring_margin = Column(Float, nullable=True)
    average_scoring_margin_last_3 = Column(Float, nullable=True)
    average_scoring_margin_last_1 = Column(Float, nullable=True)
    average_scoring_margin_home = Column(Float, nullable=True)
    average_scoring_margin_away = Column(Float, nullable=True)

    yards_per_point = Column(Float, nullable=True)
    yards_per_point_last_3 = Column(Float, nullable=True)
    yards_per_point_last_1 = Column(Float, nullable=True)
    yards_per_point_home = Column(Float, nullable=True)
    yards_per_point_away = Column(Float, nullable=True)

    fpi = Column(Float, nullable=True)
    fpi_offense = Column(Float, nullable=True)
    fpi_defense = Column(Float, nullable=True)

    team = relationship("Team", back_populates="season_stats")


class Game(Base):
    """Scoreboard row: schedule, live status and final result of one game."""
    __tablename__ = "games"

    game_id = Column(String(32), primary_key=True, index=True)
    season_year = Column(Integer, nullable=False, index=True)
    season_type = Column(Integer, nullable=False, default=2)
    week_num = Column(Integer, nullable=False, index=True)
    week_name = Column(String(50), nullable=True)
    datetime_utc = Column(DateTime, nullable=False)

    away_abbr = Column(String(10), nullable=False)
    away_display_name = Column(String(200), nullable=True)
    home_abbr = Column(String(10), nullable=False)
    home_display_name = Column(String(200), nullable=True)
    away_score = Column(Integer, nullable=True)
    home_score = Column(Integer, nullable=True)

    # pre / in / post
    game_status = Column(String(10), nullable=False, default="pre")
    period = Column(String(10), nullable=True)
    display_clock = Column(String(10), nullable=True)
    situation = Column(String(200), nullable=True)

    total_points = Column(Float, nullable=True)
    over_under = Column(Float, nullable=True)
    spread = Column(Float, nullable=True)
    favored_team = Column(String(10), nullable=True)
    broadcasts = Column(String(200), nullable=True)


class GuestSession(Base):
    __tablename__ = "guest_sessions"

    device_id = Column(String(64), primary_key=True, index=True)
    credits_used = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    last_seen = Column(DateTime, default=datetime.utcnow)

    predictions = relationship("GuestPrediction", back_populates="session")


class GuestPrediction(Base):
    __tablename__ = "guest_predictions"
    __table_args__ = (
        UniqueConstraint("device_id", "game_id", name="uq_guest_prediction_device_game"),
    )

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(String(64), ForeignKey("guest_sessions.device_id"), nullable=False, index=True)
    game_id = Column(String(100), nullable=False)
    predicted_home_score = Column(Float, nullable=False)
    predicted_away_score = Column(Float, nullable=False)
    confidence = Column(Float, nullable=True)
    user_configuration = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    session = relationship("GuestSession", back_populates="predictions")


def init_db():
    Base.metadata.create_all(bind=engine)
