import os
from typing import Any, Dict, Optional

import pandas as pd
from sqlalchemy.orm import Session

from app.db import Game, SeasonStats, SessionLocal, Team
from app.utils.cache import PREFIX_GAMES, PREFIX_STATS, PREFIX_TEAMS, invalidate_cache
from app.utils.logging import get_logger

logger = get_logger(__name__)

TEAM_COLUMNS = [
    "id", "name", "abbreviation", "conference", "division",
    "logo_url", "primary_color", "secondary_color",
]
STATS_COLUMNS = [column.name for column in SeasonStats.__table__.columns if column.name != "id"]
GAME_COLUMNS = [column.name for column in Game.__table__.columns]
GAME_INT_COLUMNS = ("season_year", "season_type", "week_num", "away_score", "home_score")
GAME_FLOAT_COLUMNS = ("total_points", "over_under", "spread")


def get_data_path(filename: str, data_dir: Optional[str] = None) -> str:
    if data_dir is None:
        base_path = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
        data_dir = os.path.join(base_path, "data")
    return os.path.join(data_dir, filename)


def _clean_record(row: pd.Series, columns) -> Dict[str, Any]:
    record = {}
    for column in columns:
        if column not in row.index:
            continue
        value = row[column]
        record[column] = None if pd.isna(value) else value
    return record


def seed_teams(db: Session, teams_df: pd.DataFrame) -> int:
    teams_df = teams_df.dropna(subset=["id", "name"])
    count = 0
    for _, row in teams_df.iterrows():
        record = _clean_record(row, TEAM_COLUMNS)
        record["id"] = str(record["id"]).strip()
        db.add(Team(**record))
        count += 1
    db.commit()
    return count


def seed_season_stats(db: Session, stats_df: pd.DataFrame) -> int:
    stats_df = stats_df.dropna(subset=["team_id"])
    count = 0
    for _, row in stats_df.iterrows():
        record = _clean_record(row, STATS_COLUMNS)
        record["team_id"] = str(record["team_id"]).strip()
        if record.get("year") is not None:
            record["year"] = int(record["year"])
        for column, value in record.items():
            if column not in ("team_id", "year") and value is not None:
                record[column] = float(value)
        db.add(SeasonStats(**record))
        count += 1
    db.commit()
    return count


def seed_games(db: Session, games_df: pd.DataFrame) -> int:
    games_df = games_df.dropna(subset=["game_id", "datetime_utc"]).copy()
    games_df["datetime_utc"] = pd.to_datetime(games_df["datetime_utc"], utc=True).dt.tz_convert(None)
    count = 0
    for _, row in games_df.iterrows():
        record = _clean_record(row, GAME_COLUMNS)
        record["game_id"] = str(record["game_id"]).strip()
        record["datetime_utc"] = record["datetime_utc"].to_pydatetime()
        for column in GAME_INT_COLUMNS:
            if record.get(column) is not None:
                record[column] = int(record[column])
        for column in GAME_FLOAT_COLUMNS:
            if record.get(column) is not None:
                record[column] = float(record[column])
        db.add(Game(**record))
        count += 1
    db.commit()
    return count


def _seed_teams_and_stats(db: Session, data_dir: Optional[str]) -> bool:
    teams_path = get_data_path("teams.csv", data_dir)
    stats_path = get_data_path("season_stats.csv", data_dir)

    if not os.path.exists(teams_path) or not os.path.exists(stats_path):
        logger.warning("Sample data files not found. Skipping seed.")
        return False

    teams_df = pd.read_csv(teams_path, dtype={"id": str})
    stats_df = pd.read_csv(stats_path, dtype={"team_id": str})

    team_count = seed_teams(db, teams_df)
    stats_count = seed_season_stats(db, stats_df)

    logger.info(f"Seeded {team_count} teams and {stats_count} season stat rows")
    return True


def _seed_scoreboard(db: Session, data_dir: Optional[str]) -> bool:
    games_path = get_data_path("games.csv", data_dir)
    if not os.path.exists(games_path):
        logger.warning("Sample games file not found. Skipping scoreboard seed.")
        return False

    games_df = pd.read_csv(games_path, dtype={"game_id": str, "period": str, "display_clock": str})
    game_count = seed_games(db, games_df)
    logger.info(f"Seeded {game_count} games")
    return True


@invalidate_cache(PREFIX_TEAMS, PREFIX_STATS, PREFIX_GAMES)
def seed_sample_data(db: Optional[Session] = None, data_dir: Optional[str] = None) -> bool:
    """
    Load teams and season stats from CSV when the teams table is empty, and
    games when the games table is empty. Returns True when anything was loaded.
    """
    owns_session = db is None
    if owns_session:
        db = SessionLocal()
    try:
        loaded = False
        if not db.query(Team).first():
            loaded = _seed_teams_and_stats(db, data_dir)
        if not db.query(Game).first():
            loaded = _seed_scoreboard(db, data_dir) or loaded
        return loaded

    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding data: {e}")
        raise
    finally:
        if owns_session:
            db.close()
