"""
Shared fixtures: an in-memory SQLite database wired into the app through
the get_db dependency, plus a small league of teams and season stats.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db
from app.main import app
from app.utils.cache import cache
from factories import make_stats, make_team


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def league(db_session):
    """
    Three teams with 2024 stats. KC and BUF also have 2023 stats; NE only
    has 2024.
    """
    db_session.add_all([
        make_team("KC", "Kansas City Chiefs", "AFC", "West"),
        make_team("BUF", "Buffalo Bills", "AFC", "East"),
        make_team("NE", "New England Patriots", "AFC", "East"),
    ])
    db_session.add_all([
        make_stats(
            "KC", 2024,
            yards_per_game=400.0, yards_per_game_last_3=420.0, yards_per_game_last_1=410.0,
            yards_per_game_home=410.0, points_per_game=28.0, points_per_game_last_3=30.0,
            opponent_yards_per_game=360.0, opponent_points_per_game=20.0,
            fpi=5.0, fpi_offense=3.0, fpi_defense=2.0,
        ),
        make_stats(
            "BUF", 2024,
            yards_per_game=350.0, yards_per_game_last_3=330.0, yards_per_game_last_1=340.0,
            yards_per_game_away=330.0, points_per_game=21.0, points_per_game_last_3=19.0,
            opponent_yards_per_game=340.0, opponent_points_per_game=24.0,
            fpi=-1.0, fpi_offense=-0.5, fpi_defense=-0.5,
        ),
        make_stats("NE", 2024, opponent_yards_per_game=350.0, opponent_points_per_game=22.0),
        make_stats("KC", 2023, yards_per_game=380.0),
        make_stats("BUF", 2023, yards_per_game=360.0),
    ])
    db_session.commit()
    return db_session
