"""
Tests for the team and season-stats browsing endpoints.
"""

from fastapi.testclient import TestClient

from factories import make_stats, make_team


class TestTeamsEndpoint:

    def test_list_teams_ordered_by_name(self, client: TestClient, league):
        response = client.get("/teams")
        assert response.status_code == 200
        teams = response.json()["teams"]
        assert [t["name"] for t in teams] == [
            "Buffalo Bills", "Kansas City Chiefs", "New England Patriots",
        ]

    def test_team_fields_are_camel_case(self, client: TestClient, league):
        team = client.get("/teams").json()["teams"][1]
        assert team == {
            "id": "KC",
            "name": "Kansas City Chiefs",
            "abbreviation": "KC",
            "conference": "AFC",
            "division": "West",
            "logoUrl": "https://example.com/KC.svg",
            "primaryColor": "#000000",
            "secondaryColor": "#FFFFFF",
        }

    def test_empty(self, client: TestClient):
        assert client.get("/teams").json() == {"teams": []}

    def test_list_is_cached(self, client: TestClient, league):
        assert len(client.get("/teams").json()["teams"]) == 3
        league.add(make_team("MIA", "Miami Dolphins"))
        league.commit()
        assert len(client.get("/teams").json()["teams"]) == 3

    def test_get_team(self, client: TestClient, league):
        response = client.get("/teams/BUF")
        assert response.status_code == 200
        assert response.json()["name"] == "Buffalo Bills"

    def test_get_unknown_team(self, client: TestClient, league):
        response = client.get("/teams/XXX")
        assert response.status_code == 404
        assert response.json()["detail"] == "Team not found: XXX"


class TestTeamStatsEndpoint:

    def test_defaults_to_latest_year(self, client: TestClient, league):
        data = client.get("/team-stats").json()
        assert data["year"] == 2024
        assert data["availableYears"] == [2024, 2023]
        assert [row["teamId"] for row in data["data"]] == ["BUF", "KC", "NE"]

    def test_specific_year(self, client: TestClient, league):
        data = client.get("/team-stats", params={"year": 2023}).json()
        assert data["year"] == 2023
        assert [row["teamId"] for row in data["data"]] == ["BUF", "KC"]
        kc = data["data"][1]
        assert kc["yardsPerGame"] == 380.0
        assert kc["team"]["name"] == "Kansas City Chiefs"

    def test_row_fields(self, client: TestClient, league):
        row = client.get("/team-stats", params={"year": 2024}).json()["data"][1]
        assert row["yardsPerGameLast3"] == 420.0
        assert row["opponentYardsPerGame"] == 360.0
        assert row["fpiOffense"] == 3.0
        assert row["passingYardsPerGame"] is None

    def test_duplicate_rows_collapsed(self, client: TestClient, league):
        league.add(make_stats("NE", 2024, yards_per_game=999.0))
        league.commit()
        rows = client.get("/team-stats", params={"year": 2024}).json()["data"]
        ne_rows = [row for row in rows if row["teamId"] == "NE"]
        assert len(ne_rows) == 1
        assert ne_rows[0]["yardsPerGame"] == 350.0

    def test_unknown_year(self, client: TestClient, league):
        data = client.get("/team-stats", params={"year": 1999}).json()
        assert data == {"data": [], "availableYears": [2024, 2023], "year": 1999}

    def test_no_data(self, client: TestClient):
        assert client.get("/team-stats").json() == {"data": [], "availableYears": [], "year": None}

    def test_invalid_year(self, client: TestClient):
        assert client.get("/team-stats", params={"year": "abc"}).status_code == 422
