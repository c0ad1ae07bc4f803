# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

import pytest
from fastapi import status

from tests.conftest import SCENARIO_SCORES, SECOND_SCORES


def evaluator_headers(n):
    return {"X-Evaluator-Email": f"judge{n}@fair.org", "X-Evaluator-Code": str(n) * 6}


@pytest.fixture
def seeded_client(client, admin_headers):
    """Client whose store holds 3 projects, 4 evaluators and one panel."""
    for title in ("Solar Dryer", "Water Filter", "Smart Bin"):
        response = client.post("/api/v1/projects", json={"title": title, "category": "Science"}, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
    for n in range(1, 5):
        response = client.post(
            "/api/v1/evaluators",
            json={"name": f"Judge {n}", "email": f"judge{n}@fair.org", "code": str(n) * 6},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
    response = client.post(
        "/api/v1/panels",
        json={"evaluatorIds": ["EVAL-0001", "EVAL-0002", "EVAL-0003"], "projectIds": ["PRJ-0001", "PRJ-0002"]},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    return client


# ROOT AND HEALTH ENDPOINT TESTS


class TestRootAndHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["remote_store"] == "not configured"
        assert data["last_sync"] is None


# ADMIN ACCESS TESTS


class TestAdminAccess:

    @pytest.mark.parametrize(
        "path",
        ["/api/v1/projects", "/api/v1/evaluators", "/api/v1/panels", "/api/v1/scores/rankings", "/api/v1/sync/status"],
    )
    def test_missing_passcode(self, client, path):
        response = client.get(path)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_wrong_passcode(self, client):
        response = client.get("/api/v1/projects", headers={"X-Admin-Passcode": "nope"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid admin passcode"

    def test_branding_is_public(self, client):
        response = client.get("/api/v1/branding")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["eventTitle"] == "Think Big Science Carnival 2025"
        assert "adminPass" not in data


# SETTINGS ENDPOINT TESTS


class TestSettingsEndpoints:

    def test_update_and_reset_branding(self, client, admin_headers):
        response = client.patch("/api/v1/settings", json={"eventTitle": "Spring Fair"}, headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert client.get("/api/v1/branding").json()["eventTitle"] == "Spring Fair"

        response = client.post("/api/v1/settings/reset-branding", headers=admin_headers)
        assert response.json()["eventTitle"] == "Think Big Science Carnival 2025"

    def test_changing_passcode(self, client, admin_headers):
        client.patch("/api/v1/settings", json={"adminPass": "new-pass-1"}, headers=admin_headers)
        assert client.get("/api/v1/settings", headers=admin_headers).status_code == status.HTTP_401_UNAUTHORIZED
        response = client.get("/api/v1/settings", headers={"X-Admin-Passcode": "new-pass-1"})
        assert response.status_code == status.HTTP_200_OK

    def test_empty_passcode_rejected(self, client, admin_headers):
        response = client.patch("/api/v1/settings", json={"adminPass": ""}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# PROJECT ENDPOINT TESTS


class TestProjectEndpoints:

    def test_crud(self, client, admin_headers):
        created = client.post("/api/v1/projects", json={"title": "Solar Dryer"}, headers=admin_headers).json()
        assert created["id"] == "PRJ-0001"

        response = client.patch(f"/api/v1/projects/{created['id']}", json={"team": "Blue"}, headers=admin_headers)
        assert response.json()["team"] == "Blue"
        assert response.json()["title"] == "Solar Dryer"

        listing = client.get("/api/v1/projects", headers=admin_headers).json()
        assert listing["total"] == 1

        response = client.delete(f"/api/v1/projects/{created['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get("/api/v1/projects", headers=admin_headers).json()["total"] == 0

    def test_missing_title(self, client, admin_headers):
        response = client.post("/api/v1/projects", json={"category": "IoT"}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Project title is required"

    def test_malformed_json(self, client, admin_headers):
        response = client.post(
            "/api/v1/projects",
            content="{not json",
            headers={**admin_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"

    def test_not_found(self, client, admin_headers):
        response = client.get("/api/v1/projects/PRJ-0404", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "PROJECT_NOT_FOUND"


# EVALUATOR ENDPOINT TESTS


class TestEvaluatorEndpoints:

    def test_generated_code(self, client, admin_headers):
        response = client.post("/api/v1/evaluators", json={"name": "Ada", "email": "ada@fair.org"}, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.json()["code"]) == 6

    def test_duplicate_email(self, seeded_client, admin_headers):
        response = seeded_client.post(
            "/api/v1/evaluators", json={"name": "Again", "email": "Judge1@fair.org"}, headers=admin_headers
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error_code"] == "DUPLICATE_ENTITY"

    def test_bad_email(self, client, admin_headers):
        response = client.post("/api/v1/evaluators", json={"name": "Ada", "email": "ada"}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"]["field"] == "email"

    def test_import(self, seeded_client, admin_headers):
        response = seeded_client.post(
            "/api/v1/evaluators/import",
            json={"csv": "name,email,expertise\nAda,ada@fair.org,Physics\nDup,judge2@fair.org,X\n"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert (data["added"], data["skipped"]) == (1, 1)
        assert data["evaluators"][0]["id"] == "EVAL-0005"

    def test_import_needs_rows(self, client, admin_headers):
        response = client.post("/api/v1/evaluators/import", json={"csv": "name,email"}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_delete_removes_from_panel(self, seeded_client, admin_headers):
        seeded_client.delete("/api/v1/evaluators/EVAL-0003", headers=admin_headers)
        panel = seeded_client.get("/api/v1/panels/PNL-0001", headers=admin_headers).json()
        assert panel["evaluatorIds"] == ["EVAL-0001", "EVAL-0002"]


# PANEL ENDPOINT TESTS


class TestPanelEndpoints:

    def test_created_panel(self, seeded_client, admin_headers):
        panel = seeded_client.get("/api/v1/panels/PNL-0001", headers=admin_headers).json()
        assert panel["name"] == "Panel 1"
        assert panel["projectIds"] == ["PRJ-0001", "PRJ-0002"]

    def test_too_few_evaluators(self, seeded_client, admin_headers):
        response = seeded_client.post(
            "/api/v1/panels",
            json={"evaluatorIds": ["EVAL-0001", "EVAL-0002"], "projectIds": ["PRJ-0003"]},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error_code"] == "PANEL_COMPOSITION"
        assert seeded_client.get("/api/v1/panels", headers=admin_headers).json()["total"] == 1

    def test_unknown_evaluator(self, seeded_client, admin_headers):
        response = seeded_client.post(
            "/api/v1/panels",
            json={"evaluatorIds": ["EVAL-0001", "EVAL-0002", "EVAL-0099"], "projectIds": ["PRJ-0003"]},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_update_and_delete(self, seeded_client, admin_headers):
        response = seeded_client.patch(
            "/api/v1/panels/PNL-0001", json={"projectIds": ["PRJ-0003"]}, headers=admin_headers
        )
        assert response.json()["projectIds"] == ["PRJ-0003"]
        assert seeded_client.delete("/api/v1/panels/PNL-0001", headers=admin_headers).status_code == 204


# EVALUATOR PORTAL TESTS


class TestEvaluatorPortal:

    def test_bad_credentials(self, seeded_client):
        response = seeded_client.get(
            "/api/v1/evaluator/me", headers={"X-Evaluator-Email": "judge1@fair.org", "X-Evaluator-Code": "000000"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_and_profile(self, seeded_client):
        me = seeded_client.get("/api/v1/evaluator/me", headers=evaluator_headers(1)).json()
        assert me["evaluator"]["id"] == "EVAL-0001"
        assert me["finalized"] is False

        response = seeded_client.patch(
            "/api/v1/evaluator/me", json={"name": "Dr. One", "expertise": "Physics"}, headers=evaluator_headers(1)
        )
        assert response.json()["name"] == "Dr. One"
        assert response.json()["code"] == "111111"

    def test_assignments(self, seeded_client):
        data = seeded_client.get("/api/v1/evaluator/assignments", headers=evaluator_headers(2)).json()
        assert [row["projectId"] for row in data["items"]] == ["PRJ-0001", "PRJ-0002"]
        assert all(row["status"] == "unstarted" for row in data["items"])
        assert data["progress"] == {"completed": 0, "total": 2, "percent": 0}

    def test_unassigned_evaluator_sees_nothing(self, seeded_client):
        data = seeded_client.get("/api/v1/evaluator/assignments", headers=evaluator_headers(4)).json()
        assert data["items"] == []

    def test_full_flow(self, seeded_client, admin_headers):
        headers = evaluator_headers(1)

        draft = seeded_client.put(
            "/api/v1/evaluator/results/PRJ-0001/draft", json={"scores": {"problem": 8}, "remark": "early"}, headers=headers
        )
        assert draft.status_code == status.HTTP_200_OK
        assert draft.json()["submitted"] is False

        review = seeded_client.post(
            "/api/v1/evaluator/results/PRJ-0001/review", json={"scores": SCENARIO_SCORES}, headers=headers
        ).json()
        assert review["total"] == 47
        assert review["complete"] is True

        submitted = seeded_client.post(
            "/api/v1/evaluator/results/PRJ-0001/submit",
            json={"scores": SCENARIO_SCORES, "remark": "Well argued"},
            headers=headers,
        )
        assert submitted.status_code == status.HTTP_200_OK
        assert submitted.json()["id"] == draft.json()["id"]
        assert submitted.json()["total"] == 47

        progress = seeded_client.get("/api/v1/evaluator/progress", headers=headers).json()
        assert progress == {"completed": 1, "total": 2, "percent": 50}

        outcome = seeded_client.post("/api/v1/evaluator/finalize", headers=headers).json()
        assert outcome["resultsFinalized"] == 1
        assert outcome["synced"] is False
        assert outcome["syncError"] == "Remote URL not configured"

        blocked = seeded_client.post(
            "/api/v1/evaluator/results/PRJ-0002/submit", json={"scores": SECOND_SCORES}, headers=headers
        )
        assert blocked.status_code == status.HTTP_409_CONFLICT
        assert blocked.json()["error_code"] == "LIFECYCLE_ERROR"

        again = seeded_client.post("/api/v1/evaluator/finalize", headers=headers).json()
        assert again["alreadyFinalized"] is True

        rankings = seeded_client.get("/api/v1/scores/rankings", headers=admin_headers).json()
        assert rankings["items"][0]["id"] == "PRJ-0001"
        assert rankings["items"][0]["averageScore"] == 47.0

    def test_incomplete_submit(self, seeded_client):
        response = seeded_client.post(
            "/api/v1/evaluator/results/PRJ-0001/submit", json={"scores": {"problem": 8}}, headers=evaluator_headers(1)
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"]["criterion"] == "originality"

    def test_out_of_range_score(self, seeded_client):
        response = seeded_client.put(
            "/api/v1/evaluator/results/PRJ-0001/draft", json={"scores": {"impact": 11}}, headers=evaluator_headers(1)
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"] == {"criterion": "impact"}

    def test_unassigned_project(self, seeded_client):
        response = seeded_client.put(
            "/api/v1/evaluator/results/PRJ-0003/draft", json={"scores": {"problem": 5}}, headers=evaluator_headers(1)
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_finalize_without_results(self, seeded_client):
        response = seeded_client.post("/api/v1/evaluator/finalize", headers=evaluator_headers(2))
        assert response.status_code == status.HTTP_409_CONFLICT


# SCORES AND EXPORTS ENDPOINT TESTS


@pytest.fixture
def scored_client(seeded_client):
    for n, scores in ((1, SCENARIO_SCORES), (2, SECOND_SCORES)):
        response = seeded_client.post(
            "/api/v1/evaluator/results/PRJ-0001/submit", json={"scores": scores}, headers=evaluator_headers(n)
        )
        assert response.status_code == status.HTTP_200_OK
    return seeded_client


class TestScoreEndpoints:

    def test_rankings(self, scored_client, admin_headers):
        data = scored_client.get("/api/v1/scores/rankings", headers=admin_headers).json()
        top = data["items"][0]
        assert data["total"] == 3
        assert top["averageScore"] == 44.0
        assert top["percentage"] == pytest.approx(73.333, abs=1e-3)

    def test_project_detail(self, scored_client, admin_headers):
        data = scored_client.get("/api/v1/scores/projects/PRJ-0001", headers=admin_headers).json()
        assert data["totalAvg"] == pytest.approx(44.0)
        assert len(data["criteria"]) == 6
        assert scored_client.get("/api/v1/scores/projects/PRJ-0404", headers=admin_headers).status_code == 404

    def test_summary_and_results(self, scored_client, admin_headers):
        summary = scored_client.get("/api/v1/scores/summary", headers=admin_headers).json()
        assert summary["resultCount"] == 2
        results = scored_client.get("/api/v1/results", headers=admin_headers).json()
        assert results["total"] == 2


class TestExportEndpoints:

    def test_results_csv(self, scored_client, admin_headers):
        response = scored_client.get("/api/v1/exports/results.csv", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="results.csv"' in response.headers["content-disposition"]
        assert response.text.splitlines()[0].startswith("id,panel,project,evaluator,total")

    def test_project_scores_csv(self, scored_client, admin_headers):
        text = scored_client.get("/api/v1/exports/project_scores.csv", headers=admin_headers).text
        assert '"44.00"' in text
        assert '"73.3%"' in text

    def test_json_dump(self, scored_client, admin_headers):
        data = scored_client.get("/api/v1/exports/data.json", headers=admin_headers).json()
        assert len(data["results"]) == 2
        assert data["panels"][0]["id"] == "PNL-0001"


# SYNC AND ADMIN ENDPOINT TESTS


class TestSyncEndpoints:

    def test_status_without_remote(self, client, admin_headers):
        data = client.get("/api/v1/sync/status", headers=admin_headers).json()
        assert data["remoteConfigured"] is False
        assert data["authenticated"] is False

    def test_bulk_without_remote(self, client, admin_headers):
        response = client.post("/api/v1/sync/bulk", json={"password": "x"}, headers=admin_headers)
        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error_code"] == "REMOTE_ERROR"

    def test_load_without_remote(self, client, admin_headers):
        data = client.post("/api/v1/sync/load", headers=admin_headers).json()
        assert data["loaded"] is False


class TestAdminEndpoints:

    def test_ids_canonical(self, seeded_client, admin_headers):
        data = seeded_client.get("/api/v1/admin/ids", headers=admin_headers).json()
        assert data["needs_migration"] is False
        report = seeded_client.post("/api/v1/admin/migrate-ids", headers=admin_headers).json()
        assert report["changed"] == 0

    def test_clear_scores(self, scored_client, admin_headers):
        data = scored_client.post("/api/v1/admin/clear-scores", headers=admin_headers).json()
        assert data["results_removed"] == 2
        assert scored_client.get("/api/v1/results", headers=admin_headers).json()["total"] == 0
        assert scored_client.get("/api/v1/projects", headers=admin_headers).json()["total"] == 3

    def test_reset(self, scored_client, admin_headers):
        assert scored_client.post("/api/v1/admin/reset", headers=admin_headers).json() == {"reset": True}
        assert scored_client.get("/api/v1/projects", headers=admin_headers).json()["total"] == 0
        assert scored_client.get("/api/v1/evaluators", headers=admin_headers).json()["total"] == 0
