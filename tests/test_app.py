"""Tests for the Flask API routes."""

import pytest

import app as server


@pytest.fixture
def client(tmp_path):
    server.app.config.update(TESTING=True, EXPORT_DIR=str(tmp_path))
    with server.app.test_client() as c:
        yield c


BASE_INPUTS = {
    "teamSize": 10,
    "avgSalary": 100000,
    "hoursPerWeek": 20,
    "errorRate": 0.10,
    "industry": "Technology / Software",
    "processType": "Document Processing",
}


class TestSanitize:
    def test_nan_and_collections(self):
        out = server._sanitize_for_json({"a": float("nan"), "b": {2, 1}, "c": (1, float("inf")), "d": 1.5})
        assert out == {"a": None, "b": [1, 2], "c": [1, None], "d": 1.5}


class TestReadRoutes:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ok"

    def test_benchmarks(self, client):
        data = client.get("/api/benchmarks").get_json()
        assert "Technology / Software" in data["industries"]
        assert data["constants"]["dcfYears"] == 5
        assert len(data["sources"]) > 0

    def test_archetypes(self, client):
        data = client.get("/api/archetypes").get_json()
        assert len(data) == 12

    def test_archetype_detail(self, client):
        data = client.get("/api/archetypes/hr-talent-ai").get_json()
        assert len(data["inputs"]) == 8
        assert all("formula" in m for m in data["mappings"])

    def test_defaults(self, client):
        data = client.get("/api/archetypes/internal-process-automation/defaults").get_json()
        assert data["processVolume"] == 5000

    def test_unknown_archetype_is_404(self, client):
        assert client.get("/api/archetypes/nope/defaults").status_code == 404
        assert client.post("/api/archetypes/nope/map", json={}).status_code == 404

    def test_classification_questions(self, client):
        data = client.get("/api/classify").get_json()
        assert len(data["questions"]) == 6


class TestCalculate:
    def test_full_result(self, client):
        resp = client.post("/api/calculate", json=BASE_INPUTS)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["status"] == "ok"
        assert len(data["results"]["scenarios"]["base"]["projections"]) == 5
        assert data["recommendation"]["verdict"] in ("STRONG", "MODERATE", "CAUTIOUS", "WEAK")
        assert isinstance(data["riskMitigations"], list)

    def test_unknown_category_is_400(self, client):
        resp = client.post("/api/calculate", json={**BASE_INPUTS, "industry": "Alchemy"})
        assert resp.status_code == 400
        assert resp.get_json()["status"] == "error"

    def test_empty_body_uses_defaults(self, client):
        assert client.post("/api/calculate", data="").status_code == 200

    def test_non_numeric_amount_is_400(self, client):
        resp = client.post("/api/calculate", json={**BASE_INPUTS, "teamSize": "ten"})
        assert resp.status_code == 400

    def test_text_readiness_and_sponsor(self, client):
        resp = client.post("/api/calculate", json={**BASE_INPUTS, "dataReadiness": "2", "execSponsor": "false"})
        assert resp.status_code == 200
        risks = [m["risk"] for m in resp.get_json()["riskMitigations"]]
        assert risks == ["Poor data readiness", "No executive sponsor"]

    def test_overflowing_archetype_input_is_not_a_server_error(self, client):
        body = {**BASE_INPUTS, "projectArchetype": "internal-process-automation",
                "archetypeInputs": {"errorRate": 10 ** 400}}
        resp = client.post("/api/calculate", json=body)
        assert resp.status_code == 200
        assert "errorRate" not in resp.get_json()["results"]["archetypeImpact"]["overrides"]


class TestArchetypeRoutes:
    def test_validate_ok(self, client):
        resp = client.post("/api/archetypes/customer-facing-ai/validate", json={"churnRate": 0.2})
        assert resp.status_code == 200
        assert resp.get_json()["errors"] == []

    def test_validate_errors(self, client):
        resp = client.post("/api/archetypes/customer-facing-ai/validate", json={"churnRate": 2})
        assert resp.status_code == 400
        assert resp.get_json()["errors"][0]["field"] == "churnRate"

    def test_validate_int_too_large(self, client):
        resp = client.post("/api/archetypes/internal-process-automation/validate", json={"errorRate": 10 ** 400})
        assert resp.status_code == 400
        assert resp.get_json()["errors"][0]["message"].endswith("must be a number")

    def test_map(self, client):
        data = client.post("/api/archetypes/internal-process-automation/map", json={}).get_json()
        assert data["overrides"]["hoursPerWeek"] == 289

    def test_classify(self, client):
        answers = {"primaryGoal": 5, "customerFacing": 1, "dataComplexity": 4,
                   "processVolume": 5, "regulatoryBurden": 2, "technicalTeam": 5}
        data = client.post("/api/classify", json={"answers": answers}).get_json()
        assert data["matches"][0]["id"] == "it-operations-aiops"
        assert data["matches"][0]["score"] == 30


class TestExport:
    def test_workbook_download(self, client, tmp_path):
        resp = client.post("/api/export", json=BASE_INPUTS)
        assert resp.status_code == 200
        assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        assert (tmp_path / "roi_navigator.xlsx").exists()
        resp.close()

    def test_bad_inputs_are_400(self, client):
        resp = client.post("/api/export", json={"companySize": "Galactic"})
        assert resp.status_code == 400
