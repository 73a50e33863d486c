from fastapi.testclient import TestClient

from hpi_service.api import create_app
from hpi_service.sources import FixtureHpiSource


class _StaticSource:
    def __init__(self, payload):
        self.payload = payload

    async def fetch(self, registration):
        return self.payload


def _client(monkeypatch, source=None):
    monkeypatch.setenv("ONEAUTOAPI_USE_MOCK", "true")
    monkeypatch.setenv("LOG_FORMAT", "text")
    return TestClient(create_app(data_source=source))


def test_health(monkeypatch):
    with _client(monkeypatch) as client:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


def test_hpi_check_clean_fixture(monkeypatch):
    with _client(monkeypatch) as client:
        resp = client.post("/hpi-checks", json={"registration": "sd12 lsc"}, headers={"X-Correlation-ID": "abc123"})
        assert resp.status_code == 200
        assert resp.headers["X-Correlation-ID"] == "abc123"
        body = resp.json()
        assert body["registration"] == "SD12LSC"
        data = body["data"]
        assert data["stolen"] is False
        assert data["previousOwners"] == 2
        assert data["vehicleCheck"]["make"] == "FORD"
        assert data["riskSummary"]["overallRisk"] == "LOW"
        assert data["comprehensiveData"]["vehicleInfo"]["registration"] == "SD12LSC"


def test_hpi_check_default_fixture_is_high_risk(monkeypatch):
    with _client(monkeypatch, FixtureHpiSource()) as client:
        resp = client.post("/hpi-checks", json={"registration": "AB12CDE"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["stolen"] is True
        assert data["writeOff"] is True
        assert data["taxStatus"] == "SORN"
        assert data["riskSummary"]["overallRisk"] == "HIGH"
        assert data["riskSummary"]["warningFlags"][0] == "VEHICLE REPORTED STOLEN"

        metrics = client.get("/metrics").json()
        assert metrics["counters"]["checks_risk_high"] >= 1


def test_hpi_check_upstream_failure(monkeypatch):
    source = _StaticSource({"success": False, "error": "OneAuto API error 503"})
    with _client(monkeypatch, source) as client:
        resp = client.post("/hpi-checks", json={"registration": "SD12LSC"})
        assert resp.status_code == 502
        body = resp.json()
        assert body["status"] == "check_failed"
        assert body["error"] == "OneAuto API error 503"


def test_hpi_check_malformed_upstream(monkeypatch):
    source = _StaticSource({"success": True, "result": {"vehicle_registration_mark": "SD12LSC"}})
    with _client(monkeypatch, source) as client:
        resp = client.post("/hpi-checks", json={"registration": "SD12LSC"})
        assert resp.status_code == 422
        assert resp.json()["field"] == "vehicle_identification_number"


def test_hpi_check_blank_registration(monkeypatch):
    with _client(monkeypatch) as client:
        resp = client.post("/hpi-checks", json={"registration": "   "})
        assert resp.status_code == 422


def test_parse_endpoint(monkeypatch, make_response):
    with _client(monkeypatch) as client:
        resp = client.post("/hpi-checks/parse", json=make_response(
            keeper_data_items=[{"date_last_updated": "2024-01-01", "number_previous_keepers": 6}],
        ))
        assert resp.status_code == 200
        body = resp.json()
        assert body["registration"] == "SD12LSC"
        assert body["report"]["ownershipHistory"]["numberOfPreviousKeepers"] == 6
        assert body["riskSummary"]["score"] == 15
        assert body["riskSummary"]["warningFlags"] == ["HIGH NUMBER OF PREVIOUS OWNERS (6)"]


def test_parse_endpoint_rejects_unsuccessful_envelope(monkeypatch):
    with _client(monkeypatch) as client:
        resp = client.post("/hpi-checks/parse", json={"success": False})
        assert resp.status_code == 400
        assert resp.json()["success"] is False


def test_hpi_check_write_off_fixture(monkeypatch):
    with _client(monkeypatch) as client:
        resp = client.post("/hpi-checks", json={"registration": "TEST123"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["writeOff"] is True
        assert data["stolen"] is False
        assert data["previousOwners"] == 4
        assert data["riskSummary"]["score"] == 105
        assert data["riskSummary"]["overallRisk"] == "HIGH"


def test_hpi_check_rejects_path_like_registration(monkeypatch):
    with _client(monkeypatch, FixtureHpiSource()) as client:
        resp = client.post("/hpi-checks", json={"registration": "../sd12lsc"})
        assert resp.status_code == 422


def test_latency_samples_are_bounded():
    from hpi_service.api import _latencies

    assert _latencies.maxlen is not None
