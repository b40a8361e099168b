from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from rtp_report.core.config import Settings, get_settings
from rtp_report.db.dependencies import get_db_session


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_endpoint(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "RTP Hospital Report", "status": "running"}


def test_readiness_probes_database(client: TestClient) -> None:
    response = client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "data_source": "real"}


def test_readiness_reports_synthetic_source(client: TestClient) -> None:
    client.app.dependency_overrides[get_settings] = lambda: Settings(data_source="synthetic")

    response = client.get("/api/v1/health/ready")

    assert response.json()["data_source"] == "synthetic"


class _BrokenSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_readiness_returns_503_when_database_fails(client: TestClient) -> None:
    client.app.dependency_overrides[get_db_session] = lambda: _BrokenSession()

    response = client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json()["detail"] == "Report data store is unavailable."
