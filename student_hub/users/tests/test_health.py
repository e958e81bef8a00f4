import pytest


@pytest.mark.django_db
def test_health_reports_database(client):
    response = client.get("/health/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["components"]["db"]["ok"] is True
