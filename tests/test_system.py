"""Tests for GET /health and GET /robots.txt."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["store"] == "memory"
    assert data["methods"] == ["Method 1", "Method 2", "Method 3"]


def test_health_reports_redis_store(client, mock_redis):
    assert client.get("/health").json()["store"] == "redis"


def test_robots_txt(client):
    response = client.get("/robots.txt")
    assert response.status_code == 200
    assert "User-agent: *" in response.text
    assert "Disallow: /" in response.text
