"""
HTTP API tests
Health, analysis, quick check and history endpoints
"""

PHISHING_EMAIL = "From: service@paypal-secure.tk\nSubject: Account notice\n\nHello"


# ===== HEALTH =====

def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"
    assert data["uptime_seconds"] >= 0


def test_status_after_startup(client):
    data = client.get("/api/status").json()

    assert data["initialized"] is True
    assert data["rule_tables"]["shorteners"] >= 9
    assert data["history_entries"] == 0


def test_security_headers(client):
    response = client.get("/api/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


# ===== EMAIL ANALYSIS =====

def test_analyze_email(client):
    response = client.post("/api/analyze/email", json={"content": PHISHING_EMAIL})

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 15
    assert data["level"] == "danger"
    assert data["subject_type"] == "email"
    assert [f["type"] for f in data["flags"]] == ["High-Risk Domain", "Domain Impersonation"]
    assert data["flags"][0]["penalty"] == 35
    assert data["severity_counts"] == {"low": 0, "medium": 0, "high": 2}
    assert data["domain_info"] is None
    assert data["history_id"]
    assert data["email_metadata"]["sender"] == "service@paypal-secure.tk"
    assert data["email_metadata"]["subject"] == "Account notice"


def test_analyze_email_rejects_blank(client):
    response = client.post("/api/analyze/email", json={"content": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Email content cannot be empty"


def test_analyze_email_rejects_null_byte(client):
    response = client.post("/api/analyze/email", json={"content": "hello\x00world"})
    assert response.status_code == 400


def test_analyze_email_requires_content(client):
    response = client.post("/api/analyze/email", json={})
    assert response.status_code == 422


# ===== URL ANALYSIS =====

def test_analyze_url(client):
    response = client.post("/api/analyze/url", json={"url": "http://example.com"})

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 60
    assert data["level"] == "suspicious"
    assert data["flags"][0]["type"] == "Insecure Connection"
    assert data["domain_info"]["domain"] == "example.com"
    assert data["domain_info"]["ssl"] is False
    assert data["email_metadata"] is None


def test_malformed_url_is_scored_not_rejected(client):
    response = client.post("/api/analyze/url", json={"url": "not a url"})

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 0
    assert data["level"] == "danger"
    assert [f["type"] for f in data["flags"]] == ["Invalid URL Format"]


def test_analyze_url_rejects_blank(client):
    response = client.post("/api/analyze/url", json={"url": ""})

    assert response.status_code == 400
    assert response.json()["detail"] == "URL cannot be empty"


# ===== QUICK CHECK =====

def test_quick_check(client):
    response = client.post("/api/analyze/quick-check", json={"value": "admin@updatemybank.ru"})

    assert response.status_code == 200
    assert response.json() == {
        "is_email": True,
        "verdict": "fraudulent",
        "message": "Suspicious email address!",
    }


def test_quick_check_rejects_blank(client):
    response = client.post("/api/analyze/quick-check", json={"value": " "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Value cannot be empty"


# ===== HISTORY =====

def test_history_records_analyses_newest_first(client):
    client.post("/api/analyze/email", json={"content": PHISHING_EMAIL})
    client.post("/api/analyze/url", json={"url": "example.com"})
    client.post("/api/analyze/quick-check", json={"value": "example.com"})

    data = client.get("/api/history").json()

    assert data["total"] == 2
    assert data["capacity"] == 10
    assert [e["type"] for e in data["entries"]] == ["url", "email"]
    assert data["entries"][0]["truncated_content"] == "example.com"
    assert data["entries"][0]["score"] == 90
    assert data["entries"][1]["flag_count"] == 2
    assert data["entries"][1]["truncated_content"].endswith("...")


def test_history_limit(client):
    for url in ("a.com", "b.com", "c.com"):
        client.post("/api/analyze/url", json={"url": url})

    data = client.get("/api/history", params={"limit": 1}).json()

    assert [e["truncated_content"] for e in data["entries"]] == ["c.com"]
    assert data["total"] == 3


def test_history_id_matches_entry(client):
    history_id = client.post("/api/analyze/url", json={"url": "example.com"}).json()["history_id"]
    entries = client.get("/api/history").json()["entries"]
    assert entries[0]["id"] == history_id


def test_clear_history(client):
    client.post("/api/analyze/url", json={"url": "example.com"})

    response = client.delete("/api/history")

    assert response.status_code == 200
    assert response.json() == {"removed": 1}
    assert client.get("/api/history").json()["total"] == 0
