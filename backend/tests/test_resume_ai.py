import json


ANALYSIS = {
    "atsScore": 75,
    "keywords": {"score": 80, "found": ["python"], "missing": ["docker"]},
    "grammar": {"score": 88, "issues": []},
    "formatting": {"score": 64, "suggestions": ["Use consistent dates"]},
}


def test_generate_resume(client, fake_gateway):
    fake_gateway.reply_content("JANE DOE\nPROFESSIONAL SUMMARY\nEngineer")
    body = {
        "type": "generate-resume",
        "data": {"fullName": "Jane Doe", "email": "jane@example.com", "experiences": [], "education": []},
    }
    r = client.post("/resume-ai", json=body)
    assert r.status_code == 200
    assert r.json() == {"result": "JANE DOE\nPROFESSIONAL SUMMARY\nEngineer"}

    sent = fake_gateway.calls[0]["json"]
    assert sent["model"] == "google/gemini-2.5-flash"
    assert sent["messages"][0]["role"] == "system"
    assert "Name: Jane Doe" in sent["messages"][1]["content"]


def test_analyze_resume_fenced_json(client, fake_gateway):
    fake_gateway.reply_content("```json\n" + json.dumps(ANALYSIS) + "\n```")
    r = client.post("/resume-ai", json={"type": "analyze-resume", "data": {"resumeText": "Jane"}})
    assert r.status_code == 200
    result = r.json()["result"]
    assert result["atsScore"] == 75
    assert result["formatting"]["suggestions"] == ["Use consistent dates"]


def test_analyze_resume_raw_fallback(client, fake_gateway):
    fake_gateway.reply_content("Sorry, I cannot comply")
    r = client.post("/resume-ai", json={"type": "analyze-resume", "data": {"resumeText": "Jane"}})
    assert r.status_code == 200
    assert r.json() == {"result": "Sorry, I cannot comply"}


def test_cover_letter_with_missing_optional_fields(client, fake_gateway):
    fake_gateway.reply_content("Dear Hiring Manager,")
    body = {
        "type": "generate-cover-letter",
        "data": {"fullName": "Jane Doe", "jobTitle": "Engineer", "companyName": "Acme"},
    }
    r = client.post("/resume-ai", json=body)
    assert r.status_code == 200
    assert r.json() == {"result": "Dear Hiring Manager,"}
    user_prompt = fake_gateway.calls[0]["json"]["messages"][1]["content"]
    assert user_prompt.count("Not provided") == 3


def test_unknown_type_is_500(client, fake_gateway):
    r = client.post("/resume-ai", json={"type": "write-poem", "data": {}})
    assert r.status_code == 500
    assert r.json() == {"error": "Unknown request type: write-poem"}
    assert fake_gateway.calls == []


def test_photo_kind_is_not_served_here(client, fake_gateway):
    r = client.post("/resume-ai", json={"type": "generate-photo", "data": {}})
    assert r.status_code == 500
    assert "/generate-photo" in r.json()["error"]


def test_rate_limited(client, fake_gateway):
    fake_gateway.reply(429, text="Too Many Requests")
    r = client.post("/resume-ai", json={"type": "generate-resume", "data": {"fullName": "J"}})
    assert r.status_code == 429
    assert "Rate limit" in r.json()["error"]


def test_credits_depleted(client, fake_gateway):
    fake_gateway.reply(402, {"error": {"message": "Payment required"}})
    r = client.post("/resume-ai", json={"type": "generate-resume", "data": {"fullName": "J"}})
    assert r.status_code == 402
    assert "credits" in r.json()["error"]


def test_other_gateway_failure(client, fake_gateway):
    fake_gateway.reply(503, text="upstream down")
    r = client.post("/resume-ai", json={"type": "generate-resume", "data": {"fullName": "J"}})
    assert r.status_code == 500
    assert r.json() == {"error": "AI Gateway error: 503"}


def test_empty_completion_is_500(client, fake_gateway):
    fake_gateway.reply(200, {"choices": []})
    r = client.post("/resume-ai", json={"type": "generate-resume", "data": {"fullName": "J"}})
    assert r.status_code == 500
    assert "error" in r.json()


def test_missing_credential(client, fake_gateway, monkeypatch):
    monkeypatch.delenv("AI_GATEWAY_API_KEY")
    r = client.post("/resume-ai", json={"type": "generate-resume", "data": {"fullName": "J"}})
    assert r.status_code == 500
    assert "AI_GATEWAY_API_KEY" in r.json()["error"]
    assert fake_gateway.calls == []


def test_malformed_body_uses_error_shape(client, fake_gateway):
    r = client.post("/resume-ai", json={"data": {}})
    assert r.status_code == 500
    assert r.json()["error"].startswith("Invalid request body")


def test_preflight(client):
    r = client.options("/resume-ai")
    assert r.status_code == 200
    assert r.content == b""
    assert r.headers["access-control-allow-origin"] == "*"
    assert "content-type" in r.headers["access-control-allow-headers"]


def test_browser_preflight_is_allowed(client):
    r = client.options(
        "/resume-ai",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"


def test_service_can_be_swapped(client, monkeypatch):
    from careerdocs.api import routes_resume_ai

    class FakeAIService:
        async def generate(self, kind, data):
            return {"result": f"{kind}:{data['fullName']}"}

    monkeypatch.setattr(routes_resume_ai, "get_ai_service", lambda: FakeAIService())
    r = client.post("/resume-ai", json={"type": "generate-resume", "data": {"fullName": "Ann"}})
    assert r.status_code == 200
    assert r.json() == {"result": "generate-resume:Ann"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_resume_accepts_null_lists(client, fake_gateway):
    fake_gateway.reply_content("JANE DOE")
    body = {
        "type": "generate-resume",
        "data": {"fullName": "Jane Doe", "email": "jane@example.com", "experiences": None, "education": None},
    }
    r = client.post("/resume-ai", json=body)
    assert r.status_code == 200
    user_prompt = fake_gateway.calls[0]["json"]["messages"][1]["content"]
    assert "No experience provided" in user_prompt
    assert "No education provided" in user_prompt


def test_resume_accepts_null_entry_fields_and_numeric_year(client, fake_gateway):
    fake_gateway.reply_content("JANE DOE")
    body = {
        "type": "generate-resume",
        "data": {
            "fullName": "Jane Doe",
            "phone": None,
            "style": None,
            "experiences": [{"title": "Engineer", "company": "Acme", "duration": None, "description": None}],
            "education": [{"degree": "BSc", "school": "State U", "year": 2019}],
        },
    }
    r = client.post("/resume-ai", json=body)
    assert r.status_code == 200
    user_prompt = fake_gateway.calls[0]["json"]["messages"][1]["content"]
    assert "- Engineer at Acme ()" in user_prompt
    assert "- BSc from State U (2019)" in user_prompt
    assert "Phone: Not provided" in user_prompt
    assert "Style: professional" in user_prompt
    assert "None" not in user_prompt


def test_cover_letter_accepts_null_fields(client, fake_gateway):
    fake_gateway.reply_content("Dear Hiring Manager,")
    body = {
        "type": "generate-cover-letter",
        "data": {"fullName": "Jane Doe", "jobTitle": None, "companyName": "Acme", "skills": None},
    }
    r = client.post("/resume-ai", json=body)
    assert r.status_code == 200
    user_prompt = fake_gateway.calls[0]["json"]["messages"][1]["content"]
    assert "Job Title: \n" in user_prompt
    assert "Key Skills: Not provided" in user_prompt


def test_error_reply_honours_restricted_origins(client, fake_gateway, monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://allowed.example")
    r = client.post("/resume-ai", json={"type": "write-poem", "data": {}})
    assert r.status_code == 500
    assert "access-control-allow-origin" not in r.headers

    r = client.options("/resume-ai")
    assert "access-control-allow-origin" not in r.headers
    assert "content-type" in r.headers["access-control-allow-headers"]


def test_cors_headers_echo_allowed_origin(monkeypatch):
    from careerdocs.api.common import cors_headers

    monkeypatch.setenv("CORS_ORIGINS", "https://allowed.example,https://other.example")
    headers = cors_headers("https://allowed.example")
    assert headers["Access-Control-Allow-Origin"] == "https://allowed.example"
    assert headers["Vary"] == "Origin"
    assert "Access-Control-Allow-Origin" not in cors_headers("https://evil.example")

    monkeypatch.setenv("CORS_ORIGINS", "*")
    assert cors_headers("https://evil.example")["Access-Control-Allow-Origin"] == "*"
