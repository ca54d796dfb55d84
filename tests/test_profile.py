def test_profile_created_on_first_access(client, alice):
    r = client.get("/api/profile", headers=alice)
    assert r.status_code == 200
    body = r.json()
    assert body["userId"] == "user-alice"
    assert body["role"] == "student"
    assert body["dailyStudyTarget"] == 120

    again = client.get("/api/profile", headers=alice).json()
    assert again["id"] == body["id"]


def test_update_preferences(client, alice):
    r = client.patch(
        "/api/profile",
        json={"studyGoal": "Pass finals", "preferredSubjects": "Math, Physics", "dailyStudyTarget": 90},
        headers=alice,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["studyGoal"] == "Pass finals"
    assert body["dailyStudyTarget"] == 90
    assert body["role"] == "student"

    r = client.patch("/api/profile", json={"dailyStudyTarget": 0}, headers=alice)
    assert r.status_code == 400


def test_role_is_not_self_assignable(client, alice):
    r = client.patch("/api/profile", json={"role": "admin"}, headers=alice)
    assert r.status_code == 200
    assert r.json()["role"] == "student"


def test_current_user(client):
    headers = {
        "X-Auth-Request-User": "user-carol",
        "X-Auth-Request-Email": "carol@example.com",
        "X-Auth-Request-Preferred-Username": "Carol",
    }
    r = client.get("/api/auth/user", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == "user-carol"
    assert r.json()["name"] == "Carol"

    headers["X-Auth-Request-Preferred-Username"] = "Carol D."
    assert client.get("/api/auth/user", headers=headers).json()["name"] == "Carol D."


def test_missing_claim_headers_keep_stored_values(client):
    headers = {
        "X-Auth-Request-User": "user-dana",
        "X-Auth-Request-Email": "dana@example.com",
        "X-Auth-Request-Preferred-Username": "Dana",
        "X-Auth-Request-Picture": "https://img.example.com/dana.png",
    }
    client.get("/api/auth/user", headers=headers)

    r = client.get("/api/auth/user", headers={"X-Auth-Request-User": "user-dana"})
    assert r.status_code == 200
    body = r.json()
    assert body["email"] == "dana@example.com"
    assert body["name"] == "Dana"
    assert body["image"] == "https://img.example.com/dana.png"


def test_blank_identity_header_is_unauthorized(client):
    r = client.get("/api/profile", headers={"X-Auth-Request-User": "   "})
    assert r.status_code == 401


def test_health_endpoints(client):
    assert client.get("/healthz").json()["ok"] is True
    assert client.get("/debug/llm").json()["has_key"] is False
