from conftest import register


class TestAuth:
    def test_register_then_me(self, client):
        headers = register(client, email="Ann@Example.com")
        resp = client.get("/api/v1/auth/me", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["email"] == "ann@example.com"

    def test_register_creates_default_preferences(self, client):
        headers = register(client)
        resp = client.get("/api/v1/preferences/", headers=headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["dietary_preferences"] == []
        assert body["allergies"] == []
        assert body["budget"] == 100.0

    def test_duplicate_email_rejected(self, client):
        register(client)
        resp = client.post("/api/v1/auth/register", json={
            "email": "SHOPPER@example.com", "password": "another1",
        })
        assert resp.status_code == 400

    def test_login(self, client):
        register(client)
        ok = client.post("/api/v1/auth/login", json={
            "email": "shopper@example.com", "password": "secret123",
        })
        assert ok.status_code == 200
        assert ok.json()["token_type"] == "bearer"

        bad = client.post("/api/v1/auth/login", json={
            "email": "shopper@example.com", "password": "wrong-pass",
        })
        assert bad.status_code == 401

    def test_refresh_issues_new_tokens(self, client):
        register(client)
        tokens = client.post("/api/v1/auth/login", json={
            "email": "shopper@example.com", "password": "secret123",
        }).json()
        resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert resp.status_code == 200
        new_access = resp.json()["access_token"]
        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {new_access}"})
        assert me.status_code == 200

    def test_access_token_is_not_a_refresh_token(self, client):
        register(client)
        tokens = client.post("/api/v1/auth/login", json={
            "email": "shopper@example.com", "password": "secret123",
        }).json()
        resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
        assert resp.status_code == 401

    def test_protected_routes_need_a_token(self, client):
        assert client.get("/api/v1/items/").status_code == 401
        bad = {"Authorization": "Bearer not-a-jwt"}
        assert client.get("/api/v1/items/", headers=bad).status_code == 401

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
