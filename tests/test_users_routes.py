"""
Route tests for /api/users.
"""
from fastapi import status

from models.user import User
from services import users as user_service


NEW_USER = {"username": "alice", "email": "alice@example.com", "firstName": "Alice", "lastName": "Smith"}


class TestUserRoutes:

    def test_create_user(self, client):
        response = client.post("/api/users", json=NEW_USER)
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "alice"
        assert data["firstName"] == "Alice"
        assert data["lastName"] == "Smith"
        assert "id" in data

    def test_create_duplicate_username(self, client, test_user):
        response = client.post("/api/users", json={**NEW_USER, "username": test_user.username})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == f"Username already exists: {test_user.username}"

    def test_create_duplicate_email_case_insensitive(self, client, test_user):
        response = client.post("/api/users", json={**NEW_USER, "email": test_user.email.upper()})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Email already exists" in response.json()["detail"]

    def test_create_invalid_email(self, client):
        response = client.post("/api/users", json={**NEW_USER, "email": "not-an-email"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_missing_fields(self, client):
        response = client.post("/api/users", json={"username": "bob"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_user(self, client, test_user):
        response = client.get(f"/api/users/{test_user.id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == test_user.email

    def test_get_user_not_found(self, client):
        response = client.get("/api/users/999")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found with id: 999"

    def test_list_users(self, client, test_user, other_user):
        data = client.get("/api/users", params={"sort": "username,asc"}).json()
        assert data["totalElements"] == 2
        assert [u["username"] for u in data["content"]] == ["janedoe", "johndoe"]

    def test_search_users(self, client, test_user, other_user):
        data = client.get("/api/users/search", params={"query": "JOHN"}).json()
        assert [u["username"] for u in data["content"]] == ["johndoe"]

        data = client.get("/api/users/search", params={"query": "Doe"}).json()
        assert data["totalElements"] == 2

        data = client.get("/api/users/search", params={"query": "nobody"}).json()
        assert data["content"] == []

    def test_update_user(self, client, test_user):
        payload = {**NEW_USER, "username": test_user.username, "email": test_user.email}
        response = client.put(f"/api/users/{test_user.id}", json=payload)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["firstName"] == "Alice"

    def test_update_user_to_taken_email(self, client, test_user, other_user):
        payload = {**NEW_USER, "username": test_user.username, "email": other_user.email}
        response = client.put(f"/api/users/{test_user.id}", json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_user_not_found(self, client):
        response = client.put("/api/users/999", json=NEW_USER)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_user(self, client, other_user):
        response = client.delete(f"/api/users/{other_user.id}")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/api/users/{other_user.id}").status_code == status.HTTP_404_NOT_FOUND

    def test_delete_user_with_orders(self, client, test_user, make_order):
        make_order(test_user)
        response = client.delete(f"/api/users/{test_user.id}")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert client.get(f"/api/users/{test_user.id}").status_code == status.HTTP_200_OK

    def test_search_blank_query(self, client, test_user):
        response = client.get("/api/users/search", params={"query": "   "})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Search query must not be blank"

    def test_search_wildcards_are_literal(self, client, test_user, other_user):
        for term in ("%", "_", "j_hn"):
            data = client.get("/api/users/search", params={"query": term}).json()
            assert data["content"] == [], term


class TestUserWriteRaces:
    """Constraint violations that slip past the pre-checks still map to 400."""

    def test_duplicate_username_rejected_by_database(self, client, db, monkeypatch, test_user):
        monkeypatch.setattr(user_service, "_username_taken", lambda db, username: False)
        payload = {**NEW_USER, "username": test_user.username}
        response = client.post("/api/users", json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.json()["detail"]
        assert db.query(User).count() == 1

    def test_update_to_taken_email_rejected_by_database(self, client, monkeypatch, test_user, other_user):
        monkeypatch.setattr(user_service, "_email_taken", lambda db, email: False)
        payload = {**NEW_USER, "username": test_user.username, "email": other_user.email}
        response = client.put(f"/api/users/{test_user.id}", json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert client.get(f"/api/users/{test_user.id}").json()["email"] == "john.doe@example.com"

    def test_delete_user_with_orders_rejected_by_database(self, client, monkeypatch, test_user, make_order):
        make_order(test_user)
        monkeypatch.setattr(user_service, "_order_count", lambda db, user_id: 0)
        response = client.delete(f"/api/users/{test_user.id}")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert client.get(f"/api/users/{test_user.id}").status_code == status.HTTP_200_OK
