"""API tests for todo endpoints."""


class TestTodoAPI:
    """Test suite for Todo API endpoints."""

    def create(self, client, title="Learn asyncpg", description="for the todo app") -> int:
        response = client.post("/todo/", json={"title": title, "description": description})
        assert response.status_code == 201
        return response.json()

    def test_get_todos_empty(self, client) -> None:
        response = client.get("/todo/")
        assert response.status_code == 200
        assert response.json() == []

    def test_create_returns_id(self, client) -> None:
        todo_id = self.create(client)
        assert isinstance(todo_id, int)
        assert todo_id > 0

    def test_get_todo_by_id(self, client) -> None:
        todo_id = self.create(client)

        response = client.get(f"/todo/{todo_id}")
        assert response.status_code == 200
        todo = response.json()
        assert todo["id"] == todo_id
        assert todo["title"] == "Learn asyncpg"
        assert todo["description"] == "for the todo app"
        assert todo["done"] is False
        assert isinstance(todo["created_at"], str)

    def test_get_todos_lists_created(self, client) -> None:
        first = self.create(client, title="one")
        second = self.create(client, title="two")
        todos = client.get("/todo/").json()
        assert [todo["id"] for todo in todos] == [first, second]

    def test_create_accepts_empty_strings(self, client) -> None:
        todo_id = self.create(client, title="", description="")
        assert client.get(f"/todo/{todo_id}").json()["title"] == ""

    def test_create_requires_both_fields(self, client) -> None:
        response = client.post("/todo/", json={"title": "No description"})
        assert response.status_code == 422

    def test_get_nonexistent_todo(self, client) -> None:
        response = client.get("/todo/99999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Todo not found"}

    def test_update_only_present_fields(self, client) -> None:
        todo_id = self.create(client)
        before = client.get(f"/todo/{todo_id}").json()

        response = client.put(f"/todo/{todo_id}", json={"done": True})
        assert response.status_code == 200
        assert response.json() == todo_id

        after = client.get(f"/todo/{todo_id}").json()
        assert after == {**before, "done": True}

    def test_update_with_empty_body_leaves_todo_unchanged(self, client) -> None:
        todo_id = self.create(client)
        before = client.get(f"/todo/{todo_id}").json()

        response = client.put(f"/todo/{todo_id}", json={})
        assert response.status_code == 200
        assert client.get(f"/todo/{todo_id}").json() == before

    def test_explicit_null_keeps_stored_value(self, client) -> None:
        todo_id = self.create(client)
        client.put(f"/todo/{todo_id}", json={"title": None, "description": "changed"})
        todo = client.get(f"/todo/{todo_id}").json()
        assert todo["title"] == "Learn asyncpg"
        assert todo["description"] == "changed"

    def test_update_nonexistent_todo(self, client) -> None:
        response = client.put("/todo/99999", json={"title": "x"})
        assert response.status_code == 404

    def test_delete_todo(self, client) -> None:
        todo_id = self.create(client)

        response = client.delete(f"/todo/{todo_id}")
        assert response.status_code == 200
        assert response.json() == todo_id
        assert client.get(f"/todo/{todo_id}").status_code == 404

    def test_delete_nonexistent_todo(self, client) -> None:
        response = client.delete("/todo/99999")
        assert response.status_code == 404

    def test_non_integer_id_is_rejected(self, client) -> None:
        assert client.get("/todo/abc").status_code == 422

    def test_id_beyond_bigint_is_rejected(self, client) -> None:
        too_big = 2**63
        assert client.get(f"/todo/{too_big}").status_code == 422
        assert client.put(f"/todo/{too_big}", json={"done": True}).status_code == 422
        assert client.delete(f"/todo/{too_big}").status_code == 422

    def test_largest_bigint_id_is_not_found(self, client) -> None:
        assert client.get(f"/todo/{2**63 - 1}").status_code == 404

    def test_non_positive_id_is_rejected(self, client) -> None:
        assert client.get("/todo/0").status_code == 422
        assert client.delete("/todo/-1").status_code == 422

    def test_create_rejects_nul_characters(self, client) -> None:
        response = client.post("/todo/", json={"title": "a\u0000b", "description": "d"})
        assert response.status_code == 422
        response = client.post("/todo/", json={"title": "t", "description": "\u0000"})
        assert response.status_code == 422
        assert client.get("/todo/").json() == []

    def test_update_rejects_nul_characters(self, client) -> None:
        todo_id = self.create(client)
        before = client.get(f"/todo/{todo_id}").json()
        response = client.put(f"/todo/{todo_id}", json={"description": "x\u0000"})
        assert response.status_code == 422
        assert client.get(f"/todo/{todo_id}").json() == before
