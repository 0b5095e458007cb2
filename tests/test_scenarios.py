def test_register_login_post_like_scenario(client):
    resp = client.post("/api/auth/register", json={"username": "alice", "email": "a@x.com", "password": "secret"})
    assert resp.status_code == 201

    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret"})
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    resp = client.post("/api/posts", json={"stockSymbol": "AAPL", "title": "t", "description": "d"}, headers=headers)
    assert resp.json()["success"] is True
    post_id = resp.json()["postId"]

    assert client.post(f"/api/posts/{post_id}/like", headers=headers).status_code == 200
    resp = client.post(f"/api/posts/{post_id}/like", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "AlreadyLiked"

    assert client.get(f"/api/posts/{post_id}").json()["likesCount"] == 1


def test_other_user_cannot_delete_post_scenario(client, make_user, make_post):
    alice = make_user("alice")
    bob = make_user("bob")
    post_id = make_post(alice)

    resp = client.delete(f"/api/posts/{post_id}", headers=bob["headers"])
    assert resp.status_code in (401, 403)
    assert resp.json()["error"] == "Forbidden"

    resp = client.get(f"/api/posts/{post_id}")
    assert resp.status_code == 200
    assert resp.json()["id"] == post_id
