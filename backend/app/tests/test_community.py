"""
Tests for the community feed.
"""


def _ids(response):
    return [post["id"] for post in response.json()]


def test_feed_is_seeded_newest_first(client):
    response = client.get("/api/community/posts")
    assert response.status_code == 200
    assert _ids(response) == ["1", "2", "3"]
    assert response.json()[0]["likes"] == 24
    assert response.json()[0]["is_liked"] is False


def test_feed_filters_and_search(client):
    assert _ids(client.get("/api/community/posts", params={"filter": "trips"})) == ["1"]
    assert _ids(client.get("/api/community/posts", params={"filter": "questions"})) == ["2"]
    assert _ids(client.get("/api/community/posts", params={"filter": "tips"})) == ["3"]
    assert _ids(client.get("/api/community/posts", params={"q": "tokyo"})) == ["2"]
    assert _ids(client.get("/api/community/posts", params={"q": "emma"})) == ["3"]
    assert client.get("/api/community/posts", params={"filter": "everything"}).status_code == 422


def test_like_toggles_per_identity(client, user_headers):
    liked = client.post("/api/community/posts/2/like").json()
    assert (liked["likes"], liked["is_liked"]) == (19, True)

    seen_by_user = client.post("/api/community/posts/2/like", headers=user_headers).json()
    assert (seen_by_user["likes"], seen_by_user["is_liked"]) == (20, True)

    unliked = client.post("/api/community/posts/2/like").json()
    assert (unliked["likes"], unliked["is_liked"]) == (19, False)

    assert client.post("/api/community/posts/nope/like").status_code == 404


def test_create_post_and_comment(client, user_headers):
    response = client.post(
        "/api/community/posts",
        json={"content": "Any tips for Lisbon trams?", "location": "Lisbon, Portugal"},
        headers=user_headers
    )
    assert response.status_code == 201
    post = response.json()
    assert post["user_name"] == "Alice Walker"
    assert post["likes"] == 0
    assert _ids(client.get("/api/community/posts"))[0] == post["id"]

    response = client.post(f"/api/community/posts/{post['id']}/comments", json={"content": "Take the 28!"})
    assert response.status_code == 201
    assert [c["content"] for c in response.json()["comments"]] == ["Take the 28!"]
    assert response.json()["comments"][0]["user_name"] == "Guest"


def test_post_validation(client, admin_headers):
    assert client.post("/api/community/posts", json={"content": "   "}).status_code == 400
    assert client.post("/api/community/posts", json={"content": "Hello"}, headers=admin_headers).status_code == 403
    assert client.get("/api/community/posts", headers=admin_headers).status_code == 200
