from __future__ import annotations

from datetime import datetime, timezone

from bson import ObjectId

from food_lovers.db.database import FAVORITES
from food_lovers.schemas.favorite import FavoriteCreate


REVIEW_ID = str(ObjectId())


def _favorite(**overrides):
    body = {"userEmail": "a@x.com", "reviewId": REVIEW_ID}
    body.update(overrides)
    return body


def test_add_favorite_returns_201_and_stamps_added_at(client, db):
    before = datetime.now(timezone.utc)
    resp = client.post("/favorites", json=_favorite(addedAt="1999-01-01T00:00:00Z"))
    assert resp.status_code == 201
    assert resp.json()["acknowledged"] is True

    stored = db[FAVORITES].docs[0]
    assert str(stored["_id"]) == resp.json()["insertedId"]
    assert stored["addedAt"] >= before
    assert stored["addedAt"] <= datetime.now(timezone.utc)


def test_add_favorite_keeps_extra_fields(client, db):
    resp = client.post(
        "/favorites",
        json=_favorite(foodName="Tacos", foodImage="https://img.example.com/tacos.jpg", _id="mine"),
    )
    assert resp.status_code == 201

    stored = db[FAVORITES].docs[0]
    assert stored["foodName"] == "Tacos"
    assert stored["foodImage"] == "https://img.example.com/tacos.jpg"
    assert isinstance(stored["_id"], ObjectId)

    (listed,) = client.get("/favorites/a@x.com").json()
    assert listed["foodName"] == "Tacos"
    assert listed["_id"] == resp.json()["insertedId"]


def test_list_favorites_returns_stored_extra_fields(client, db):
    db[FAVORITES].docs.append(
        {
            "_id": ObjectId(),
            "userEmail": "a@x.com",
            "reviewId": REVIEW_ID,
            "foodName": "Pho",
            "addedAt": datetime.now(timezone.utc),
        }
    )

    (listed,) = client.get("/favorites/a@x.com").json()
    assert listed["foodName"] == "Pho"
    assert set(listed) == {"_id", "userEmail", "reviewId", "foodName", "addedAt"}


def test_adding_same_pair_twice_is_rejected(client, db):
    assert client.post("/favorites", json=_favorite()).status_code == 201

    resp = client.post("/favorites", json=_favorite())
    assert resp.status_code == 400
    assert resp.json()["message"] == "Already in favorites"
    assert resp.json()["code"] == "CONFLICT"
    assert len(db[FAVORITES].docs) == 1


def test_same_review_for_different_users_is_allowed(client):
    assert client.post("/favorites", json=_favorite()).status_code == 201
    assert client.post("/favorites", json=_favorite(userEmail="b@x.com")).status_code == 201


def test_duplicate_key_from_unique_index_is_a_conflict(client, db):
    favorites = db[FAVORITES]
    favorites.unique = ("userEmail", "reviewId")
    favorites.docs.append(
        FavoriteCreate(user_email="a@x.com", review_id=REVIEW_ID).to_document(datetime.now(timezone.utc))
    )

    async def no_match(flt):
        return None

    # A concurrent writer inserted between the check and the insert
    favorites.find_one = no_match

    resp = client.post("/favorites", json=_favorite())
    assert resp.status_code == 400
    assert resp.json()["message"] == "Already in favorites"


def test_add_favorite_requires_pair(client):
    resp = client.post("/favorites", json={"userEmail": "a@x.com"})
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["details"]["validation_errors"]}
    assert fields == {"body.reviewId"}


def test_list_favorites_by_user(client):
    other = str(ObjectId())
    client.post("/favorites", json=_favorite())
    client.post("/favorites", json=_favorite(reviewId=other))
    client.post("/favorites", json=_favorite(userEmail="b@x.com"))

    resp = client.get("/favorites/a@x.com")
    assert resp.status_code == 200
    body = resp.json()
    assert {f["reviewId"] for f in body} == {REVIEW_ID, other}
    assert all(f["userEmail"] == "a@x.com" and f["addedAt"] for f in body)
    assert all(ObjectId.is_valid(f["_id"]) for f in body)


def test_list_favorites_empty(client):
    resp = client.get("/favorites/nobody@x.com")
    assert resp.status_code == 200
    assert resp.json() == []


def test_remove_favorite(client):
    favorite_id = client.post("/favorites", json=_favorite()).json()["insertedId"]

    resp = client.delete(f"/favorites/{favorite_id}")
    assert resp.status_code == 200
    assert resp.json()["deletedCount"] == 1

    again = client.delete(f"/favorites/{favorite_id}")
    assert again.status_code == 404
    assert again.json()["message"] == "Favorite not found"


def test_remove_favorite_with_malformed_id(client):
    resp = client.delete("/favorites/nope")
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to remove favorite"


def test_remove_favorite_with_malformed_id_when_strict(client, strict_ids):
    assert client.delete("/favorites/nope").status_code == 400


def test_check_status(client):
    client.post("/favorites", json=_favorite())

    resp = client.get(f"/favorites/check/a@x.com/{REVIEW_ID}")
    assert resp.status_code == 200
    assert resp.json() == {"isFavorite": True}


def test_check_status_unknown_pair_is_false(client):
    resp = client.get("/favorites/check/ghost@x.com/not-even-an-id")
    assert resp.status_code == 200
    assert resp.json() == {"isFavorite": False}


def test_check_status_after_removal(client):
    favorite_id = client.post("/favorites", json=_favorite()).json()["insertedId"]
    client.delete(f"/favorites/{favorite_id}")

    assert client.get(f"/favorites/check/a@x.com/{REVIEW_ID}").json() == {"isFavorite": False}


def test_storage_failures_map_to_500(broken_client):
    cases = [
        (broken_client.get("/favorites/a@x.com"), "Failed to fetch favorites"),
        (broken_client.post("/favorites", json=_favorite()), "Failed to add favorite"),
        (broken_client.delete(f"/favorites/{ObjectId()}"), "Failed to remove favorite"),
        (broken_client.get(f"/favorites/check/a@x.com/{REVIEW_ID}"), "Failed to check favorite status"),
    ]
    for resp, message in cases:
        assert resp.status_code == 500
        assert resp.json()["message"] == message
