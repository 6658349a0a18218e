from helpers import client, mk_exercise, mk_user


def test_user_crud():
    u = mk_user("Kim")
    assert client.get(f"/users/{u['id']}").json()["name"] == "Kim"

    r = client.patch(f"/users/{u['id']}", json={"name": "Kim L."})
    assert r.status_code == 200
    assert r.json()["name"] == "Kim L."
    assert [x["name"] for x in client.get("/users").json()] == ["Kim L."]

    assert client.delete(f"/users/{u['id']}").status_code == 204
    assert client.get(f"/users/{u['id']}").status_code == 404


def test_user_validation_and_404():
    assert client.post("/users", json={}).status_code == 400
    assert client.post("/users", json={"name": "   "}).status_code == 400
    assert client.get("/users/999999").status_code == 404
    assert client.patch("/users/999999", json={"name": "x"}).status_code == 404
    assert client.delete("/users/999999").status_code == 404


def test_deleting_user_removes_their_exercises():
    u = mk_user()
    ex = mk_exercise(u["id"])
    assert client.delete(f"/users/{u['id']}").status_code == 204
    assert client.get(f"/exercises/{ex['id']}").status_code == 404


def test_user_exercises_lists_only_theirs():
    a, b = mk_user("A"), mk_user("B")
    ex = mk_exercise(a["id"])
    mk_exercise(b["id"])
    listed = client.get(f"/users/{a['id']}/exercises").json()
    assert [e["id"] for e in listed] == [ex["id"]]
    assert client.get("/users/999999/exercises").status_code == 404


def test_group_crud_and_membership():
    r = client.post("/groups", json={"name": "Morning crew"})
    assert r.status_code == 201
    g = r.json()
    a, b = mk_user("A"), mk_user("B")

    assert client.post(f"/groups/{g['id']}/members", json={"userId": a["id"]}).status_code == 204
    assert client.post(f"/groups/{g['id']}/members", json={"userId": b["id"]}).status_code == 204
    # adding twice is harmless
    assert client.post(f"/groups/{g['id']}/members", json={"userId": a["id"]}).status_code == 204

    members = client.get(f"/groups/{g['id']}/members").json()
    assert [m["id"] for m in members] == [a["id"], b["id"]]
    assert [x["name"] for x in client.get(f"/users/{a['id']}/groups").json()] == ["Morning crew"]

    assert client.delete(f"/groups/{g['id']}/members/{a['id']}").status_code == 204
    assert [m["id"] for m in client.get(f"/groups/{g['id']}/members").json()] == [b["id"]]

    r = client.patch(f"/groups/{g['id']}", json={"name": "Evening crew"})
    assert r.json()["name"] == "Evening crew"
    assert [x["name"] for x in client.get("/groups").json()] == ["Evening crew"]

    assert client.delete(f"/groups/{g['id']}").status_code == 204
    assert client.get(f"/groups/{g['id']}").status_code == 404
    # members outlive the group
    assert client.get(f"/users/{b['id']}").status_code == 200


def test_group_exercises_spans_members():
    g = client.post("/groups", json={"name": "Team"}).json()
    a, b, outsider = mk_user("A"), mk_user("B"), mk_user("C")
    ex_a = mk_exercise(a["id"])
    ex_b = mk_exercise(b["id"])
    mk_exercise(outsider["id"])
    for u in (a, b):
        client.post(f"/groups/{g['id']}/members", json={"userId": u["id"]})

    listed = client.get(f"/groups/{g['id']}/exercises").json()
    assert [e["id"] for e in listed] == [ex_a["id"], ex_b["id"]]

    empty = client.post("/groups", json={"name": "Empty"}).json()
    assert client.get(f"/groups/{empty['id']}/exercises").json() == []


def test_group_404s():
    u = mk_user()
    assert client.get("/groups/999999").status_code == 404
    assert client.get("/groups/999999/members").status_code == 404
    assert client.post("/groups/999999/members", json={"userId": u["id"]}).status_code == 404
    g = client.post("/groups", json={"name": "G"}).json()
    assert client.post(f"/groups/{g['id']}/members", json={"userId": 999999}).status_code == 404
    assert client.delete(f"/groups/{g['id']}/members/999999").status_code == 404
