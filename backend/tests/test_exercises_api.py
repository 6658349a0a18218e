from helpers import client, mk_exercise, mk_user


def test_create_exercise_returns_nested_representation():
    u = mk_user("Ana")
    ex = mk_exercise(u["id"])
    assert ex["note"] == "heavy day"
    assert ex["exerciseType"]["name"] == "Bench Press"
    assert ex["user"]["id"] == u["id"]
    assert ex["user"]["totalWeightLifted"] == 50
    assert [(s["numReps"], s["weight"]) for s in ex["sets"]] == [(10, 5)]
    assert {"createdAt", "updatedAt"} <= ex.keys()


def test_create_exercise_reuses_exercise_type_by_name():
    u = mk_user()
    a = mk_exercise(u["id"], type_name="Squat")
    b = mk_exercise(u["id"], type_name="Squat")
    assert a["exerciseType"]["id"] == b["exerciseType"]["id"]
    assert len(client.get("/exercise-types").json()) == 1


def test_create_exercise_404_for_missing_user():
    r = client.post("/exercises", json={"exerciseTypeName": "Squat", "userId": 999999, "sets": []})
    assert r.status_code == 404
    # nothing from the failed request is left behind
    assert client.get("/exercise-types").json() == []


def test_create_exercise_400_for_missing_fields():
    u = mk_user()
    assert client.post("/exercises", json={"userId": u["id"]}).status_code == 400
    r = client.post("/exercises", json={"exerciseTypeName": "Squat", "userId": u["id"],
                                        "sets": [{"numReps": 5}]})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request body"


def test_list_and_get_exercises():
    u = mk_user()
    a = mk_exercise(u["id"], type_name="A")
    b = mk_exercise(u["id"], type_name="B")
    listed = client.get("/exercises").json()
    assert [e["id"] for e in listed] == [a["id"], b["id"]]
    one = client.get(f"/exercises/{b['id']}").json()
    assert one["exerciseType"]["name"] == "B"
    assert client.get("/exercises/999999").status_code == 404


def test_exercise_type_survives_exercise_deletion():
    u = mk_user()
    ex = mk_exercise(u["id"], type_name="Press")
    client.delete(f"/exercises/{ex['id']}")
    assert [t["name"] for t in client.get("/exercise-types").json()] == ["Press"]


def test_patch_and_delete_missing_exercise_404():
    assert client.patch("/exercises/999999", json={"note": "x"}).status_code == 404
    assert client.patch("/exercises/999999", json={"sets": []}).status_code == 404
    assert client.delete("/exercises/999999").status_code == 404


def test_set_endpoints_404():
    u = mk_user()
    ex = mk_exercise(u["id"])
    other = mk_exercise(u["id"], type_name="Other")
    set_id = ex["sets"][0]["id"]

    assert client.post("/exercises/999999/sets", json={"numReps": 1, "weight": 1}).status_code == 404
    assert client.get("/exercises/999999/sets").status_code == 404
    assert client.patch(f"/exercises/{ex['id']}/sets/999999", json={"weight": 1}).status_code == 404
    assert client.delete(f"/exercises/{ex['id']}/sets/999999").status_code == 404
    # a set is only reachable through its own exercise
    assert client.patch(f"/exercises/{other['id']}/sets/{set_id}", json={"weight": 1}).status_code == 404
    assert client.delete(f"/exercises/{other['id']}/sets/{set_id}").status_code == 404


def test_set_endpoints_400():
    u = mk_user()
    ex = mk_exercise(u["id"])
    set_id = ex["sets"][0]["id"]
    assert client.post(f"/exercises/{ex['id']}/sets", json={"weight": 1}).status_code == 400
    assert client.post(f"/exercises/{ex['id']}/sets", json={"numReps": 0, "weight": 1}).status_code == 400
    assert client.post(f"/exercises/{ex['id']}/sets", json={"numReps": 1, "weight": -1}).status_code == 400
    assert client.patch(f"/exercises/{ex['id']}/sets/{set_id}", json={}).status_code == 400


def test_oversized_reps_rejected_without_touching_total():
    u = mk_user()
    ex = mk_exercise(u["id"])
    set_id = ex["sets"][0]["id"]
    huge = {"numReps": 2_000_000_000, "weight": 1000}

    assert client.post(f"/exercises/{ex['id']}/sets", json=huge).status_code == 400
    assert client.patch(f"/exercises/{ex['id']}/sets/{set_id}", json={"numReps": 10_001}).status_code == 400
    r = client.post("/exercises", json={"exerciseTypeName": "Squat", "userId": u["id"], "sets": [huge]})
    assert r.status_code == 400
    assert client.post(f"/exercises/{ex['id']}/sets", json={"numReps": 10_000, "weight": 1000}).status_code == 201
    assert client.get(f"/users/{u['id']}/statistics").json()["totalWeightLifted"] == 50 + 10_000_000


def test_weight_with_more_than_two_decimals_is_rejected():
    u = mk_user()
    ex = mk_exercise(u["id"])
    set_id = ex["sets"][0]["id"]

    r = client.post(f"/exercises/{ex['id']}/sets", json={"numReps": 1, "weight": 2.345})
    assert r.status_code == 400
    assert client.patch(f"/exercises/{ex['id']}/sets/{set_id}", json={"weight": 0.001}).status_code == 400
    r = client.post(f"/exercises/{ex['id']}/sets", json={"numReps": 2, "weight": 2.25})
    assert r.status_code == 201
    assert r.json()["weight"] == 2.25
    assert client.get(f"/users/{u['id']}/statistics").json()["totalWeightLifted"] == 54.5


def test_comments_crud():
    owner = mk_user("Owner")
    fan = mk_user("Fan")
    ex = mk_exercise(owner["id"])

    r = client.post(f"/exercises/{ex['id']}/comments", json={"text": "nice lift", "userId": fan["id"]})
    assert r.status_code == 201
    comment = r.json()
    assert comment["user"]["id"] == fan["id"]

    listed = client.get(f"/exercises/{ex['id']}/comments").json()
    assert [c["text"] for c in listed] == ["nice lift"]

    r = client.patch(f"/exercises/{ex['id']}/comments/{comment['id']}", json={"text": "great lift"})
    assert r.status_code == 200
    assert r.json()["text"] == "great lift"

    assert client.delete(f"/exercises/{ex['id']}/comments/{comment['id']}").status_code == 204
    assert client.get(f"/exercises/{ex['id']}/comments").json() == []


def test_comments_404():
    u = mk_user()
    ex = mk_exercise(u["id"])
    assert client.get("/exercises/999999/comments").status_code == 404
    assert client.post(f"/exercises/{ex['id']}/comments", json={"text": "x", "userId": 999999}).status_code == 404
    assert client.post("/exercises/999999/comments", json={"text": "x", "userId": u["id"]}).status_code == 404
    assert client.patch(f"/exercises/{ex['id']}/comments/999999", json={"text": "x"}).status_code == 404
    assert client.delete(f"/exercises/{ex['id']}/comments/999999").status_code == 404


def test_comments_go_with_their_exercise():
    u = mk_user()
    ex = mk_exercise(u["id"])
    client.post(f"/exercises/{ex['id']}/comments", json={"text": "first", "userId": u["id"]})
    assert client.delete(f"/exercises/{ex['id']}").status_code == 204
    assert client.get(f"/exercises/{ex['id']}/comments").status_code == 404
