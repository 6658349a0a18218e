from fastapi.testclient import TestClient
from liftlog.main import app

client = TestClient(app)

def mk_user(name="Lifter"):
    r = client.post("/users", json={"name": name})
    assert r.status_code == 201
    return r.json()

def mk_exercise(user_id, sets=None, type_name="Bench Press", note="heavy day"):
    body = {"exerciseTypeName": type_name, "userId": user_id, "note": note,
            "sets": sets if sets is not None else [{"numReps": 10, "weight": 5}]}
    r = client.post("/exercises", json=body)
    assert r.status_code == 201, r.text
    return r.json()

def total_of(user_id):
    r = client.get(f"/users/{user_id}/statistics")
    assert r.status_code == 200
    return r.json()["totalWeightLifted"]
