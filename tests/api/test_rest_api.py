"""
Tests for the REST API over the sample graph.
"""


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "SwapCycles API"
    assert client.get("/health").json()["status"] == "healthy"


def test_list_students(client):
    response = client.get("/students")
    assert response.status_code == 200
    students = response.json()
    assert [s["name"] for s in students] == ["A", "B", "P", "Q", "R", "S"]
    assert students[0]["preferences"] == ["math"]
    assert students[0]["current_section"] == "history"


def test_get_unknown_student(client):
    response = client.get("/students/Z")
    assert response.status_code == 404


def test_get_section(client):
    response = client.get("/sections/math")
    assert response.status_code == 200
    assert response.json()["students"] == ["P", "Q"]
    assert client.get("/sections/art").status_code == 404


def test_current_section(client):
    assert client.get("/students/R/section").json() == {"student_id": "R", "section_id": "science"}
    assert client.get("/students/Z/section").status_code == 404


def test_cycle_count_for_sample_student(client):
    response = client.get("/students/A/cycles")
    assert response.status_code == 200
    data = response.json()
    assert data["found"] is True
    assert data["unique_cycles"] == 0
    assert data["cycle_keys"] == []


def test_cycle_count_for_unknown_student_is_not_an_error(client):
    response = client.get("/students/Z/cycles")
    assert response.status_code == 200
    data = response.json()
    assert data["found"] is False
    assert data["unique_cycles"] == 0
    assert data["message"] == "Student Z not found."


def test_preferences_create_a_cycle(client):
    assert client.post("/students/B/preferences", json={"section_id": "math"}).status_code == 200
    response = client.post("/students/P/preferences", json={"section_id": "history"})
    assert response.json()["preferences"] == ["science", "history"]

    assert client.get("/swaps/B/P").json()["wants_swap"] is True
    assert client.get("/students/B/cycles").json()["unique_cycles"] == 1
    assert "B,P" in client.get("/students/P/cycles").json()["cycle_keys"]


def test_preference_for_unknown_section(client):
    response = client.post("/students/A/preferences", json={"section_id": "art"})
    assert response.status_code == 404


def test_create_and_enroll(client):
    assert client.post("/sections", json={"name": "art"}).status_code == 201
    assert client.post("/students", json={"name": "T"}).status_code == 201

    response = client.post("/enrollments", json={"student_id": "T", "section_id": "art"})
    assert response.json()["status"] == "confirmed"

    response = client.post("/enrollments", json={"student_id": "T", "section_id": "math"})
    assert response.json()["success"] is False
    assert response.json()["status"] == "rejected"


def test_duplicate_student(client):
    assert client.post("/students", json={"name": "A"}).status_code == 409


def test_enroll_unknown_student(client):
    response = client.post("/enrollments", json={"student_id": "Z", "section_id": "math"})
    assert response.status_code == 404


def test_invalid_payload(client):
    assert client.post("/students", json={"name": ""}).status_code == 422


def test_graph_and_statistics(client):
    graph = client.get("/graph").json()
    assert graph["sections"]["history"] == ["A", "B"]
    assert client.get("/statistics").json()["total_students"] == 6
