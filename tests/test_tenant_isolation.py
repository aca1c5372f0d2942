from conftest import auth, login

def test_tenant_isolation_projects(client):
    a = login(client, "a")
    b = login(client, "b")

    r = client.post("/projects", json={"name": "p-a"}, headers=auth(a))
    assert r.status_code == 201
    project_a = r.json()["id"]

    r = client.post(f"/projects/{project_a}/tasks", json={"title": "t-a"}, headers=auth(a))
    assert r.status_code == 201
    task_a = r.json()["id"]

    # b has no relationship to project_a
    r = client.get(f"/projects/{project_a}", headers=auth(b))
    assert r.status_code == 401

    r = client.get(f"/projects/{project_a}/tasks", headers=auth(b))
    assert r.status_code == 401

    r = client.put(f"/projects/{project_a}/tasks/{task_a}", json={"title": "hacked"}, headers=auth(b))
    assert r.status_code == 401

    r = client.patch(
        f"/projects/{project_a}/tasks/{task_a}/status",
        json={"status": "completed"},
        headers=auth(b),
    )
    assert r.status_code == 401

    r = client.delete(f"/projects/{project_a}/tasks/{task_a}", headers=auth(b))
    assert r.status_code == 401

    # team mutations are owner-only regardless of membership
    r = client.post(f"/projects/{project_a}/team", json={"username": "b", "role": "manager"}, headers=auth(b))
    assert r.status_code == 403

def test_task_ids_are_scoped_to_their_project(client):
    a = login(client, "a")

    p1 = client.post("/projects", json={"name": "p1"}, headers=auth(a)).json()["id"]
    p2 = client.post("/projects", json={"name": "p2"}, headers=auth(a)).json()["id"]
    task = client.post(f"/projects/{p1}/tasks", json={"title": "t"}, headers=auth(a)).json()["id"]

    r = client.get(f"/projects/{p2}/tasks/{task}", headers=auth(a))
    assert r.status_code == 404
