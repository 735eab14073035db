import uuid
from types import SimpleNamespace

import pytest

from scaleadvisor.utils.roadmap_engine import generate_roadmap_steps


@pytest.mark.parametrize("target,count", [
    ("startup", 3),
    ("growth", 5),
    ("scale", 7),
    ("enterprise", 9),
])
def test_step_count_by_target_phase(target, count):
    steps = generate_roadmap_steps(SimpleNamespace(target_phase=target, current_phase="startup"))
    assert [s["order"] for s in steps] == list(range(1, count + 1))


def test_enterprise_roadmap_shape():
    steps = generate_roadmap_steps(SimpleNamespace(target_phase="enterprise"))
    assert "Foundation Setup" in steps[0]["title"]
    assert "Kubernetes Migration" in steps[7]["title"]
    assert "Advanced Monitoring" in steps[8]["title"]
    for step in steps:
        assert step["resources"], step["title"]
        assert all(r["type"] in ("documentation", "tutorial", "tool") for r in step["resources"])


def test_steps_are_fresh_copies():
    project = SimpleNamespace(target_phase="growth")
    steps = generate_roadmap_steps(project)
    steps[0]["resources"].clear()
    assert generate_roadmap_steps(project)[0]["resources"]


async def test_generate_and_list_roadmap(client, auth_headers, create_project):
    project = await create_project(target_phase="scale")
    resp = await client.post(f"/api/projects/{project['id']}/roadmap/generate", headers=auth_headers)
    assert resp.status_code == 200
    assert [s["order"] for s in resp.json()] == list(range(1, 8))

    listed = (await client.get(f"/api/projects/{project['id']}/roadmap", headers=auth_headers)).json()
    assert [s["order"] for s in listed] == list(range(1, 8))
    assert listed[0]["resources"][0]["url"].startswith("https://")


async def test_roadmap_list_empty_for_anonymous(client, auth_headers, project):
    await client.post(f"/api/projects/{project['id']}/roadmap/generate", headers=auth_headers)
    assert (await client.get(f"/api/projects/{project['id']}/roadmap")).json() == []


async def test_toggle_roadmap_step(client, auth_headers, other_headers, project):
    steps = (await client.post(
        f"/api/projects/{project['id']}/roadmap/generate", headers=auth_headers
    )).json()
    url = f"/api/roadmap/{steps[1]['id']}/toggle"

    resp = await client.post(url, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["is_completed"] is True

    assert (await client.post(url)).status_code == 401
    resp = await client.post(url, headers=other_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Access denied"

    resp = await client.post(f"/api/roadmap/{uuid.uuid4()}/toggle", headers=auth_headers)
    assert resp.status_code == 404
