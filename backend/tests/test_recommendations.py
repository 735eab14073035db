import uuid
from types import SimpleNamespace

from scaleadvisor.utils.recommendation_engine import get_recommendations_for_project


def _project(stack="flask", phase="startup"):
    return SimpleNamespace(tech_stack=stack, current_phase=phase, target_phase="enterprise")


# ---------- Engine ----------
def test_startup_recommendations():
    recs = get_recommendations_for_project(_project(phase="startup"))
    assert [r["category"] for r in recs] == ["containerization", "automation"]
    assert all(r["priority"] == "high" for r in recs)


def test_growth_and_scale_recommendations():
    growth = get_recommendations_for_project(_project(phase="growth"))
    assert [r["category"] for r in growth] == ["load-balancing", "caching", "scaling"]
    scale = get_recommendations_for_project(_project(phase="scale"))
    assert [r["category"] for r in scale] == ["database", "orchestration", "monitoring"]


def test_enterprise_has_no_phase_items():
    assert get_recommendations_for_project(_project(phase="enterprise")) == []


def test_mern_adds_frontend_item_in_any_phase():
    recs = get_recommendations_for_project(_project(stack="mern", phase="enterprise"))
    assert len(recs) == 1
    assert recs[0]["category"] == "frontend"
    assert recs[0]["priority"] == "medium"


def test_returned_items_are_copies():
    recs = get_recommendations_for_project(_project())
    recs[0]["title"] = "mutated"
    assert get_recommendations_for_project(_project())[0]["title"] != "mutated"


# ---------- Endpoints ----------
async def test_nextjs_startup_to_scale_end_to_end(client, auth_headers, create_project):
    project = await create_project(tech_stack="nextjs", current_phase="startup", target_phase="scale")

    resp = await client.post(f"/api/projects/{project['id']}/recommendations/generate", headers=auth_headers)
    assert resp.status_code == 200
    assert sorted(r["category"] for r in resp.json()) == ["automation", "containerization"]

    listed = await client.get(f"/api/projects/{project['id']}/recommendations", headers=auth_headers)
    assert [r["id"] for r in listed.json()] == [r["id"] for r in resp.json()]
    assert all(r["is_completed"] is False for r in listed.json())


async def test_regenerate_replaces_rows(client, auth_headers, project):
    url = f"/api/projects/{project['id']}/recommendations/generate"
    first = (await client.post(url, headers=auth_headers)).json()
    second = (await client.post(url, headers=auth_headers)).json()

    assert len(first) == len(second) == 3
    assert {r["id"] for r in first}.isdisjoint({r["id"] for r in second})
    listed = await client.get(f"/api/projects/{project['id']}/recommendations", headers=auth_headers)
    assert len(listed.json()) == 3


async def test_generate_requires_auth(client, project):
    resp = await client.post(f"/api/projects/{project['id']}/recommendations/generate")
    assert resp.status_code == 401


async def test_list_empty_for_anonymous_and_non_owner(client, auth_headers, other_headers, project):
    await client.post(f"/api/projects/{project['id']}/recommendations/generate", headers=auth_headers)
    url = f"/api/projects/{project['id']}/recommendations"
    assert (await client.get(url)).json() == []
    assert (await client.get(url, headers=other_headers)).json() == []


async def test_toggle_recommendation(client, auth_headers, other_headers, project):
    recs = (await client.post(
        f"/api/projects/{project['id']}/recommendations/generate", headers=auth_headers
    )).json()
    url = f"/api/recommendations/{recs[0]['id']}/toggle"

    resp = await client.post(url, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["is_completed"] is True
    resp = await client.post(url, headers=auth_headers)
    assert resp.json()["is_completed"] is False

    assert (await client.post(url)).status_code == 401

    resp = await client.post(url, headers=other_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Access denied"

    resp = await client.post(f"/api/recommendations/{uuid.uuid4()}/toggle", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Recommendation not found"
