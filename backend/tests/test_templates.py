def _template(**overrides):
    payload = {
        "name": "Node API on ECS",
        "description": "Fargate service behind an ALB",
        "tech_stack": "mern",
        "phase": "growth",
        "category": "terraform",
        "content": 'resource "aws_ecs_service" "api" {}',
        "tags": ["ecs", "  ", "ecs", "alb"],
        "is_public": True,
    }
    payload.update(overrides)
    return payload


async def test_create_template_requires_auth(client):
    resp = await client.post("/api/templates", json=_template())
    assert resp.status_code == 401


async def test_create_template(client, auth_headers):
    resp = await client.post("/api/templates", json=_template(), headers=auth_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["tags"] == ["ecs", "alb"]
    assert body["created_by"] is not None


async def test_visibility_and_filters(client, auth_headers, other_headers):
    await client.post("/api/templates", json=_template(name="Public TF"), headers=auth_headers)
    await client.post(
        "/api/templates",
        json=_template(name="Private K8s", category="kubernetes", phase="scale", is_public=False),
        headers=auth_headers,
    )

    owner = (await client.get("/api/templates", headers=auth_headers)).json()
    assert sorted(t["name"] for t in owner) == ["Private K8s", "Public TF"]

    intruder = (await client.get("/api/templates", headers=other_headers)).json()
    assert [t["name"] for t in intruder] == ["Public TF"]

    anonymous = (await client.get("/api/templates")).json()
    assert [t["name"] for t in anonymous] == ["Public TF"]

    filtered = (await client.get(
        "/api/templates", params={"category": "kubernetes", "phase": "scale"}, headers=auth_headers
    )).json()
    assert [t["name"] for t in filtered] == ["Private K8s"]

    by_stack = (await client.get("/api/templates", params={"tech_stack": "rails"}, headers=auth_headers)).json()
    assert by_stack == []


async def test_template_validation(client, auth_headers):
    resp = await client.post("/api/templates", json=_template(name=""), headers=auth_headers)
    assert resp.status_code == 422
