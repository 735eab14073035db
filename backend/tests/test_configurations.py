from types import SimpleNamespace

import pytest

from scaleadvisor.utils import config_templates


def _project(name="My Shop", stack="mern"):
    return SimpleNamespace(name=name, tech_stack=stack, current_phase="startup", target_phase="growth")


# ---------- Generators ----------
@pytest.mark.parametrize("stack,marker", [
    ("mern", "node:18-alpine"),
    ("nextjs", "node:18-alpine"),
    ("django", "python:3.11-slim"),
    ("flask", "python:3.11-slim"),
    ("spring", "alpine:latest"),
])
def test_dockerfile_base_image(stack, marker):
    result = config_templates.generate_dockerfile(_project(stack=stack))
    assert result["name"] == "Dockerfile"
    assert marker in result["content"]


def test_docker_compose_database_name_uses_underscores():
    content = config_templates.generate_docker_compose(_project(name="My Big  Shop"))["content"]
    assert "POSTGRES_DB=my_big_shop" in content
    for service in ("app:", "db:", "redis:", "nginx:"):
        assert service in content


def test_kubernetes_and_terraform_use_slug():
    assert "my-shop" in config_templates.generate_kubernetes(_project())["content"]
    assert "my-shop" in config_templates.generate_terraform(_project())["content"]


def test_unknown_configuration_type():
    with pytest.raises(ValueError, match="Unknown configuration type"):
        config_templates.generate_configuration(_project(), "helm")


# ---------- Endpoints ----------
async def test_regenerating_same_type_keeps_one_row(client, auth_headers, project):
    pid = project["id"]
    url = f"/api/projects/{pid}/configurations/generate"

    first = await client.post(url, json={"type": "dockerfile"}, headers=auth_headers)
    assert first.status_code == 200
    await client.patch(f"/api/projects/{pid}", json={"name": "Renamed Shop"}, headers=auth_headers)
    second = await client.post(url, json={"type": "dockerfile"}, headers=auth_headers)
    assert second.json()["id"] == first.json()["id"]

    listed = (await client.get(f"/api/projects/{pid}/configurations", headers=auth_headers)).json()
    assert len(listed) == 1
    assert "Renamed Shop" in listed[0]["content"]


async def test_each_type_gets_its_own_row(client, auth_headers, project):
    pid = project["id"]
    for config_type in ("dockerfile", "kubernetes", "terraform", "github-actions", "docker-compose"):
        resp = await client.post(
            f"/api/projects/{pid}/configurations/generate", json={"type": config_type}, headers=auth_headers
        )
        assert resp.status_code == 200, config_type
        assert resp.json()["type"] == config_type

    listed = (await client.get(f"/api/projects/{pid}/configurations", headers=auth_headers)).json()
    assert len(listed) == 5


async def test_invalid_type_rejected(client, auth_headers, project):
    resp = await client.post(
        f"/api/projects/{project['id']}/configurations/generate", json={"type": "iam-policy"}, headers=auth_headers
    )
    assert resp.status_code == 422


async def test_configurations_list_empty_for_non_owner(client, auth_headers, other_headers, project):
    await client.post(
        f"/api/projects/{project['id']}/configurations/generate", json={"type": "dockerfile"}, headers=auth_headers
    )
    resp = await client.get(f"/api/projects/{project['id']}/configurations", headers=other_headers)
    assert resp.json() == []


# ---------- Canvas ----------
NODES = [
    {"id": "n1", "type": "db", "x": 10, "y": 10, "props": {"engine": "mysql"}},
    {"id": "n2", "type": "lb", "x": 100, "y": 10},
    {"id": "n3", "type": "api", "x": 200, "y": 10, "props": {"replicas": 3}},
]


async def test_canvas_preview_does_not_persist(client, auth_headers, project):
    resp = await client.post(
        f"/api/projects/{project['id']}/canvas/preview", json={"nodes": NODES}, headers=auth_headers
    )
    assert resp.status_code == 200
    body = resp.json()
    assert 'engine = "mysql"' in body["terraform"]
    assert "replicas: 3" in body["kubernetes"]

    listed = (await client.get(f"/api/projects/{project['id']}/configurations", headers=auth_headers)).json()
    assert listed == []


async def test_canvas_generate_requires_nodes(client, auth_headers, project):
    resp = await client.post(
        f"/api/projects/{project['id']}/canvas/generate", json={"nodes": []}, headers=auth_headers
    )
    assert resp.status_code == 422


async def test_canvas_generate_upserts_terraform_and_kubernetes(client, auth_headers, project):
    pid = project["id"]
    resp = await client.post(
        f"/api/projects/{pid}/configurations/generate", json={"type": "terraform"}, headers=auth_headers
    )
    terraform_id = resp.json()["id"]

    resp = await client.post(f"/api/projects/{pid}/canvas/generate", json={"nodes": NODES}, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert sorted(c["type"] for c in body["configurations"]) == ["kubernetes", "terraform"]
    assert body["configurations"][0]["content"] == body["preview"]["terraform"]

    listed = (await client.get(f"/api/projects/{pid}/configurations", headers=auth_headers)).json()
    assert len(listed) == 2
    terraform = next(c for c in listed if c["type"] == "terraform")
    assert terraform["id"] == terraform_id
    assert terraform["content"] == body["preview"]["terraform"]


async def test_canvas_requires_auth(client, project):
    resp = await client.post(f"/api/projects/{project['id']}/canvas/preview", json={"nodes": NODES})
    assert resp.status_code == 401
