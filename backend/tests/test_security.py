import json
from types import SimpleNamespace

from scaleadvisor.utils.security_advisor import generate_compliance_checks, generate_security_artifacts


def _project(target="growth", name="Payments API"):
    return SimpleNamespace(name=name, tech_stack="django", current_phase="startup", target_phase=target)


def test_kubernetes_checks_only_for_scale_targets():
    for target in ("startup", "growth"):
        checks = generate_compliance_checks(_project(target))
        assert len(checks) == 5
        assert "cis-k8s" not in {c["standard"] for c in checks}
    for target in ("scale", "enterprise"):
        checks = generate_compliance_checks(_project(target))
        assert len(checks) == 7
        assert [c["standard"] for c in checks].count("cis-k8s") == 2


def test_compliance_categories():
    categories = {c["category"] for c in generate_compliance_checks(_project("scale"))}
    assert categories == {"iam", "secrets", "kubernetes", "networking", "observability"}


def test_security_artifacts():
    artifacts = generate_security_artifacts(_project())
    assert [a["type"] for a in artifacts] == ["iam-policy", "secrets-management", "terraform-cis"]
    assert [a["name"] for a in artifacts] == [
        "payments-api-least-privilege.json",
        "payments-api-secrets-policy.md",
        "payments-api-cis.tf",
    ]
    policy = json.loads(artifacts[0]["content"])
    assert policy["Version"] == "2012-10-17"
    assert artifacts[0]["content"] == json.dumps(policy, indent=2)


async def test_generate_security_report(client, auth_headers, create_project):
    project = await create_project(target_phase="enterprise")
    url = f"/api/projects/{project['id']}/security/generate"

    resp = await client.post(url, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["compliance_checks"]) == 7
    assert all(c["is_passed"] is False for c in body["compliance_checks"])
    assert sorted(a["type"] for a in body["artifacts"]) == ["iam-policy", "secrets-management", "terraform-cis"]

    # regenerating replaces checks and upserts artifacts
    again = (await client.post(url, headers=auth_headers)).json()
    assert {a["id"] for a in again["artifacts"]} == {a["id"] for a in body["artifacts"]}

    checks = (await client.get(f"/api/projects/{project['id']}/compliance", headers=auth_headers)).json()
    assert len(checks) == 7
    assert [c["title"] for c in checks] == [c["title"] for c in again["compliance_checks"]]

    configs = (await client.get(f"/api/projects/{project['id']}/configurations", headers=auth_headers)).json()
    assert len(configs) == 3


async def test_security_requires_auth(client, project):
    resp = await client.post(f"/api/projects/{project['id']}/security/generate")
    assert resp.status_code == 401
    assert (await client.get(f"/api/projects/{project['id']}/compliance")).json() == []


def test_iam_policy_keeps_non_ascii_names():
    artifacts = generate_security_artifacts(_project(name="Café Shop"))
    assert artifacts[0]["name"] == "café-shop-least-privilege.json"
    assert "café-shop" in artifacts[0]["content"]
    assert "\\u00e9" not in artifacts[0]["content"]
    assert json.loads(artifacts[0]["content"])["Version"] == "2012-10-17"
