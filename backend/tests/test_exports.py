import io
import zipfile


async def _populate(client, headers, project_id):
    for path in ("recommendations/generate", "roadmap/generate", "security/generate"):
        resp = await client.post(f"/api/projects/{project_id}/{path}", headers=headers)
        assert resp.status_code == 200, path


async def test_json_export(client, auth_headers, project):
    await _populate(client, auth_headers, project["id"])

    resp = await client.get(f"/api/projects/{project['id']}/export/json", headers=auth_headers)
    assert resp.status_code == 200
    report = resp.json()
    assert set(report) == {
        "project", "recommendations", "roadmap", "configurations", "compliance_checks", "cost_estimate",
    }
    assert report["project"]["id"] == project["id"]
    assert len(report["recommendations"]) == 3
    assert [s["order"] for s in report["roadmap"]] == [1, 2, 3, 4, 5]
    assert len(report["compliance_checks"]) == 5
    assert len(report["configurations"]) == 3
    assert set(report["cost_estimate"]) == {"aws", "gcp", "azure"}


async def test_excel_export(client, auth_headers, create_project):
    project = await create_project(name="Shop Front v2!")
    await _populate(client, auth_headers, project["id"])

    resp = await client.get(f"/api/projects/{project['id']}/export/excel", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert f"filename=shop_front_v2__{project['id']}.xlsx" in resp.headers["content-disposition"]

    workbook = zipfile.ZipFile(io.BytesIO(resp.content))
    names = workbook.namelist()
    assert "xl/workbook.xml" in names
    assert sum(1 for n in names if n.startswith("xl/worksheets/sheet")) == 5
    sheets = workbook.read("xl/workbook.xml").decode()
    for title in ("Overview", "Recommendations", "Roadmap", "Compliance", "Costs"):
        assert f'name="{title}"' in sheets


async def test_exports_need_owner(client, other_headers, project):
    for fmt in ("json", "excel"):
        assert (await client.get(f"/api/projects/{project['id']}/export/{fmt}")).status_code == 401
        resp = await client.get(f"/api/projects/{project['id']}/export/{fmt}", headers=other_headers)
        assert resp.status_code == 404
