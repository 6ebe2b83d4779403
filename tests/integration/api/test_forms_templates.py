import pytest
from httpx import AsyncClient

from convoforms.domain.entities import Template

SCHEMA = {"questions": [{"id": "q1", "type": "text", "prompt": "What's your name?"}]}


@pytest.fixture
def team(onboard, set_plan, join_workspace):
    async def _team():
        owner, workspace = await onboard("owner_1", "owner@acme.io")
        await set_plan("owner_1", plan="pro")
        member = await join_workspace(owner, workspace["id"], "member_1", "member")
        viewer = await join_workspace(owner, workspace["id"], "viewer_1", "viewer")
        return workspace, {"owner": owner, "member": member, "viewer": viewer}

    return _team


@pytest.mark.asyncio
async def test_form_lifecycle_is_role_gated(client: AsyncClient, team):
    workspace, headers = await team()
    forms_url = f"/workspaces/by-id/{workspace['id']}/forms"

    response = await client.post(forms_url, json={"title": "Survey"}, headers=headers["viewer"])
    assert response.status_code == 403

    response = await client.post(
        forms_url, json={"title": "Survey", "config": SCHEMA}, headers=headers["member"]
    )
    assert response.status_code == 201
    form = response.json()
    assert form["version"] == 1
    assert form["is_published"] is False
    assert form["created_by"] == "member_1"

    response = await client.get(f"/forms/{form['id']}", headers=headers["viewer"])
    assert response.status_code == 200

    response = await client.put(
        f"/forms/{form['id']}", json={"title": "Customer Survey"}, headers=headers["member"]
    )
    assert response.status_code == 200
    assert response.json()["title"] == "Customer Survey"
    assert response.json()["version"] == 2

    response = await client.post(f"/forms/{form['id']}/publish", headers=headers["member"])
    assert response.status_code == 403

    response = await client.post(f"/forms/{form['id']}/publish", headers=headers["owner"])
    assert response.status_code == 200
    assert response.json()["is_published"] is True
    assert response.json()["published_at"] is not None

    response = await client.get(forms_url, headers=headers["viewer"])
    assert [f["title"] for f in response.json()["forms"]] == ["Customer Survey"]

    response = await client.delete(f"/forms/{form['id']}", headers=headers["member"])
    assert response.status_code == 403

    response = await client.delete(f"/forms/{form['id']}", headers=headers["owner"])
    assert response.status_code == 200

    response = await client.get(f"/forms/{form['id']}", headers=headers["owner"])
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "FORM_NOT_FOUND"


@pytest.mark.asyncio
async def test_forms_are_invisible_to_other_workspaces(client: AsyncClient, team, onboard):
    workspace, headers = await team()
    response = await client.post(
        f"/workspaces/by-id/{workspace['id']}/forms", json={"title": "Private"}, headers=headers["owner"]
    )
    form_id = response.json()["id"]

    outsider, _ = await onboard("outsider", "outsider@globex.io")
    response = await client.get(f"/forms/{form_id}", headers=outsider)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_workspace_templates(client: AsyncClient, team):
    workspace, headers = await team()
    payload = {
        "workspace_id": workspace["id"],
        "name": "Feedback",
        "form_schema": SCHEMA,
        "category": "feedback",
    }

    response = await client.post("/templates", json=payload, headers=headers["member"])
    assert response.status_code == 403

    response = await client.post("/templates", json=payload, headers=headers["owner"])
    assert response.status_code == 201
    template = response.json()
    assert template["is_global"] is False

    response = await client.get(
        "/templates", params={"workspace_id": workspace["id"]}, headers=headers["viewer"]
    )
    assert response.status_code == 200
    listing = response.json()
    assert [t["name"] for t in listing["templates"]] == ["Feedback"]
    assert listing["pagination"]["total_templates"] == 1
    assert listing["pagination"]["has_next"] is False

    response = await client.post(
        f"/templates/{template['id']}/clone",
        json={"workspace_id": workspace["id"]},
        headers=headers["owner"],
    )
    assert response.status_code == 201
    assert response.json()["name"] == "Feedback (Copy)"

    response = await client.post(
        f"/templates/{template['id']}/create-form",
        json={"workspace_id": workspace["id"]},
        headers=headers["member"],
    )
    assert response.status_code == 201
    assert response.json()["config"] == SCHEMA
    assert response.json()["title"] == "Feedback"

    response = await client.get(
        "/templates",
        params={"workspace_id": workspace["id"], "search": "copy"},
        headers=headers["viewer"],
    )
    assert [t["name"] for t in response.json()["templates"]] == ["Feedback (Copy)"]

    response = await client.delete(f"/templates/{template['id']}", headers=headers["owner"])
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_global_templates(client: AsyncClient, db_session, team, onboard):
    workspace, headers = await team()
    global_template = Template(name="Contact Form", form_schema=SCHEMA, is_global=True)
    db_session.add(global_template)
    await db_session.commit()
    template_id = global_template.id

    outsider, outsider_ws = await onboard("outsider", "outsider@globex.io")
    response = await client.get(
        "/templates", params={"workspace_id": outsider_ws["id"]}, headers=outsider
    )
    assert [t["name"] for t in response.json()["templates"]] == ["Contact Form"]

    response = await client.get(
        "/templates", params={"workspace_id": workspace["id"]}, headers=outsider
    )
    assert response.status_code == 403

    response = await client.post(
        f"/templates/{template_id}/create-form",
        json={"workspace_id": outsider_ws["id"], "title": "Contact us"},
        headers=outsider,
    )
    assert response.status_code == 201
    assert response.json()["title"] == "Contact us"

    response = await client.delete(f"/templates/{template_id}", headers=headers["owner"])
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CANNOT_DELETE_GLOBAL_TEMPLATE"


@pytest.mark.asyncio
async def test_get_and_update_template(client: AsyncClient, db_session, team, onboard):
    workspace, headers = await team()
    response = await client.post(
        "/templates",
        json={"workspace_id": workspace["id"], "name": "Feedback", "form_schema": SCHEMA},
        headers=headers["owner"],
    )
    template_id = response.json()["id"]
    outsider, _ = await onboard("outsider", "outsider@globex.io")

    response = await client.get(f"/templates/{template_id}", headers=headers["viewer"])
    assert response.status_code == 200
    assert response.json()["form_schema"] == SCHEMA

    response = await client.get(f"/templates/{template_id}", headers=outsider)
    assert response.status_code == 403

    response = await client.put(
        f"/templates/{template_id}", json={"name": "NPS"}, headers=headers["member"]
    )
    assert response.status_code == 403

    response = await client.put(
        f"/templates/{template_id}",
        json={"name": "NPS", "category": "surveys"},
        headers=headers["owner"],
    )
    assert response.status_code == 200
    assert response.json()["name"] == "NPS"
    assert response.json()["category"] == "surveys"
    assert response.json()["form_schema"] == SCHEMA

    response = await client.put(
        f"/templates/{template_id}", json={"name": None}, headers=headers["owner"]
    )
    assert response.status_code == 422

    global_template = Template(name="Contact Form", form_schema=SCHEMA, is_global=True)
    db_session.add(global_template)
    await db_session.commit()
    global_id = global_template.id

    response = await client.get(f"/templates/{global_id}", headers=outsider)
    assert response.status_code == 200

    response = await client.put(
        f"/templates/{global_id}", json={"name": "Mine now"}, headers=headers["owner"]
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CANNOT_MODIFY_GLOBAL_TEMPLATE"

    response = await client.get(
        "/templates/00000000-0000-0000-0000-000000000000", headers=headers["owner"]
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_save_form_as_template(client: AsyncClient, team):
    workspace, headers = await team()
    response = await client.post(
        f"/workspaces/by-id/{workspace['id']}/forms",
        json={"title": "Survey", "description": "Quarterly survey", "config": SCHEMA},
        headers=headers["member"],
    )
    form_id = response.json()["id"]
    url = f"/forms/{form_id}/save-as-template"

    response = await client.post(url, json={"name": "Survey template"}, headers=headers["member"])
    assert response.status_code == 403

    response = await client.post(url, json={"name": "Survey template"}, headers=headers["owner"])
    assert response.status_code == 201
    saved = response.json()
    assert saved["form_id"] == form_id
    assert saved["form_title"] == "Survey"
    assert saved["template"]["form_schema"] == SCHEMA
    assert saved["template"]["description"] == "Quarterly survey"
    assert saved["template"]["workspace_id"] == workspace["id"]
    assert saved["template"]["is_global"] is False

    response = await client.put(
        f"/forms/{form_id}", json={"config": {"questions": []}}, headers=headers["member"]
    )
    assert response.status_code == 200

    response = await client.get(f"/templates/{saved['template']['id']}", headers=headers["viewer"])
    assert response.json()["form_schema"] == SCHEMA

    response = await client.put(f"/forms/{form_id}", json={"title": None}, headers=headers["member"])
    assert response.status_code == 422

    response = await client.post(
        "/forms/00000000-0000-0000-0000-000000000000/save-as-template",
        json={"name": "Nothing"},
        headers=headers["owner"],
    )
    assert response.status_code == 404
