import pytest

from rentflow.properties.models import Property

pytestmark = pytest.mark.django_db


def test_missing_organization_header(client):
    res = client.get("/api/v1/properties/")

    assert res.status_code == 400
    assert res.json()["code"] == "ORGANIZATION_ID_REQUIRED"


def test_other_organization_is_denied(client, foreign_org):
    res = client.get("/api/v1/properties/", HTTP_X_ORGANIZATION_ID=str(foreign_org.id))

    assert res.status_code == 403
    assert res.json()["code"] == "ORGANIZATION_ACCESS_DENIED"


def test_inactive_organization_is_blocked(client, org, scope_headers):
    org.is_active = False
    org.save(update_fields=["is_active"])

    res = client.get("/api/v1/properties/", **scope_headers)

    assert res.status_code == 403
    assert res.json()["code"] == "ORGANIZATION_INACTIVE"


def test_lists_only_show_own_rows(client, org, foreign_org, scope_headers):
    Property.objects.create(organization=org, name="Mine", address="a")
    Property.objects.create(organization=foreign_org, name="Theirs", address="b")

    res = client.get("/api/v1/properties/", **scope_headers)

    assert res.status_code == 200
    names = [row["name"] for row in res.json()["results"]]
    assert names == ["Mine"]


def test_foreign_row_by_id_is_not_found(client, foreign_org, scope_headers):
    theirs = Property.objects.create(organization=foreign_org, name="Theirs", address="b")

    res = client.get(f"/api/v1/properties/{theirs.id}/", **scope_headers)

    assert res.status_code == 404
    assert res.json()["code"] == "RESOURCE_NOT_FOUND"
