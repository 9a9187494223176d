# backend/tests/api/test_companies.py
from fastapi import status


def test_create_company(client, admin_headers, regular_user):
    response = client.post(
        "/companies",
        json={
            "name": "Builders Ltd",
            "businessId": "7654321-0",
            "industry": "Construction",
            "address": [{"addressName": "Office", "street": "Harbor 2", "zip": "00180", "city": "Helsinki"}],
            "contactIds": [regular_user.id]
        },
        headers=admin_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["result"]
    assert data["name"] == "Builders Ltd"
    assert data["businessId"] == "7654321-0"
    assert data["address"][0]["addressName"] == "Office"
    assert data["contactIds"] == [regular_user.id]
    assert data["projectIds"] == []


def test_create_company_duplicate_name(client, admin_headers, sample_company):
    response = client.post("/companies", json={"name": sample_company.name}, headers=admin_headers)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "Company with given name already exists."


def test_create_company_requires_admin(client, user_headers):
    response = client.post("/companies", json={"name": "Nope"}, headers=user_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_create_company_unknown_contact(client, admin_headers):
    response = client.post("/companies", json={"name": "Ghosts", "contactIds": [99999]}, headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_companies(client, admin_headers, sample_company):
    response = client.get("/companies", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["query"]["limit"] == "perPage"
    assert body["companies"]["items"][0]["name"] == "Acme Engineering"


def test_list_companies_requires_admin(client, user_headers, sample_company):
    response = client.get("/companies", headers=user_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_companies_name_filter(client, admin_headers, sample_company):
    response = client.get("/companies", params={"name": "acme"}, headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK

    response = client.get("/companies", params={"name": "globex"}, headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "No companies found."


def test_get_company(client, user_headers, sample_company, sample_project):
    response = client.get(f"/companies/{sample_company.id}", headers=user_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["company"]
    assert data["industry"] == "Construction"
    assert data["projectIds"] == [sample_project.id]


def test_update_company(client, admin_headers, sample_company, regular_user):
    response = client.put(
        f"/companies/{sample_company.id}",
        json={"industry": "Infrastructure", "contactIds": [regular_user.id]},
        headers=admin_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["company"]
    assert data["industry"] == "Infrastructure"
    assert data["name"] == "Acme Engineering"
    assert data["contactIds"] == [regular_user.id]


def test_update_company_cannot_clear_name(client, admin_headers, sample_company):
    response = client.put(f"/companies/{sample_company.id}", json={"name": None}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_company(client, admin_headers, sample_company):
    response = client.delete(f"/companies/{sample_company.id}", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["company"]["name"] == "Acme Engineering"

    response = client.get(f"/companies/{sample_company.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_company_clears_references(client, admin_headers, db_session, sample_company, sample_project,
                                          regular_user):
    regular_user.company_id = sample_company.id
    db_session.commit()

    response = client.delete(f"/companies/{sample_company.id}", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["company"]["projectIds"] == [sample_project.id]

    project = client.get(f"/projects/{sample_project.id}", headers=admin_headers).json()["project"]
    assert project["companyId"] is None

    user = client.get(f"/users/{regular_user.id}", headers=admin_headers).json()["user"]
    assert user["companyId"] is None
