"""
HTTP tests for the account and category endpoints.
"""

from decimal import Decimal

OWNER = "alice@example.com"


def account_payload(**overrides):
    payload = {
        "owner": OWNER,
        "accountName": "HDFC",
        "accountType": "Savings",
        "balance": "1000",
        "currency": "INR",
    }
    payload.update(overrides)
    return payload


def test_create_account(client):
    response = client.post("/api/accounts", json=account_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["accountName"] == "HDFC"
    assert data["accountType"] == "Savings"
    assert Decimal(data["balance"]) == Decimal("1000")
    assert data["isActive"] is True


def test_duplicate_account_returns_409(client):
    client.post("/api/accounts", json=account_payload())
    response = client.post("/api/accounts", json=account_payload())

    assert response.status_code == 409
    assert response.json() == {"error": "Account 'HDFC' already exists"}


def test_invalid_account_type_returns_400(client):
    response = client.post("/api/accounts", json=account_payload(accountType="Piggy Bank"))
    assert response.status_code == 400


def test_list_accounts(client):
    client.post("/api/accounts", json=account_payload(accountName="Wallet"))
    client.post("/api/accounts", json=account_payload(accountName="Axis"))

    data = client.get(f"/api/accounts/{OWNER}").json()
    assert [a["accountName"] for a in data] == ["Axis", "Wallet"]


def test_get_missing_account_returns_404(client):
    response = client.get(f"/api/accounts/{OWNER}/Nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Account 'Nope' not found"}


def test_create_and_filter_categories(client):
    for name, type_, division in (
        ("Salary", "Income", "Office"),
        ("Food", "Expense", "Personal"),
        ("Misc", "Both", "Both"),
    ):
        response = client.post("/api/categories", json={
            "owner": OWNER, "name": name, "type": type_, "division": division,
        })
        assert response.status_code == 201

    expense = client.get(f"/api/categories/{OWNER}", params={"type": "Expense"}).json()
    office = client.get(f"/api/categories/{OWNER}", params={"division": "Office"}).json()

    assert [c["name"] for c in expense] == ["Food", "Misc"]
    assert [c["name"] for c in office] == ["Misc", "Salary"]


def test_duplicate_category_returns_409(client):
    payload = {"owner": OWNER, "name": "Food", "type": "Expense"}
    client.post("/api/categories", json=payload)

    response = client.post("/api/categories", json=payload)
    assert response.status_code == 409
