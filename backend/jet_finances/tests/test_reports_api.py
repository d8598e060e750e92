"""
Tests for the expenses-by-month report endpoints.
"""
from datetime import date
from decimal import Decimal
from io import BytesIO

from openpyxl import load_workbook

from jet_finances.models.dictionary import InvoiceType
from jet_finances.models.expense import Expense
from jet_finances.services.export_service import XLSX_MEDIA_TYPE
from jet_finances.services.period_service import add_months, month_key

THIS_MONTH = date.today().replace(day=1)


def add_expense(db, exp_type, amount, currency="USD", start=THIS_MONTH, **extra):
    db.add(Expense(
        exp_type=exp_type,
        exp_amount=Decimal(amount),
        exp_currency=currency,
        exp_period_start=start,
        exp_period_end=add_months(start, 1),
        **extra
    ))
    db.commit()


def test_report_data(superadmin_client, db):
    add_expense(db, "Fuel", "1000")
    add_expense(db, "Crew", "367.35", currency="AED")

    response = superadmin_client.get("/api/reports/expenses-by-month/data")

    assert response.status_code == 200
    body = response.json()
    key = month_key(THIS_MONTH)
    assert body["months"] == [key]
    rows = {row["label"]: row["cells"][key] for row in body["rows"]}
    assert rows["Fuel"]["usd"] == 1000
    assert rows["Crew"]["usd"] == 100
    assert body["total"]["cells"][key]["usd"] == 1100


def test_report_subcategories(superadmin_client, db):
    add_expense(db, "Ground handling", "50", exp_subtype="arrival")
    add_expense(db, "Ground handling", "70", exp_subtype="departure")

    flat = superadmin_client.get("/api/reports/expenses-by-month/data").json()
    detailed = superadmin_client.get(
        "/api/reports/expenses-by-month/data", params={"showSubcategories": "true"}
    ).json()

    assert [row["label"] for row in flat["rows"]] == ["Ground handling"]
    assert [row["label"] for row in detailed["rows"]] == [
        "Ground handling - arrival",
        "Ground handling - departure",
    ]


def test_report_income_rows(superadmin_client, db):
    credit_note = InvoiceType(name="Credit note")
    db.add(credit_note)
    db.commit()
    add_expense(db, "Fuel", "500")
    add_expense(db, "Fuel", "200", exp_invoice_type=credit_note.id)

    body = superadmin_client.get("/api/reports/expenses-by-month/data").json()
    key = month_key(THIS_MONTH)

    assert body["credit_note"]["cells"][key]["usd"] == 200
    assert body["total"]["cells"][key]["usd"] == 300


def test_report_download(reader_client, db):
    add_expense(db, "Fuel", "1000")

    response = reader_client.get("/api/reports/expenses-by-month", params={"year": "all", "reportForATS": "true"})

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="expenses_by_month_all_ATS_')
    assert disposition.endswith('.xlsx"')

    ws = load_workbook(BytesIO(response.content)).active
    assert ws["A1"].value == "Category"
    assert ws["B2"].value == "USD"


def test_current_year_excludes_older_expenses(superadmin_client, db):
    add_expense(db, "Fuel", "100", start=date(THIS_MONTH.year - 1, 6, 1))
    add_expense(db, "Fuel", "200")

    current = superadmin_client.get("/api/reports/expenses-by-month/data").json()
    everything = superadmin_client.get("/api/reports/expenses-by-month/data", params={"year": "all"}).json()

    assert current["months"] == [month_key(THIS_MONTH)]
    assert everything["months"][0] == f"{THIS_MONTH.year - 1}-06"


def test_report_without_data(superadmin_client):
    response = superadmin_client.get("/api/reports/expenses-by-month")
    assert response.status_code == 404
    assert response.json()["detail"] == "No data available for the selected period"


def test_report_invalid_year(superadmin_client, db):
    add_expense(db, "Fuel", "100")
    response = superadmin_client.get("/api/reports/expenses-by-month/data", params={"year": "2019"})
    assert response.status_code == 400


def test_report_requires_session(make_client):
    assert make_client().get("/api/reports/expenses-by-month").status_code == 401


def test_report_categories_in_display_order(reader_client):
    response = reader_client.get("/api/reports/categories")

    assert response.status_code == 200
    categories = response.json()
    assert categories[0] == "CAMO and Management"
    assert categories.index("Disbursement fee") < categories.index("FalconCare")
    assert categories.index("Honeywell") < categories.index("Ground handling")
    assert categories[-1] == "Flight planning"
