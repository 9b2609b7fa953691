from datetime import date
from itertools import count

import pytest

from tracker.domain import FilterCriteria, Kind, Summary
from tracker.errors import InvalidTransactionError, TransactionNotFoundError
from tracker.services import TrackerService, calc_summary
from tracker.storage import MemoryStorage
from tracker.store import TransactionStore

from helpers import scenario


def make_service(trans=(), calculators=None):
    store = TransactionStore(MemoryStorage())
    store.replace_all(trans)
    ids = count(1)
    return TrackerService(store, calculators=calculators, id_factory=lambda: f"id{next(ids)}")


def yes(message):
    return True


def no(message):
    return False


FORM = {
    "title": " Lunch ",
    "description": "",
    "amount": 120,
    "kind": "expense",
    "category": "Food",
    "date": "2025-02-10",
}


def test_submit_creates_with_new_id():
    svc = make_service()
    t = svc.submit(FORM)
    assert t.id == "id1"
    assert t.title == "Lunch"
    assert t.kind is Kind.EXPENSE
    assert t.date == date(2025, 2, 10)
    assert svc.store.get_all() == (t,)


def test_submit_edit_replaces_whole_record():
    svc = make_service(scenario())
    edited = svc.submit(dict(FORM, title="Big shop", amount=2500), tx_id="t2")
    assert edited.id == "t2"
    assert [t.id for t in svc.store.get_all()] == ["t1", "t2", "t3"]
    assert svc.store.get("t2").description == ""
    assert svc.store.get("t2").amount == 2500


def test_submit_edit_of_missing_id_fails():
    svc = make_service(scenario())
    with pytest.raises(TransactionNotFoundError):
        svc.submit(FORM, tx_id="ghost")
    assert svc.store.get_all() == scenario()


def test_submit_invalid_record():
    svc = make_service()
    with pytest.raises(InvalidTransactionError) as exc:
        svc.submit(dict(FORM, category=""))
    assert exc.value.details["error"] == "missing_category"
    assert svc.store.get_all() == ()


def test_edit_target():
    svc = make_service(scenario())
    assert svc.edit_target("t3").title == "Movie"
    with pytest.raises(TransactionNotFoundError):
        svc.edit_target("ghost")


def test_delete_needs_confirmation():
    svc = make_service(scenario())
    prompts = []

    def declining(message):
        prompts.append(message)
        return False

    assert svc.delete("t1", declining) is False
    assert len(svc.store) == 3
    assert prompts == ["Delete?"]

    assert svc.delete("t1", yes) is True
    assert [t.id for t in svc.store.get_all()] == ["t2", "t3"]


def test_delete_missing_id_does_not_raise():
    svc = make_service(scenario())
    assert svc.delete("ghost", yes) is True
    assert svc.store.get_all() == scenario()


def test_clear_all():
    svc = make_service(scenario())
    assert svc.clear_all(no) is False
    assert len(svc.store) == 3
    assert svc.clear_all(yes) is True
    assert svc.store.get_all() == ()


def test_load_sample_data_replaces_store():
    svc = make_service(scenario())
    sample = svc.load_sample_data()
    assert svc.store.get_all() == sample
    assert [t.title for t in sample] == ["Salary", "Groceries", "Movie"]
    assert [t.id for t in sample] == ["id1", "id2", "id3"]


def test_view_filters_but_dashboard_uses_full_store():
    svc = make_service(scenario())
    view = svc.view(FilterCriteria(kind=Kind.INCOME), today=date(2025, 2, 20))
    assert [t.id for t in view] == ["t1"]

    result = svc.dashboard(today=date(2025, 2, 20))["result"]
    assert result["summary"] == Summary(40000, 2200, 37800, 2200)
    assert result["by_category"] == {"Food": 1800, "Entertainment": 400}
    assert result["by_month"][1] == 2200
    assert list(result["trend"].points()) == [("05/02/2025", 1800), ("07/02/2025", 2200)]


def test_dashboard_records_failing_calculator():
    def broken(trans, today, acc=None):
        raise RuntimeError("oops")

    svc = make_service(scenario(), calculators=[broken, calc_summary])
    report = svc.dashboard(today=date(2025, 2, 20))
    assert report["steps"][0] == {"calculator": "broken", "error": "oops"}
    assert report["steps"][1]["calculator"] == "calc_summary"
    assert report["result"]["summary"].balance == 37800


def test_dashboard_empty_store():
    result = make_service().dashboard(today=date(2025, 1, 1))["result"]
    assert result["summary"] == Summary(0, 0, 0, 0)
    assert result["by_category"] == {}
    assert result["by_month"] == (0,) * 12
    assert result["trend"].values == ()


def test_export_and_categories():
    svc = make_service()
    assert svc.export_csv() is None
    assert svc.categories() == []
    svc.load_sample_data()
    assert svc.export_csv().startswith("Title,Description,Amount,Type,Category,Date\n")
    assert svc.categories() == ["Salary", "Food", "Entertainment"]
