import pytest

from dbtoolkit.db.paginator import Paginator
from dbtoolkit.db.query import ExecutionFailure

BASE = "SELECT id, name FROM users ORDER BY id"


def test_first_page_metadata(db, make_users):
    make_users(db, 23)
    res = Paginator(db).paginate(BASE, {}, page=1, per_page=10)
    assert [r["id"] for r in res.rows] == list(range(1, 11))
    assert res.meta.as_dict() == {"page": 1, "perPage": 10, "total": 23, "totalPages": 3, "offset": 0}
    assert res.meta.has_next and not res.meta.has_previous


def test_partial_last_page(db, make_users):
    make_users(db, 23)
    res = db.paginate(BASE, page=3, per_page=10)
    assert [r["id"] for r in res.rows] == [21, 22, 23]
    assert res.meta.offset == 20
    assert not res.meta.has_next


def test_page_past_the_end_is_empty(db, make_users):
    make_users(db, 5)
    res = db.paginate(BASE, page=4, per_page=2)
    assert res.rows == []
    assert res.meta.total == 5
    assert res.meta.total_pages == 3


def test_clamps_page_and_per_page(db, make_users):
    make_users(db, 3)
    res = db.paginate(BASE, {}, page=0, per_page=1000)
    assert res.meta.page == 1
    assert res.meta.per_page == 200
    assert res.meta.offset == 0
    assert len(res.rows) == 3

    res = db.paginate(BASE, {}, page=-5, per_page=0)
    assert res.meta.page == 1
    assert res.meta.per_page == 1
    assert len(res.rows) == 1


@pytest.mark.parametrize("page", [1, 2, 7])
def test_zero_rows(db, page):
    res = db.paginate(BASE, {}, page=page, per_page=10)
    assert res.rows == []
    assert res.meta.total == 0
    assert res.meta.total_pages == 1


@pytest.mark.parametrize("n,per_page", [(23, 10), (20, 5), (7, 7), (1, 3)])
def test_pages_reassemble_full_result(db, make_users, n, per_page):
    make_users(db, n)
    full = db.select_all(BASE)
    pager = Paginator(db)
    first = pager.paginate(BASE, None, 1, per_page)
    collected = list(first.rows)
    for page in range(2, first.meta.total_pages + 1):
        collected.extend(pager.paginate(BASE, None, page, per_page).rows)
    assert collected == full


def test_named_filter_params(db, make_users):
    make_users(db, 9)
    res = db.paginate(
        "SELECT id, name, status FROM users WHERE status = :s ORDER BY id DESC",
        {"s": "active"},
        page=1,
        per_page=5,
    )
    assert res.meta.total == 6
    assert res.meta.total_pages == 2
    assert [r["id"] for r in res.rows] == [8, 7, 5, 4, 2]


def test_positional_filter_params(db, make_users):
    make_users(db, 9)
    res = db.paginate("SELECT id FROM users WHERE status = ? ORDER BY id", ["inactive"], page=2, per_page=2)
    assert res.meta.total == 3
    assert [r["id"] for r in res.rows] == [9]


def test_limit_and_offset_are_bound_as_ints(db, make_users):
    make_users(db, 4)
    db.paginate(BASE, {}, page="2", per_page="2")
    last = db.last_query()
    assert last["sql"].endswith("LIMIT :__limit OFFSET :__offset")
    assert type(last["params"]["__limit"]) is int
    assert type(last["params"]["__offset"]) is int
    assert last["params"] == {"__limit": 2, "__offset": 2}


def test_trailing_semicolon_is_tolerated(db, make_users):
    make_users(db, 3)
    res = db.paginate(BASE + " ; ", page=1, per_page=2)
    assert res.meta.total == 3
    assert len(res.rows) == 2


def test_malformed_base_query_fails_on_count(db):
    with pytest.raises(ExecutionFailure) as excinfo:
        db.paginate("SELEKT everything", page=1, per_page=5)
    assert "COUNT(*)" in excinfo.value.sql


def test_as_dict_shape(db, make_users):
    make_users(db, 2)
    out = db.paginate(BASE, page=1, per_page=1).as_dict()
    assert set(out) == {"data", "meta"}
    assert out["data"] == [{"id": 1, "name": "user01"}]
    assert out["meta"]["totalPages"] == 2


def test_trailing_line_comment_does_not_swallow_appended_clauses(db, make_users):
    make_users(db, 5)
    res = db.paginate("SELECT id FROM users WHERE status = :s ORDER BY id -- active only", {"s": "active"},
                      page=2, per_page=2)
    assert res.meta.total == 4
    assert res.meta.total_pages == 2
    assert [r["id"] for r in res.rows] == [4, 5]
    assert db.last_query()["params"] == {"s": "active", "__limit": 2, "__offset": 2}
