# backend/tests/services/test_pagination.py
import pytest

from projectmanager.models import Company
from projectmanager.services.exceptions import NotFoundError
from projectmanager.services.pagination import (
    MAX_PAGE, MAX_PAGE_SIZE, Page, PageParams, escape_like, paginate
)


def test_parse_defaults():
    params = PageParams.parse(default_page_size=10)

    assert params.page == 1
    assert params.page_size == 10
    assert params.paginate is True
    assert params.sort is None


@pytest.mark.parametrize("page,per_page,expected", [
    ("3", "25", (3, 25)),
    ("abc", "x", (1, 10)),
    ("0", "0", (1, 1)),
    ("-4", "-1", (1, 1)),
    ("2.5", None, (1, 10)),
])
def test_parse_coerces_numbers(page, per_page, expected):
    params = PageParams.parse(page, per_page, default_page_size=10)
    assert (params.page, params.page_size) == expected


def test_parse_caps_large_values():
    params = PageParams.parse("99999999999999999999", "99999999999999999999", default_page_size=10)

    assert params.page == MAX_PAGE
    assert params.page_size == MAX_PAGE_SIZE
    assert params.page * params.page_size < 2 ** 63


def test_parse_respects_configured_max_page_size():
    assert PageParams.parse(per_page="500", max_page_size=250).page_size == 250


@pytest.mark.parametrize("value,expected", [
    (None, True),
    ("true", True),
    ("TRUE", True),
    ("false", False),
    ("1", False),
    ("", False),
])
def test_parse_paginate_flag(value, expected):
    assert PageParams.parse(paginate=value).paginate is expected


def test_total_pages():
    assert Page(items=[], page=1, page_size=10, total_count=0).total_pages == 0
    assert Page(items=[1], page=1, page_size=10, total_count=10).total_pages == 1
    assert Page(items=[1], page=1, page_size=10, total_count=11).total_pages == 2


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_paginate_empty_query_raises(db_session):
    with pytest.raises(NotFoundError, match="No companies found."):
        paginate(db_session.query(Company), PageParams(), resource="companies")


def test_paginate_slices(db_session):
    db_session.add_all([Company(name=f"Company {i}") for i in range(5)])
    db_session.commit()

    page = paginate(db_session.query(Company).order_by(Company.id), PageParams(page=2, page_size=2))

    assert [c.name for c in page.items] == ["Company 2", "Company 3"]
    assert page.total_count == 5
    assert page.total_pages == 3
