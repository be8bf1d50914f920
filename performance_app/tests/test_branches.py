import pytest

from accounts.branches import is_head_office_unit


@pytest.mark.parametrize("branch,expected", [
    ("HO", True),
    ("ho", True),
    ("Head Office", True),
    ("HEAD  OFFICE", True),
    ("Head Office - Finance", True),
    ("Finance/HO", True),
    ("Finance / HO", True),
    ("North/Houston", False),
    ("Metro/Hollis Ave", False),
    ("HOUSTON", False),
    ("Branch 12", False),
    ("Hoboken", False),
    ("", False),
    (None, False),
])
def test_is_head_office_unit(branch, expected):
    assert is_head_office_unit(branch) is expected


@pytest.mark.django_db
def test_user_head_office_flag(create_user):
    assert create_user(branch="HO").is_head_office
    assert not create_user(branch="Branch 3").is_head_office
