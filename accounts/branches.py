"""
Organizational-unit helpers.

Branch metadata arrives as free text from the HR import ("HO", "Head Office",
"HEAD OFFICE - Finance", "Branch 12" ...). Everything that needs to know
whether an employee belongs to the head office asks here once and passes the
resulting boolean down; the scoring and validation services never look at
branch names.
"""

HEAD_OFFICE_CODES = {"HO", "HEAD OFFICE"}


def _normalize(value):
    return " ".join(str(value or "").upper().split())


def is_head_office_unit(branch) -> bool:
    name = _normalize(branch)
    if not name:
        return False
    if "HEAD OFFICE" in name:
        return True
    # whole segments of "FINANCE/HO" style unit paths
    return any(segment.strip() in HEAD_OFFICE_CODES for segment in name.split("/"))
