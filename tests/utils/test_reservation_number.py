from app.utils.reservation_number import (
    generate_reservation_number,
    is_valid_reservation_number,
    normalize_reservation_number,
)


def test_format_and_prefix():
    number = generate_reservation_number("2025-02-15T14:30", "seminar-1", 1)
    assert number.startswith("2502-")
    assert is_valid_reservation_number(number)


def test_deterministic_and_distinct():
    first = generate_reservation_number("2025-02-15T14:30", "seminar-1", 1)
    assert first == generate_reservation_number("2025-02-15T14:30", "seminar-1", 1)
    assert first != generate_reservation_number("2025-02-15T14:30", "seminar-1", 2)
    assert first != generate_reservation_number("2025-02-15T14:30", "seminar-2", 1)


def test_unparseable_date():
    assert generate_reservation_number("TBD", "seminar-1", 1).startswith("0000-")


def test_validation():
    assert is_valid_reservation_number(" 2502-AB12 ")
    assert normalize_reservation_number(" 2502-AB12 ") == "2502-ab12"
    assert not is_valid_reservation_number("2502-ab1")
    assert not is_valid_reservation_number("25020-ab12")
    assert not is_valid_reservation_number("")
