import datetime as dt

import pytest

from lyran_api.app.core.errors import InvalidTimeSpec, ValidationError
from lyran_api.app.schemas.booking import BookingRequest, BookingStatus, ResourceKind
from lyran_api.app.services import scheduling


GAME = ResourceKind.GAME_SLOT
TABLE = ResourceKind.SEATED_TABLE


@pytest.mark.parametrize(
    "resource_type, expected",
    [("table", TABLE), ("pool", GAME), ("dart", GAME), ("Table", GAME), ("bowling", GAME)],
)
def test_only_the_table_literal_is_a_seated_table(resource_type, expected):
    assert scheduling.resource_kind_for(resource_type) is expected


@pytest.mark.parametrize("requested, effective", [(None, 1), (0, 1), (1, 1), (2, 2), (5, 2), (-3, 1)])
def test_game_slots_are_clamped_between_one_and_two(requested, effective):
    window = scheduling.compute_window(GAME, "2025-09-01", "18:00", requested)
    assert window.effective_slots == effective
    assert window.duration == dt.timedelta(minutes=45 * effective)


@pytest.mark.parametrize("requested", [None, 1, 2, 7])
def test_table_is_always_seventy_minutes(requested):
    window = scheduling.compute_window(TABLE, "2025-09-01", "20:00", requested)
    assert window.effective_slots == 1
    assert window.duration == dt.timedelta(minutes=70)


def test_dart_example_window():
    window = scheduling.compute_window(GAME, "2025-09-01", "18:00", 2)
    assert window.start == dt.datetime(2025, 9, 1, 18, 0)
    assert window.end == dt.datetime(2025, 9, 1, 19, 30)
    assert window.end > window.start


def test_table_example_window():
    window = scheduling.compute_window(TABLE, dt.date(2025, 9, 1), dt.time(20, 0))
    assert window.start == dt.datetime(2025, 9, 1, 20, 0)
    assert window.end == dt.datetime(2025, 9, 1, 21, 10)


def test_late_game_slot_runs_past_midnight():
    window = scheduling.compute_window(GAME, "2025-09-01", "23:30", 2)
    assert window.end == dt.datetime(2025, 9, 2, 1, 0)


@pytest.mark.parametrize(
    "date, start_time",
    [("2025-13-01", "18:00"), ("not a date", "18:00"), ("2025-09-01", "25:00"), ("2025-09-01", "six pm")],
)
def test_unparseable_date_or_time_is_invalid_time_spec(date, start_time):
    with pytest.raises(InvalidTimeSpec) as excinfo:
        scheduling.compute_window(GAME, date, start_time, 1)
    assert isinstance(excinfo.value, ValidationError)


def test_prices():
    assert scheduling.compute_price(GAME, 1) == 50
    assert scheduling.compute_price(GAME, 2) == 100
    assert scheduling.compute_price(TABLE, 1) == 0


def test_initial_status():
    assert scheduling.initial_status(GAME) is BookingStatus.PENDING_PAYMENT
    assert scheduling.initial_status(TABLE) is BookingStatus.CONFIRMED


def test_payment_reference_for_game_slot(tokens):
    reference = scheduling.make_payment_reference(GAME, tokens)
    assert reference == "BOKNING 3F2B9C1E"


def test_payment_reference_with_random_token():
    reference = scheduling.make_payment_reference(GAME)
    assert reference.startswith("BOKNING ")
    suffix = reference[len("BOKNING "):]
    assert len(suffix) == 8
    assert suffix == suffix.upper()
    int(suffix, 16)


def test_table_has_no_payment_reference():
    assert scheduling.make_payment_reference(TABLE) is None


def test_quote_is_deterministic_apart_from_reference():
    request = BookingRequest(
        resource_type="pool",
        resource_kind=GAME,
        date=dt.date(2025, 9, 1),
        start_time=dt.time(17, 15),
        requested_slots=5,
        customer_name="Alva",
        customer_phone="070",
    )
    first = scheduling.quote(request)
    second = scheduling.quote(request)
    assert first.window == second.window
    assert first.price_sek == second.price_sek == 100
    assert first.price_ore == 10000
    assert first.status is second.status is BookingStatus.PENDING_PAYMENT
    assert first.payment_reference is not None


@pytest.mark.parametrize(
    "start_time", ["18:00+05:00", "18:00Z", dt.time(18, 0, tzinfo=dt.timezone.utc)]
)
def test_start_time_with_offset_is_rejected(start_time):
    with pytest.raises(InvalidTimeSpec) as excinfo:
        scheduling.compute_window(GAME, "2025-09-01", start_time, 1)
    assert excinfo.value.fields == ["start_time"]


@pytest.mark.parametrize("kind, slots", [(GAME, 2), (TABLE, None)])
def test_window_past_last_representable_day_is_invalid(kind, slots):
    with pytest.raises(InvalidTimeSpec) as excinfo:
        scheduling.compute_window(kind, "9999-12-31", "23:30", slots)
    assert excinfo.value.fields == ["date"]
