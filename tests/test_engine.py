from datetime import date, datetime
from itertools import permutations

import pytest

from guesthouse.availability.constants import BookingStatus
from guesthouse.availability.engine import (
    date_ranges_overlap,
    get_booked_dates_for_property,
    get_booked_dates_for_room,
    is_room_available,
    validate_booking,
)
from guesthouse.availability.exceptions import InvalidDateError


PROPERTY_ID = 'prop-1'


def test_checkout_day_blocks_new_checkin():
    assert date_ranges_overlap(
        '2024-02-15', '2024-02-18', '2024-02-18', '2024-02-20',
    ) is True


def test_adjacent_ranges_without_shared_day_do_not_overlap():
    assert date_ranges_overlap(
        '2024-02-15', '2024-02-18', '2024-02-19', '2024-02-21',
    ) is False


@pytest.mark.parametrize(
    'ranges',
    [
        ('2024-02-15', '2024-02-18', '2024-02-18', '2024-02-20'),
        ('2024-02-15', '2024-02-18', '2024-02-19', '2024-02-21'),
        ('2024-02-10', '2024-02-28', '2024-02-15', '2024-02-16'),
        ('2024-02-15', '2024-02-15', '2024-02-15', '2024-02-15'),
        ('2024-03-01', '2024-03-05', '2024-01-01', '2024-01-02'),
    ],
)
def test_overlap_is_symmetric(ranges):
    a_start, a_end, b_start, b_end = ranges
    assert date_ranges_overlap(a_start, a_end, b_start, b_end) == (
        date_ranges_overlap(b_start, b_end, a_start, a_end)
    )


def test_zero_length_stay_overlaps_inside_and_on_boundaries():
    for day in ('2024-02-15', '2024-02-16', '2024-02-18'):
        assert date_ranges_overlap(
            day, day, '2024-02-15', '2024-02-18',
        ) is True
    assert date_ranges_overlap(
        '2024-02-19', '2024-02-19', '2024-02-15', '2024-02-18',
    ) is False


def test_same_day_in_any_representation_is_equal():
    representations = [
        '2024-02-18',
        date(2024, 2, 18),
        datetime(2024, 2, 18, 23, 59),
        '2024-02-18T10:30:00',
        '2024-02-18T10:30:00Z',
    ]
    for start, end in permutations(representations, 2):
        assert date_ranges_overlap(start, start, end, end) is True


def test_malformed_date_fails_fast_by_default():
    with pytest.raises(InvalidDateError):
        date_ranges_overlap('2024-02-31', '2024-03-02', '2024-03-01', '2024-03-03')


@pytest.mark.usefixtures('permissive_dates')
def test_malformed_date_means_no_overlap_in_permissive_mode():
    assert date_ranges_overlap(
        'not-a-date', '2024-03-02', '2024-03-01', '2024-03-03',
    ) is False
    assert date_ranges_overlap(
        '2024-03-01', '2024-03-02', '2024-03-01', 'garbage',
    ) is False


def test_explicit_strict_flag_overrides_settings(permissive_dates):
    with pytest.raises(InvalidDateError):
        date_ranges_overlap(
            'garbage', '2024-03-02', '2024-03-01', '2024-03-03', strict=True,
        )


def test_room_is_unavailable_when_booking_overlaps(make_booking):
    bookings = [make_booking('2024-02-15', '2024-02-18')]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-02-18', '2024-02-20', bookings,
    ) is False
    assert is_room_available(
        'R1', PROPERTY_ID, '2024-02-19', '2024-02-20', bookings,
    ) is True


def test_bookings_of_other_rooms_and_properties_are_ignored(make_booking):
    bookings = [
        make_booking('2024-02-15', '2024-02-18', room_ids=('R2',)),
        make_booking('2024-02-15', '2024-02-18', property_id='prop-2'),
    ]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-02-15', '2024-02-18', bookings,
    ) is True


@pytest.mark.parametrize(
    'status',
    [BookingStatus.CANCELLED, BookingStatus.EXPIRED],
)
def test_inactive_bookings_do_not_block(make_booking, status):
    bookings = [make_booking('2024-02-15', '2024-02-18', status=status)]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-02-15', '2024-02-18', bookings,
    ) is True
    assert get_booked_dates_for_room('R1', PROPERTY_ID, bookings) == set()


def test_inverted_candidate_still_overlaps_literally():
    assert date_ranges_overlap(
        '2024-03-05', '2024-03-01', '2024-03-01', '2024-03-05',
    ) is True
    assert date_ranges_overlap(
        '2024-03-05', '2024-03-01', '2024-03-06', '2024-03-08',
    ) is False


def test_confirmed_booking_blocks(make_booking):
    bookings = [
        make_booking(
            '2024-02-15', '2024-02-18', status=BookingStatus.CONFIRMED,
        ),
    ]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-02-16', '2024-02-16', bookings,
    ) is False


def test_edited_booking_does_not_conflict_with_itself(make_booking):
    booking = make_booking('2024-03-01', '2024-03-05', booking_id='B')
    bookings = [booking]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-03-01', '2024-03-05', bookings,
        exclude_booking_id=booking.id,
    ) is True
    assert is_room_available(
        'R1', PROPERTY_ID, '2024-03-01', '2024-03-05', bookings,
    ) is False


def test_excluding_one_booking_keeps_the_others(make_booking):
    bookings = [
        make_booking('2024-03-01', '2024-03-05', booking_id='B1'),
        make_booking('2024-03-04', '2024-03-08', booking_id='B2'),
    ]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-03-01', '2024-03-05', bookings,
        exclude_booking_id='B1',
    ) is False


def test_result_does_not_depend_on_booking_order(make_booking):
    bookings = [
        make_booking('2024-03-01', '2024-03-03', status=BookingStatus.CANCELLED),
        make_booking('2024-03-10', '2024-03-12'),
        make_booking('2024-03-05', '2024-03-06', room_ids=('R2',)),
    ]

    results = {
        is_room_available(
            'R1', PROPERTY_ID, '2024-03-02', '2024-03-10', list(order),
        )
        for order in permutations(bookings)
    }

    assert results == {False}


def test_room_dates_include_checkin_and_checkout(make_booking):
    bookings = [make_booking('2024-02-27', '2024-03-01')]

    assert get_booked_dates_for_room('R1', PROPERTY_ID, bookings) == {
        '2024-02-27',
        '2024-02-28',
        '2024-02-29',
        '2024-03-01',
    }


def test_room_dates_are_deduplicated(make_booking):
    bookings = [
        make_booking('2024-05-01', '2024-05-03'),
        make_booking('2024-05-03', '2024-05-04'),
    ]

    assert get_booked_dates_for_room('R1', PROPERTY_ID, bookings) == {
        '2024-05-01',
        '2024-05-02',
        '2024-05-03',
        '2024-05-04',
    }


def test_inverted_booking_range_has_no_days(make_booking):
    bookings = [make_booking('2024-05-05', '2024-05-01')]

    assert get_booked_dates_for_room('R1', PROPERTY_ID, bookings) == set()


def test_booked_dates_agree_with_availability(make_booking):
    bookings = [
        make_booking('2024-06-01', '2024-06-04'),
        make_booking('2024-06-10', '2024-06-10'),
        make_booking('2024-06-20', '2024-06-25', status=BookingStatus.EXPIRED),
    ]

    booked = get_booked_dates_for_room('R1', PROPERTY_ID, bookings)

    assert booked
    for day in booked:
        assert is_room_available(
            'R1', PROPERTY_ID, day, day, bookings,
        ) is False


def test_property_dates_cover_all_rooms(make_booking):
    bookings = [
        make_booking('2024-07-01', '2024-07-02', room_ids=('R1',)),
        make_booking('2024-07-02', '2024-07-03', room_ids=('R2', 'R3')),
        make_booking('2024-07-05', '2024-07-05', property_id='prop-2'),
        make_booking(
            '2024-07-08', '2024-07-09', status=BookingStatus.CANCELLED,
        ),
    ]

    assert get_booked_dates_for_property(PROPERTY_ID, bookings) == {
        '2024-07-01',
        '2024-07-02',
        '2024-07-03',
    }


def test_multi_room_booking_reports_only_conflicting_room(make_booking):
    blocking = make_booking(
        '2024-08-10', '2024-08-12', room_ids=('R2',), reference_id='GH-2024-007',
    )
    bookings = [blocking]

    result = validate_booking(
        ['R1', 'R2'], PROPERTY_ID, '2024-08-11', '2024-08-13', bookings,
    )

    assert result.is_valid is False
    assert result.conflicting_rooms == ['R2']
    assert result.conflicting_bookings == [blocking]


def test_multi_room_booking_is_valid_when_all_rooms_free(make_booking):
    bookings = [make_booking('2024-08-01', '2024-08-05', room_ids=('R1', 'R2'))]

    result = validate_booking(
        ['R1', 'R2'], PROPERTY_ID, '2024-08-06', '2024-08-08', bookings,
    )

    assert result.is_valid is True
    assert result.conflicting_rooms == []
    assert result.conflicting_bookings == []


def test_conflicting_bookings_are_deduplicated(make_booking):
    shared = make_booking('2024-08-10', '2024-08-12', room_ids=('R1', 'R2'))
    other = make_booking('2024-08-12', '2024-08-14', room_ids=('R2',))

    result = validate_booking(
        ['R1', 'R2', 'R3'], PROPERTY_ID, '2024-08-11', '2024-08-12',
        [shared, other],
    )

    assert result.conflicting_rooms == ['R1', 'R2']
    assert [b.id for b in result.conflicting_bookings] == [shared.id, other.id]


def test_duplicate_room_ids_are_reported_once(make_booking):
    bookings = [make_booking('2024-08-10', '2024-08-12')]

    result = validate_booking(
        ['R1', 'R1'], PROPERTY_ID, '2024-08-10', '2024-08-10', bookings,
    )

    assert result.conflicting_rooms == ['R1']


def test_validate_booking_respects_exclusion(make_booking):
    booking = make_booking(
        '2024-09-01', '2024-09-03', room_ids=('R1', 'R2'), booking_id='B',
    )

    result = validate_booking(
        ['R1', 'R2'], PROPERTY_ID, '2024-09-02', '2024-09-04', [booking],
        exclude_booking_id='B',
    )

    assert result.is_valid is True


@pytest.mark.usefixtures('permissive_dates')
def test_permissive_mode_treats_malformed_stay_as_available(make_booking):
    bookings = [make_booking('2024-09-01', '2024-09-03')]

    assert is_room_available(
        'R1', PROPERTY_ID, '2024-13-01', '2024-09-03', bookings,
    ) is True
    assert validate_booking(
        ['R1'], PROPERTY_ID, 'oops', '2024-09-03', bookings,
    ).is_valid is True


def test_operations_are_idempotent_and_do_not_mutate_input(make_booking):
    bookings = [
        make_booking('2024-10-01', '2024-10-03'),
        make_booking('2024-10-02', '2024-10-04', room_ids=('R2',)),
    ]
    snapshot = list(bookings)

    first = validate_booking(
        ['R1', 'R2'], PROPERTY_ID, '2024-10-03', '2024-10-05', bookings,
    )
    second = validate_booking(
        ['R1', 'R2'], PROPERTY_ID, '2024-10-03', '2024-10-05', bookings,
    )

    assert first == second
    assert get_booked_dates_for_property(PROPERTY_ID, bookings) == (
        get_booked_dates_for_property(PROPERTY_ID, bookings)
    )
    assert bookings == snapshot
