"""Unit tests for data models."""

import pytest
from datetime import timedelta
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from models import (
    CrewRegistry,
    CrewRole,
    Flight,
    OperatingRules,
    SeatMap,
    dynamic_price,
    format_minutes,
)
from models.exceptions import CrewNotFound, NoActiveBooking, NoSeatAvailable


def make_flight(seats=3, base_price=5000.0, departure=480, arrival=660):
    return Flight(
        id=1000,
        origin="DEL",
        destination="MUM",
        departure=departure,
        arrival=arrival,
        seats=seats,
        base_price=base_price
    )


class TestFlight:
    """Tests for Flight model."""

    def test_duration(self):
        """Test flight duration in minutes."""
        assert make_flight().duration == 180

    def test_starts_empty(self):
        """Test a new flight has every seat free."""
        flight = make_flight(seats=3)
        assert flight.seats_available == 3
        assert flight.bookings == []
        assert len(flight.waitlist) == 0
        assert flight.occupancy_fraction == 0.0

    def test_overlap_detects_conflict(self):
        """Test overlapping windows conflict."""
        flight = make_flight(departure=480, arrival=660)
        assert flight.overlaps(600, 700)
        assert flight.overlaps(400, 500)
        assert flight.overlaps(500, 600)

    def test_back_to_back_does_not_overlap(self):
        """Test touching endpoints are legal."""
        flight = make_flight(departure=480, arrival=660)
        assert not flight.overlaps(660, 800)
        assert not flight.overlaps(300, 480)

    def test_turnaround_widens_window(self):
        """Test a turnaround buffer turns back-to-back into a conflict."""
        flight = make_flight(departure=480, arrival=660)
        assert flight.overlaps(660, 800, turnaround=30)
        assert not flight.overlaps(690, 800, turnaround=30)

    def test_seats_total_follows_seat_map(self):
        """Test the seat count is read from the seat map and cannot drift."""
        flight = make_flight(seats=3)
        flight.seating.resize(5)
        assert flight.seats_total == 5
        with pytest.raises(AttributeError):
            flight.seats_total = 10
        assert flight.seats_total == 5

    def test_equality_by_id(self):
        """Test flights compare by identifier."""
        assert make_flight(seats=3) == make_flight(seats=5)

    def test_format_minutes(self):
        """Test minutes-since-midnight rendering."""
        assert format_minutes(480) == "08:00"
        assert format_minutes(905) == "15:05"
        assert format_minutes(0) == "00:00"


class TestSeatMap:
    """Tests for seat reservation, cancellation and waitlist promotion."""

    def test_reserve_lowest_free_seat(self):
        """Test seats are handed out lowest first."""
        seats = SeatMap(3)
        assert seats.reserve_seat("p1").seat_no == 1
        assert seats.reserve_seat("p2").seat_no == 2
        assert seats.seats_available == 1

    def test_reserve_full_raises_without_mutation(self):
        """Test a full flight rejects reservations and keeps its bitmap."""
        seats = SeatMap(1)
        seats.reserve_seat("p1")
        with pytest.raises(NoSeatAvailable):
            seats.reserve_seat("p2")
        assert seats.occupied_seats == [1]
        assert seats.seats_available == 0
        assert len(seats.bookings) == 1

    def test_book_full_goes_to_waitlist_tail(self):
        """Test booking a full flight enqueues the passenger."""
        seats = SeatMap(1)
        seats.book("p1")
        second = seats.book("p2")
        third = seats.book("p3")
        assert second.waitlisted and second.waitlist_position == 1
        assert third.waitlisted and third.waitlist_position == 2
        assert list(seats.waitlist) == ["p2", "p3"]
        assert seats.occupied_seats == [1]

    def test_cancel_frees_seat(self):
        """Test cancelling with an empty waitlist frees the seat."""
        seats = SeatMap(3)
        seats.book("p1")
        seats.book("p2")
        result = seats.cancel("p1")
        assert result.seat_no == 1
        assert result.promoted is None
        assert seats.seats_available == 2
        assert not seats.is_occupied(1)

    def test_cancel_keeps_history(self):
        """Test cancelled bookings stay in the history as inactive."""
        seats = SeatMap(2)
        seats.book("p1")
        seats.cancel("p1")
        assert len(seats.bookings) == 1
        assert seats.bookings[0].active is False
        assert seats.active_bookings() == []

    def test_cancel_without_booking_raises(self):
        """Test cancelling for an unknown passenger fails."""
        seats = SeatMap(2)
        seats.book("p1")
        with pytest.raises(NoActiveBooking):
            seats.cancel("p2")

    def test_cancel_twice_raises(self):
        """Test an already-cancelled booking cannot be cancelled again."""
        seats = SeatMap(2)
        seats.book("p1")
        seats.cancel("p1")
        with pytest.raises(NoActiveBooking):
            seats.cancel("p1")

    def test_cancel_promotes_waitlist_head_into_same_seat(self):
        """Test the freed seat goes straight to the longest-waiting passenger."""
        seats = SeatMap(2)
        seats.book("p1")
        seats.book("p2")
        seats.book("p3")
        seats.book("p4")

        result = seats.cancel("p1")

        assert result.promoted_passenger == "p3"
        assert result.promoted.seat_no == 1
        assert list(seats.waitlist) == ["p4"]
        assert seats.seats_available == 0

    def test_cancel_uses_first_active_booking(self):
        """Test a passenger holding two seats cancels the earlier one first."""
        seats = SeatMap(3)
        seats.book("p1")
        seats.book("p1")
        assert seats.cancel("p1").seat_no == 1
        assert [b.seat_no for b in seats.bookings_for("p1")] == [2]

    def test_availability_invariant_over_sequence(self):
        """Test available + active bookings always equals total seats."""
        seats = SeatMap(3)
        operations = [
            ("book", "a"), ("book", "b"), ("book", "c"), ("book", "d"),
            ("cancel", "b"), ("book", "e"), ("cancel", "a"), ("cancel", "d"),
            ("cancel", "e"), ("book", "f"), ("cancel", "c"),
        ]
        for op, passenger in operations:
            getattr(seats, op)(passenger)
            active = seats.active_bookings()
            assert seats.seats_available + len(active) == seats.seats_total
            assert sorted(b.seat_no for b in active) == seats.occupied_seats
            if seats.waitlist:
                assert seats.seats_available == 0

    def test_resize_grow_promotes_waitlist(self):
        """Test extra seats go to waitlisted passengers in order."""
        seats = SeatMap(1)
        seats.book("p1")
        seats.book("p2")
        seats.book("p3")
        promoted = seats.resize(2)
        assert [b.passenger_id for b in promoted] == ["p2"]
        assert list(seats.waitlist) == ["p3"]
        assert seats.seats_available == 0

    def test_resize_shrink_reseats_displaced(self):
        """Test bookings beyond the new capacity move to free seats."""
        seats = SeatMap(4)
        seats.book("p1")
        seats.book("p2")
        seats.book("p3")
        seats.cancel("p1")
        seats.cancel("p2")
        seats.resize(2)
        assert seats.bookings_for("p3")[0].seat_no == 1
        assert seats.seats_available == 1

    def test_resize_below_active_count_rejected(self):
        """Test a capacity below the active bookings is refused."""
        seats = SeatMap(3)
        seats.book("p1")
        seats.book("p2")
        with pytest.raises(ValueError):
            seats.resize(1)
        assert seats.seats_total == 3

    def test_non_positive_seats_rejected(self):
        """Test an empty seat map cannot be created."""
        with pytest.raises(ValueError):
            SeatMap(0)


class TestPricing:
    """Tests for dynamic pricing."""

    def test_empty_flight_at_base_price(self):
        """Test zero occupancy charges the base price."""
        assert dynamic_price(make_flight(seats=4, base_price=1000)) == 1000

    def test_full_flight_at_max_multiplier(self):
        """Test full occupancy charges 1.5x the base price."""
        flight = make_flight(seats=2, base_price=1000)
        flight.seating.book("p1")
        flight.seating.book("p2")
        assert dynamic_price(flight) == pytest.approx(1500)

    def test_partial_occupancy(self):
        """Test price scales linearly with occupancy."""
        flight = make_flight(seats=4, base_price=1000)
        flight.seating.book("p1")
        assert dynamic_price(flight) == pytest.approx(1125)

    def test_price_tracks_cancellations(self):
        """Test price is recomputed from live seat state."""
        flight = make_flight(seats=2, base_price=1000)
        flight.seating.book("p1")
        assert dynamic_price(flight) == pytest.approx(1250)
        flight.seating.cancel("p1")
        assert dynamic_price(flight) == pytest.approx(1000)

    def test_custom_surcharge(self):
        """Test the surcharge factor is configurable."""
        flight = make_flight(seats=1, base_price=1000)
        flight.seating.book("p1")
        assert dynamic_price(flight, surcharge=1.0) == pytest.approx(2000)


class TestCrewRegistry:
    """Tests for crew members and the registry."""

    def test_sequential_ids(self, registry):
        """Test crew ids start at 1 and increase."""
        assert [m.id for m in registry] == [1, 2, 3, 4]

    def test_ids_by_role(self, registry):
        """Test role partition keeps ascending order."""
        assert registry.ids_by_role(CrewRole.PILOT) == [1, 2]
        assert registry.ids_by_role(CrewRole.ATTENDANT) == [3, 4]

    def test_count_by_role(self, registry):
        """Test headcount per role."""
        counts = registry.count_by_role()
        assert counts[CrewRole.PILOT] == 2
        assert counts[CrewRole.ATTENDANT] == 2

    def test_role_from_string(self, default_rules):
        """Test roles can be given by name."""
        registry = CrewRegistry(default_rules)
        member = registry.add("Somu", "pilot")
        assert member.role is CrewRole.PILOT
        assert registry.add("Tanya", "Attendant").role is CrewRole.ATTENDANT

    def test_non_string_role_rejected(self):
        """Test values that are neither a role nor a string are refused."""
        for value in (None, 1, ["Pilot"]):
            with pytest.raises(ValueError):
                CrewRole.parse(value)

    def test_unknown_role_rejected(self, default_rules):
        """Test only Pilot and Attendant are accepted."""
        registry = CrewRegistry(default_rules)
        with pytest.raises(ValueError):
            registry.add("Nobody", "Co-Pilot")
        assert len(registry) == 0

    def test_get_unknown_raises(self, registry):
        """Test lookups of unknown crew fail."""
        with pytest.raises(CrewNotFound):
            registry.get(99)

    def test_registries_are_independent(self, default_rules):
        """Test two registries never share ids or members."""
        first = CrewRegistry(default_rules)
        second = CrewRegistry(default_rules)
        first.add("A", CrewRole.PILOT)
        assert second.add("B", CrewRole.PILOT).id == 1
        assert len(first) == 1


class TestOperatingRules:
    """Tests for OperatingRules configuration."""

    def test_defaults(self, default_rules):
        """Test defaults match the booking desk."""
        assert default_rules.pilots_per_flight == 2
        assert default_rules.attendants_per_flight == 2
        assert default_rules.first_flight_id == 1000
        assert default_rules.first_crew_id == 1
        assert default_rules.min_turnaround_minutes == 0

    def test_property_conversions(self):
        """Test derived properties."""
        rules = OperatingRules(min_turnaround=timedelta(minutes=45), occupancy_surcharge=0.25)
        assert rules.min_turnaround_minutes == 45
        assert rules.max_price_multiplier == 1.25
        assert rules.crew_per_flight == 4
