"""Seat map, bookings and FIFO waitlist for a single flight."""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional
import logging

from models.exceptions import NoActiveBooking, NoSeatAvailable

logger = logging.getLogger(__name__)


@dataclass
class Booking:
    """
    A seat held by a passenger.

    Bookings are never deleted: cancelling one flips ``active`` to False
    so the history stays available for listings.

    Attributes:
        passenger_id: Passenger identifier (username)
        seat_no: Seat number, 1-indexed
        active: False once cancelled
    """
    passenger_id: str
    seat_no: int
    active: bool = True


@dataclass
class BookingResult:
    """Outcome of a booking request."""
    passenger_id: str
    flight_id: Optional[int] = None
    booking: Optional[Booking] = None
    waitlist_position: Optional[int] = None

    @property
    def waitlisted(self) -> bool:
        return self.booking is None

    @property
    def seat_no(self) -> Optional[int]:
        return self.booking.seat_no if self.booking else None

    def to_dict(self) -> dict:
        return {
            "passenger_id": self.passenger_id,
            "flight_id": self.flight_id,
            "seat_no": self.seat_no,
            "waitlisted": self.waitlisted,
            "waitlist_position": self.waitlist_position,
        }


@dataclass
class CancellationResult:
    """Outcome of a cancellation, including any waitlist promotion."""
    passenger_id: str
    seat_no: int
    flight_id: Optional[int] = None
    promoted: Optional[Booking] = None

    @property
    def promoted_passenger(self) -> Optional[str]:
        return self.promoted.passenger_id if self.promoted else None

    def to_dict(self) -> dict:
        return {
            "passenger_id": self.passenger_id,
            "flight_id": self.flight_id,
            "seat_no": self.seat_no,
            "promoted_passenger": self.promoted_passenger,
        }


@dataclass
class SeatMap:
    """
    Seat occupancy bitmap with append-only bookings and a FIFO waitlist.

    A seat is occupied iff exactly one active booking holds it, and the
    waitlist is only ever non-empty while the flight is full.
    """
    seats_total: int
    bookings: List[Booking] = field(default_factory=list)
    waitlist: Deque[str] = field(default_factory=deque)

    def __post_init__(self):
        if self.seats_total <= 0:
            raise ValueError(f"Seat count must be positive, got {self.seats_total}")
        self._occupied: List[bool] = [False] * self.seats_total
        self._available = self.seats_total

    @property
    def seats_available(self) -> int:
        """Number of free seats."""
        return self._available

    @property
    def occupied_seats(self) -> List[int]:
        """Seat numbers currently held, ascending."""
        return [i + 1 for i, taken in enumerate(self._occupied) if taken]

    def is_occupied(self, seat_no: int) -> bool:
        return self._occupied[seat_no - 1]

    def _lowest_free_seat(self) -> Optional[int]:
        for i, taken in enumerate(self._occupied):
            if not taken:
                return i + 1
        return None

    def _claim(self, passenger_id: str, seat_no: int) -> Booking:
        self._occupied[seat_no - 1] = True
        self._available -= 1
        booking = Booking(passenger_id=passenger_id, seat_no=seat_no)
        self.bookings.append(booking)
        return booking

    def reserve_seat(self, passenger_id: str) -> Booking:
        """
        Claim the lowest-numbered free seat for a passenger.

        Raises:
            NoSeatAvailable: if every seat is taken. The bitmap is untouched.
        """
        seat_no = self._lowest_free_seat()
        if seat_no is None:
            raise NoSeatAvailable(
                f"No seat available for {passenger_id}",
                error_code="NO_SEAT",
                context={"passenger_id": passenger_id}
            )
        return self._claim(passenger_id, seat_no)

    def book(self, passenger_id: str) -> BookingResult:
        """Reserve a seat, or put the passenger at the tail of the waitlist."""
        try:
            booking = self.reserve_seat(passenger_id)
        except NoSeatAvailable:
            self.waitlist.append(passenger_id)
            return BookingResult(
                passenger_id=passenger_id,
                waitlist_position=len(self.waitlist)
            )
        return BookingResult(passenger_id=passenger_id, booking=booking)

    def cancel(self, passenger_id: str) -> CancellationResult:
        """
        Cancel the passenger's first active booking.

        The freed seat goes straight to the head of the waitlist, so it is
        never left available to anyone else while passengers are waiting.

        Raises:
            NoActiveBooking: if the passenger holds no active booking.
        """
        booking = next(
            (b for b in self.bookings if b.passenger_id == passenger_id and b.active),
            None
        )
        if booking is None:
            raise NoActiveBooking(
                f"No active booking for {passenger_id}",
                error_code="NO_ACTIVE_BOOKING",
                context={"passenger_id": passenger_id}
            )

        booking.active = False
        self._occupied[booking.seat_no - 1] = False
        self._available += 1

        result = CancellationResult(passenger_id=passenger_id, seat_no=booking.seat_no)
        if self.waitlist:
            next_passenger = self.waitlist.popleft()
            result.promoted = self._claim(next_passenger, booking.seat_no)
        return result

    def active_bookings(self) -> List[Booking]:
        return [b for b in self.bookings if b.active]

    def bookings_for(self, passenger_id: str) -> List[Booking]:
        """Active bookings held by one passenger."""
        return [b for b in self.bookings if b.active and b.passenger_id == passenger_id]

    def resize(self, seats_total: int) -> List[Booking]:
        """
        Change the seat count while keeping active bookings.

        Bookings whose seat no longer exists move to the lowest free seat,
        and any seats left free are handed to waitlisted passengers.

        Returns:
            Bookings created for promoted waitlisted passengers.

        Raises:
            ValueError: if fewer seats than active bookings are requested.
        """
        active = self.active_bookings()
        if seats_total <= 0 or seats_total < len(active):
            raise ValueError(
                f"Cannot resize to {seats_total} seats with "
                f"{len(active)} active bookings"
            )

        self.seats_total = seats_total
        self._occupied = [False] * seats_total
        displaced = []
        for booking in active:
            if booking.seat_no <= seats_total:
                self._occupied[booking.seat_no - 1] = True
            else:
                displaced.append(booking)
        for booking in displaced:
            booking.seat_no = self._lowest_free_seat()
            self._occupied[booking.seat_no - 1] = True
            logger.info(f"Passenger {booking.passenger_id} re-seated to #{booking.seat_no}")
        self._available = self._occupied.count(False)

        promoted = []
        while self.waitlist and self._available > 0:
            promoted.append(self.reserve_seat(self.waitlist.popleft()))
        return promoted
