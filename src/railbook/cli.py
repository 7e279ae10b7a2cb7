import argparse
import logging
import sys
from typing import List, Optional

from railbook import config
from railbook.booking import BookingService
from railbook.catalog import TrainCatalog
from railbook.models import Train, User
from railbook.store import RecordStore, StorageError
from railbook.utils import render_seats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="railbook", description="Search trains and book seats.")
    parser.add_argument("--trains", default=config.TRAINS_PATH, help="train collection file")
    parser.add_argument("--users", default=config.USERS_PATH, help="user collection file")
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL.upper(),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    commands = parser.add_subparsers(dest="command", required=True)

    signup = commands.add_parser("signup", help="create an account")
    signup.add_argument("name")
    signup.add_argument("password")

    search = commands.add_parser("search", help="list trains running from source to destination")
    search.add_argument("source")
    search.add_argument("destination")

    seats = commands.add_parser("seats", help="show the seat map of a train")
    seats.add_argument("number")

    book = commands.add_parser("book", help="book a seat")
    book.add_argument("name")
    book.add_argument("password")
    book.add_argument("number", help="train number")
    book.add_argument("source")
    book.add_argument("destination")
    book.add_argument("date", help="travel date")
    book.add_argument("row", type=int)
    book.add_argument("col", type=int)

    cancel = commands.add_parser("cancel", help="cancel a ticket")
    cancel.add_argument("name")
    cancel.add_argument("password")
    cancel.add_argument("ticket_id")

    bookings = commands.add_parser("bookings", help="list your tickets")
    bookings.add_argument("name")
    bookings.add_argument("password")
    return parser


def open_service(trains_path: str, users_path: str) -> BookingService:
    train_store = RecordStore(Train)
    user_store = RecordStore(User)
    train_store.ensure(trains_path)
    user_store.ensure(users_path)
    catalog = TrainCatalog(trains_path, train_store)
    return BookingService(users_path, catalog, user_store)


def _login(service: BookingService, name: str, password: str) -> bool:
    if service.login(name, password):
        return True
    print("login failed", file=sys.stderr)
    return False


def run(args: argparse.Namespace, service: BookingService) -> int:
    if args.command == "signup":
        try:
            registered = service.register(args.name, args.password)
        except ValueError as exc:
            print(f"sign up failed: {exc}", file=sys.stderr)
            return 1
        if not registered:
            print("sign up failed", file=sys.stderr)
            return 1
        print(f"signed up {args.name} ({service.current_user.id})")
        return 0

    if args.command == "search":
        trains = service.search_trains(args.source, args.destination)
        if not trains:
            print("no trains found")
        for train in trains:
            departs = train.departure_time(args.source)
            when = departs.strftime("%H:%M") if departs else "--:--"
            print(f"{train.number}  {train.id}  departs {when}  {train.free_seat_count()} seats free")
        return 0

    if args.command == "seats":
        train = service.find_train(args.number)
        if train is None:
            print(f"no train {args.number}", file=sys.stderr)
            return 1
        print(render_seats(train.seats))
        return 0

    if not _login(service, args.name, args.password):
        return 1

    if args.command == "book":
        train = service.find_train(args.number)
        if train is None:
            print(f"no train {args.number}", file=sys.stderr)
            return 1
        user = service.current_user
        if not service.book_ticket(user.id, args.source, args.destination, args.date, train, args.row, args.col):
            print("booking failed", file=sys.stderr)
            return 1
        print(f"booked ticket {user.tickets_booked[-1].id}")
        return 0

    if args.command == "cancel":
        if not service.cancel_ticket(args.ticket_id):
            print("cancellation failed", file=sys.stderr)
            return 1
        print(f"cancelled ticket {args.ticket_id}")
        return 0

    for ticket in service.fetch_bookings():
        print(ticket.describe())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT)
    try:
        service = open_service(args.trains, args.users)
    except StorageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return run(args, service)


if __name__ == "__main__":
    sys.exit(main())
