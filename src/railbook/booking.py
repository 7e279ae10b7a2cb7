import copy
import logging
from typing import List, Optional

from railbook.auth import AuthError, CredentialFormatError, check_password, hash_password
from railbook.catalog import TrainCatalog
from railbook.models import Ticket, Train, User
from railbook.store import RecordStore, StorageError
from railbook.utils import new_id

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


class BookingService:
    """Holds the signed-in user and applies bookings to users and trains."""

    def __init__(
        self,
        location: str,
        catalog: TrainCatalog,
        store: RecordStore[User] | None = None,
    ) -> None:
        self.location = location
        self.catalog = catalog
        self.store = store or RecordStore(User)
        self.users: List[User] = self.store.load(location)
        self._user: Optional[User] = None
        # hash verified at login, used to re-resolve the session later
        self._session_hash: Optional[str] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    def _start_session(self, user: User) -> None:
        self._user = user
        self._session_hash = user.password_hash

    def _require_user(self) -> User:
        if self._user is None:
            raise AuthError("no user signed in")
        return self._user

    def _save_users(self) -> None:
        self.store.save(self.location, self.users)

    def sign_up(self, user: User) -> bool:
        self.users.append(user)
        self._start_session(user)
        try:
            self._save_users()
        except StorageError:
            logger.exception("sign up of %s could not be saved", user.name)
            return False
        logger.info("signed up user %s", user.name)
        return True

    def register(self, name: str, password: str) -> bool:
        user = User(id=new_id(), name=name, password_hash=hash_password(password))
        return self.sign_up(user)

    def authenticate(self, name: str, password: str) -> User:
        for user in self.users:
            if user.name != name:
                continue
            try:
                if check_password(password, user.password_hash):
                    return user
            except CredentialFormatError:
                logger.warning("user %s has a malformed password hash", user.id)
        raise AuthError("invalid name or password")

    def login(self, name: str, password: str) -> bool:
        try:
            user = self.authenticate(name, password)
        except AuthError:
            logger.warning("login failed for %s", name)
            return False
        self._start_session(user)
        logger.info("user %s logged in", name)
        return True

    def search_trains(self, source: str, destination: str) -> List[Train]:
        return self.catalog.search(source, destination)

    def find_train(self, number: str) -> Optional[Train]:
        return self.catalog.find_by_number(number)

    def validate_seat(self, train: Train, row: int, col: int) -> None:
        if not 0 <= row < train.row_count or not 0 <= col < train.column_count(row):
            raise ValidationError(f"seat ({row}, {col}) is outside train {train.number}")
        if not train.is_seat_free(row, col):
            raise ValidationError(f"seat ({row}, {col}) on train {train.number} is already booked")

    def _catalog_train(self, train: Train) -> Train:
        stored = self.catalog.get(train.id)
        if stored is None:
            raise ValidationError(f"train {train.id} is not in the catalog")
        return stored

    def book_ticket(
        self,
        user_id: str,
        source: str,
        destination: str,
        travel_date: str,
        train: Train,
        row: int,
        col: int,
    ) -> bool:
        try:
            user = self._require_user()
            train = self._catalog_train(train)
            self.validate_seat(train, row, col)
        except (AuthError, ValidationError) as exc:
            logger.warning("booking rejected: %s", exc)
            return False
        train.seats[row][col] = 1
        try:
            self.catalog.add_or_update(train)
            ticket = Ticket(
                id=new_id(),
                user_id=user_id,
                source=source,
                destination=destination,
                travel_date=travel_date,
                train=copy.deepcopy(train),
            )
            user.tickets_booked.append(ticket)
            self._update_user(user)
        except StorageError:
            logger.exception("booking on train %s could not be saved", train.number)
            return False
        logger.info("booked seat (%d, %d) on train %s as ticket %s", row, col, train.number, ticket.id)
        return True

    def _update_user(self, user: User) -> None:
        wanted = user.id.lower()
        for index, existing in enumerate(self.users):
            if existing.id.lower() == wanted:
                self.users[index] = user
                self._save_users()
                return

    def _ticket_index(self, user: User, ticket_id: str) -> int:
        index = user.find_ticket(ticket_id)
        if index is None:
            raise ValidationError(f"ticket {ticket_id} not found")
        return index

    def cancel_ticket(self, ticket_id: str) -> bool:
        try:
            user = self._require_user()
            index = self._ticket_index(user, ticket_id)
        except (AuthError, ValidationError) as exc:
            logger.warning("cancellation rejected: %s", exc)
            return False
        # the seat on the train stays booked
        del user.tickets_booked[index]
        try:
            self._update_user(user)
        except StorageError:
            logger.exception("cancellation of ticket %s could not be saved", ticket_id)
            return False
        logger.info("cancelled ticket %s", ticket_id)
        return True

    def fetch_bookings(self) -> List[Ticket]:
        if self._user is None:
            return []
        for user in self.users:
            if user.name == self._user.name and user.password_hash == self._session_hash:
                return list(user.tickets_booked)
        return []
