"""Bill service for database operations."""

from datetime import date
from typing import List, Optional

from dates import parse_date
from db.manager import atomic
from models.bill import Bill, RecurrenceUnit
from recurrence import PaymentOutcome, process_payment
from logger import get_logger

logger = get_logger()

# SQL Query Constants
_BILL_SELECT_FIELDS = """id, profile_id, category_id, name, amount, paid_amount,
       due_date, payment_date, recurrence_unit, recurrence_interval,
       total_installments, current_installment, is_paid, is_automatic"""

_BILL_INSERT_FIELDS = """profile_id, category_id, name, amount, paid_amount,
    due_date, payment_date, recurrence_unit, recurrence_interval,
    total_installments, current_installment, is_paid, is_automatic"""

# Automatically generate placeholders from field count
_BILL_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_BILL_INSERT_FIELDS.split(',')))})"
)

_BILL_UPDATE_SET = ", ".join(
    f"{field.strip()} = ?" for field in _BILL_INSERT_FIELDS.split(",")
)

# Earliest due date first; unreadable dates sort last.
_BILL_ORDER = "ORDER BY due_date IS NULL, date(due_date) IS NULL, due_date ASC, id ASC"


def validate_bill(bill: Bill) -> None:
    """Check the fields a bill must satisfy before it is stored.

    Raises:
        ValueError: If any field is invalid.
    """
    if not bill.name or not bill.name.strip():
        raise ValueError("Bill name cannot be empty")
    if bill.amount < 0:
        raise ValueError("Bill amount cannot be negative")
    if bill.due_date is None:
        raise ValueError("Bill due date is required")
    if bill.recurrence_interval < 1:
        raise ValueError("Recurrence interval must be at least 1")
    if bill.total_installments < 0:
        raise ValueError("Total installments cannot be negative")
    if bill.current_installment < 1:
        raise ValueError("Current installment must be at least 1")
    if 0 < bill.total_installments < bill.current_installment:
        raise ValueError(
            f"Current installment {bill.current_installment} exceeds "
            f"total installments {bill.total_installments}"
        )


class BillService:
    """Service for managing bills and their payments."""

    def __init__(self, db_manager):
        """Initialize the bill service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_by_profile(
        self, profile_id: int, paid: Optional[bool] = None
    ) -> List[Bill]:
        """Get the bills of one profile.

        Args:
            profile_id: Owning profile.
            paid: True for payment history only, False for pending bills only,
                None for both.

        Returns:
            List of Bill objects ordered by due date.
        """
        query = f"SELECT {_BILL_SELECT_FIELDS} FROM bills WHERE profile_id = ?"
        params: list = [profile_id]
        if paid is not None:
            query += " AND is_paid = ?"
            params.append(int(paid))

        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"{query} {_BILL_ORDER}", params)
            return [self._row_to_bill(row) for row in cursor.fetchall()]

    def find_all(self) -> List[Bill]:
        """Get the bills of every profile (used by the reminder loop)."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"SELECT {_BILL_SELECT_FIELDS} FROM bills {_BILL_ORDER}")
            return [self._row_to_bill(row) for row in cursor.fetchall()]

    def find(self, bill_id: int) -> Optional[Bill]:
        """Get a single bill by ID.

        Args:
            bill_id: The bill ID to find.

        Returns:
            Bill object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_BILL_SELECT_FIELDS} FROM bills WHERE id = ?", (bill_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_bill(row)
            return None

    def create(self, bill: Bill) -> Bill:
        """Store a new bill.

        Args:
            bill: Bill to insert; its id is ignored.

        Returns:
            A copy of the bill with id populated.

        Raises:
            ValueError: If the bill fails validation.
        """
        validate_bill(bill)

        with self.db_manager.connect() as conn:
            bill_id = self._insert(conn, bill)
            conn.commit()

        return bill.copy(id=bill_id)

    def bulk_create(self, bills: List[Bill]) -> int:
        """Store several bills in one transaction.

        Returns:
            Number of bills inserted.
        """
        if not bills:
            return 0

        with atomic(self.db_manager) as conn:
            for bill in bills:
                self._insert(conn, bill)

        return len(bills)

    def update(self, bill: Bill) -> Bill:
        """Overwrite a stored bill with the given values.

        Raises:
            ValueError: If the bill has no id or fails validation.
            Exception: If the bill is not found.
        """
        if bill.id is None:
            raise ValueError("Cannot update a bill without an id")
        validate_bill(bill)

        with self.db_manager.connect() as conn:
            cursor = self._update(conn, bill)
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Bill with ID {bill.id} not found")

        return bill

    def delete(self, bill_id: int) -> bool:
        """Delete a bill by ID.

        Returns:
            True if bill was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM bills WHERE id = ?", (bill_id,))
            conn.commit()
            return cursor.rowcount > 0

    def delete_by_profile(self, profile_id: int) -> int:
        """Delete every bill of a profile.

        Returns:
            Number of bills deleted.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM bills WHERE profile_id = ?", (profile_id,))
            conn.commit()
            return cursor.rowcount

    def replace_profile_bills(self, profile_id: int, bills: List[Bill]) -> int:
        """Swap all bills of a profile for ``bills`` in one transaction.

        Returns:
            Number of bills inserted.
        """
        with atomic(self.db_manager) as conn:
            conn.execute("DELETE FROM bills WHERE profile_id = ?", (profile_id,))
            for bill in bills:
                self._insert(conn, bill.copy(profile_id=profile_id))

        return len(bills)

    def pay(
        self,
        bill_id: int,
        amount_paid=None,
        payment_date: Optional[date] = None,
    ) -> PaymentOutcome:
        """Record a payment of a pending bill.

        Inserts the archived paid record and advances or deletes the
        original, both in one transaction.

        Args:
            bill_id: Pending bill to pay.
            amount_paid: Amount actually paid; defaults to the bill's amount.
            payment_date: Payment date; defaults to today.

        Returns:
            PaymentOutcome whose archived record carries its new id.

        Raises:
            ValueError: If the bill does not exist or is already paid.
        """
        bill = self.find(bill_id)
        if bill is None:
            raise ValueError(f"Bill with ID {bill_id} not found")
        if bill.is_paid:
            raise ValueError(f"Bill '{bill.name}' is already paid")

        if amount_paid is None:
            amount_paid = bill.amount

        outcome = process_payment(bill, amount_paid, payment_date)

        with atomic(self.db_manager) as conn:
            archived_id = self._insert(conn, outcome.archived)
            if outcome.deletes_original:
                conn.execute("DELETE FROM bills WHERE id = ?", (bill.id,))
            else:
                self._update(conn, outcome.updated)

        outcome.archived = outcome.archived.copy(id=archived_id)

        if outcome.deletes_original:
            logger.info(f"Paid final installment of '{bill.name}'; bill removed")
        else:
            logger.info(
                f"Paid '{bill.name}'; next due {outcome.updated.due_date.isoformat()}"
            )
        return outcome

    def _insert(self, conn, bill: Bill) -> int:
        cursor = conn.execute(
            f"""
            INSERT INTO bills ({_BILL_INSERT_FIELDS})
            VALUES {_BILL_INSERT_PLACEHOLDERS}
            """,
            self._bill_values(bill),
        )
        return cursor.lastrowid

    def _update(self, conn, bill: Bill):
        return conn.execute(
            f"UPDATE bills SET {_BILL_UPDATE_SET} WHERE id = ?",
            (*self._bill_values(bill), bill.id),
        )

    def _bill_values(self, bill: Bill) -> tuple:
        data = bill.to_dict()
        return tuple(data[field.strip()] for field in _BILL_INSERT_FIELDS.split(","))

    def _row_to_bill(self, row: tuple) -> Bill:
        """Convert a database row to a Bill object.

        Malformed stored dates become None instead of raising.
        """
        return Bill(
            id=row[0],
            profile_id=row[1],
            category_id=row[2],
            name=row[3],
            amount=row[4] or 0,
            paid_amount=row[5],
            due_date=parse_date(row[6]),
            payment_date=parse_date(row[7]),
            recurrence_unit=RecurrenceUnit.parse(row[8]),
            recurrence_interval=row[9] or 1,
            total_installments=row[10] or 0,
            current_installment=row[11] or 1,
            is_paid=bool(row[12]),
            is_automatic=bool(row[13]),
        )
