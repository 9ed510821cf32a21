import csv
import logging
from typing import Callable, Iterable, List, Optional, TextIO

from dates import format_backup_date, parse_backup_date
from messages.loader import MessageCatalog
from models.bill import Bill
from models.category import Category
from money import parse_count, parse_minor_units

logger = logging.getLogger(__name__)

DELIMITER = ";"

HEADER = [
    "Name",
    "Amount",
    "DueDate",
    "CategoryRef",
    "Status",
    "PaidAmount",
    "PaymentDate",
    "TotalInstallments",
    "CurrentInstallment",
    "Automatic",
]

EXPECTED_FIELDS = len(HEADER)


def write_bills(
    bills: Iterable[Bill],
    categories: Iterable[Category],
    dest: TextIO,
    catalog: MessageCatalog,
) -> int:
    """
    Write bills in the semicolon-delimited backup format.

    Format:
    - Header row: Name;Amount;DueDate;CategoryRef;Status;PaidAmount;PaymentDate;
      TotalInstallments;CurrentInstallment;Automatic
    - Amounts in minor units, dates as dd/mm/YYYY, CategoryRef is the
      category name, Status and Automatic use the catalog's labels.
    """
    names = {category.id: category.name for category in categories}
    writer = csv.writer(dest, delimiter=DELIMITER, lineterminator="\n")
    writer.writerow(HEADER)

    count = 0
    for bill in bills:
        writer.writerow(
            [
                bill.name,
                bill.amount,
                format_backup_date(bill.due_date),
                names.get(bill.category_id, catalog.dashboard.other),
                catalog.backup.paid if bill.is_paid else catalog.backup.pending,
                "" if bill.paid_amount is None else bill.paid_amount,
                format_backup_date(bill.payment_date),
                bill.total_installments,
                bill.current_installment,
                catalog.backup.automatic if bill.is_automatic else catalog.backup.manual,
            ]
        )
        count += 1

    logger.info(f"Wrote {count} bills to backup")
    return count


def read_bills(
    source: TextIO,
    profile_id: int,
    resolve_category: Callable[[str], Optional[int]],
    catalogs: Iterable[MessageCatalog],
) -> List[Bill]:
    """
    Read bills from a backup file.

    Expected format:
    - Header row (line 1), ignored
    - Bill rows (line 2+) with at least 10 semicolon-separated fields

    Rows with too few fields or an unreadable due date are skipped. Status
    and Automatic labels of every given catalog are recognised.
    """
    paid_labels = set()
    automatic_labels = set()
    for catalog in catalogs:
        paid_labels.add(catalog.backup.paid.lower())
        automatic_labels.add(catalog.backup.automatic.lower())

    bills: List[Bill] = []
    reader = csv.reader(source, delimiter=DELIMITER)

    try:
        next(reader)
    except StopIteration:
        logger.error("Empty backup file")
        return bills

    line_num = 1
    for row in reader:
        line_num += 1

        if not row or len(row) < EXPECTED_FIELDS:
            logger.warning(f"Skipping malformed line {line_num}: {row}")
            continue

        due_date = parse_backup_date(row[2])
        if due_date is None:
            logger.warning(f"Skipping line {line_num} with unreadable due date: {row[2]!r}")
            continue

        paid_amount_str = row[5].strip()
        total_installments = max(parse_count(row[7], 0), 0)
        current_installment = max(parse_count(row[8], 1), 1)
        if total_installments and current_installment > total_installments:
            current_installment = total_installments

        bill = Bill(
            id=None,
            profile_id=profile_id,
            name=row[0].strip(),
            amount=parse_minor_units(row[1]),
            due_date=due_date,
            category_id=resolve_category(row[3].strip()),
            is_paid=row[4].strip().lower() in paid_labels,
            paid_amount=parse_minor_units(paid_amount_str) if paid_amount_str else None,
            payment_date=parse_backup_date(row[6]),
            total_installments=total_installments,
            current_installment=current_installment,
            is_automatic=row[9].strip().lower() in automatic_labels,
        )
        bills.append(bill)

    logger.info(f"Read {len(bills)} bills from backup")
    return bills
