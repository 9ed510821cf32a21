from backup.csv_backup import HEADER, read_bills, write_bills

__all__ = ["HEADER", "read_bills", "write_bills"]
