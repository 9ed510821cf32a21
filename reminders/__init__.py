"""Background reminders for bills that are due or overdue."""
