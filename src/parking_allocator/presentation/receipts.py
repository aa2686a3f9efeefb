# File: src/parking_allocator/presentation/receipts.py
"""
Console presentation for tickets and allocation failures.

Receipts are written to the output stream, failures to the error stream.
Field order on a receipt is fixed: ticket number, issue time, vehicle
number, price, slot number.
"""

import sys
from typing import Optional, TextIO

from ..domain.models import Ticket
from ..domain.strategies import SlotUnavailableError


class ReceiptPrinter:
    """Writes tickets and failures as text"""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    @staticmethod
    def format_ticket(ticket: Ticket) -> str:
        lines = [f" === {label} : {value} === " for label, value in ticket.receipt_fields()]
        return "\n".join(lines) + "\n"

    def print_ticket(self, ticket: Ticket) -> None:
        self.out.write(self.format_ticket(ticket) + "\n")

    def report_failure(self, error: SlotUnavailableError) -> None:
        self.err.write(f"{error}\n")

    def print_batch(self, result) -> None:
        """Print every outcome of a parking_service.BatchResult in order"""
        for outcome in result.outcomes:
            if outcome.success:
                self.print_ticket(outcome.ticket)
            else:
                self.report_failure(outcome.error)
