from lawdesk.db.models.user import User, UserCredential
from lawdesk.db.models.client import Client
from lawdesk.db.models.case import Case, case_assignments
from lawdesk.db.models.task import Task
from lawdesk.db.models.court_log import CourtLog
from lawdesk.db.models.message import Message, message_recipients
from lawdesk.db.models.time_entry import TimeEntry
from lawdesk.db.models.invoice import Invoice, invoice_time_entries
from lawdesk.db.models.payment import Payment
from lawdesk.db.models.expense import Expense
from lawdesk.db.models.other_payment import OtherPayment

# Export all models and association tables
__all__ = [
    'User', 'UserCredential',
    'Client',
    'Case', 'case_assignments',
    'Task',
    'CourtLog',
    'Message', 'message_recipients',
    'TimeEntry',
    'Invoice', 'invoice_time_entries',
    'Payment',
    'Expense',
    'OtherPayment',
]
