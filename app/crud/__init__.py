# app/crud/__init__.py

from .crud_member_domain import member_domain
from .crud_reservation import reservation
from .crud_seminar import seminar
from .crud_survey import survey
