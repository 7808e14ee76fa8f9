# backend/vetcare/db/models/__init__.py

from vetcare.db.models.account import Account
from vetcare.db.models.pet import Pet
from vetcare.db.models.species import Species

from vetcare.db.models.professional import Professional, professional_species
from vetcare.db.models.schedule_entry import ScheduleEntry
from vetcare.db.models.rating import Rating
