from .favorites import category_select_section, favorites_list_section, add_person_section
from .manage import people_manage_section, categories_manage_section, overview_section
from .random_picks import random_section
from .backup import backup_reminder_section, export_section, import_section
