"""
roster/choices.py
─────────────────
Enumerations shared by several apps.  Kept free of model imports so that
accounts/ and attendance/ can use them without import cycles.
"""

from django.db import models


class Branch(models.TextChoices):
    """Age / programme tiers, listed in display order."""

    CHIEN_CON = 'chien_con', 'Chiên Con'
    AU_NHI    = 'au_nhi',    'Ấu Nhi'
    THIEU_NHI = 'thieu_nhi', 'Thiếu Nhi'
    NGHIA_SI  = 'nghia_si',  'Nghĩa Sĩ'


class RecordStatus(models.TextChoices):
    ACTIVE   = 'ACTIVE',   'Active'
    INACTIVE = 'INACTIVE', 'Inactive'
