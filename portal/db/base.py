# portal/db/base.py
from sqlalchemy.orm import declarative_base

# Shared registry; Item and ItemType inherit from this.
Base = declarative_base()
