# Plate bot — Database Models
# Import all models here for SQLAlchemy discovery

from platebot.models.kv_entry import KVEntry   # noqa
