# LOTO Tracker — Database Models
# Import all models here for SQLAlchemy discovery

from loto.models.breaker import Breaker              # noqa
from loto.models.lock import Lock                    # noqa
from loto.models.personnel import Personnel          # noqa
from loto.models.plan import Plan                    # noqa
from loto.models.history_entry import HistoryEntry   # noqa
