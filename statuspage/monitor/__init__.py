"""Monitor subsystem: status records, JSON store, prober, checker loops."""

from .checker import DEFAULT_TARGETS, CheckerTask, Target, build_checkers
from .prober import PROBE_FAILURE, classify, probe
from .records import SystemRecord, SystemStatus, current_time_seconds
from .scheduler import CheckerScheduler
from .store import StatusPersistError, StatusStore
