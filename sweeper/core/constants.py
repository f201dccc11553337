"""Core constants: cache key layout and default sweep parameters.

Single source of truth for the cache key structure shared by the
cross-store deleter and the inventory scanner (DRY).
"""

# Cache keys are "<ResourceCategory>/<Identifier>"
CACHE_KEY_SEP = "/"

# Redis SCAN cursor that both starts and ends an iteration
SCAN_CURSOR_DONE = 0

# Default configuration locator when none is passed on the command line
DEFAULT_CONFIG_LOCATOR = "file:sweeper.config.json"
DEFAULT_AWS_REGION = "us-east-1"

# Audit event purge (relational + cache mirror)
DEFAULT_AUDIT_TABLE = "AuditEvent"
DEFAULT_AUDIT_HISTORY_TABLE = "AuditEvent_History"
DEFAULT_AUDIT_RETENTION_DAYS = 30
DEFAULT_AUDIT_BATCH_SIZE = 100
DEFAULT_AUDIT_ITERATIONS = 10
DEFAULT_AUDIT_BATCH_DELAY_SECONDS = 0.5

# Subscription queue clean (must match the producer's queue name)
DEFAULT_QUEUE_NAME = "SubscriptionQueue"
DEFAULT_QUEUE_GRACE_MS = 60_000  # 1 minute
DEFAULT_QUEUE_CLEAN_MAX_COUNT = 100_000
DEFAULT_QUEUE_CLEAN_ITERATIONS = 10

# Cache inventory
DEFAULT_SCAN_PAGE_SIZE = 1000

# Store names reported in DeletionOutcome
STORE_PRIMARY = "primary"
STORE_HISTORY = "history"
STORE_CACHE = "cache"
STORE_QUEUE = "queue"
