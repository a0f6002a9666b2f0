"""Core constants: collection names and cache key prefixes.

Document stores have no DDL or migrations; collections come into existence on
first write. These constants are the single source of truth for the
"schema" shared by the engines, the repositories and both store adapters.
"""

# Automation
COLLECTION_WORKFLOWS = "workflows"
COLLECTION_WORKFLOW_EXECUTIONS = "workflow_executions"
COLLECTION_AUTOMATION_RULES = "automation_rules"
COLLECTION_RULE_EXECUTIONS = "rule_executions"

# Gamification
COLLECTION_POINTS_RULES = "points_rules"
COLLECTION_POINTS = "points"

# Organization records read by the reminder jobs
COLLECTION_NOTIFICATIONS = "notifications"
COLLECTION_MEMBERS = "members"
COLLECTION_DUES_TRANSACTIONS = "dues_transactions"
COLLECTION_EVENTS = "events"

# Writes to these collections never trigger automation rules.
RULE_ENGINE_IGNORED_COLLECTIONS = frozenset({COLLECTION_RULE_EXECUTIONS})

# Cache key prefixes
CACHE_PREFIX_CHANGE_EVENT = "change_event"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# award_points actions that carry no reason
DEFAULT_POINTS_REASON = "Workflow action"
