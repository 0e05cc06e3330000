"""
Framework Default Values
All hardcoded values should be defined here and accessed via Config.get()
These defaults can be overridden in config/girouette.py or at runtime with Config.set()
"""

# ============================================================================
# CONTROLLER DISCOVERY DEFAULTS
# ============================================================================

# Controllers root, relative to the current working directory
DEFAULT_CONTROLLERS_PATH = 'app'

# Files ending with this suffix are treated as controllers
DEFAULT_CONTROLLER_SUFFIX = '_controller.py'

# Module attribute that explicitly names the controller class of a file
DEFAULT_CONTROLLER_EXPORT = '__controller__'

# Directories never descended into while scanning
DEFAULT_IGNORED_DIRECTORIES = ('__pycache__',)

# Synthetic package under which scanned controller modules are loaded
DEFAULT_CONTROLLER_MODULE_PREFIX = 'girouette_controllers'

# ============================================================================
# RESOURCE DEFAULTS
# ============================================================================

# Canonical resource actions, in registration order
RESOURCE_ACTIONS = ('index', 'create', 'store', 'show', 'edit', 'update', 'destroy')

# Actions kept by an API-only resource
API_ONLY_ACTIONS = ('index', 'store', 'show', 'update', 'destroy')

# Parameter name used for the leaf segment of a resource
DEFAULT_RESOURCE_PARAMETER = 'id'

# Wildcard action selector for resource middleware
ALL_ACTIONS_SELECTOR = '*'

# ============================================================================
# HTTP DEFAULTS
# ============================================================================

HTTP_METHODS = ('GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS')

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
DEFAULT_LOGGER_NAME = 'girouette'
