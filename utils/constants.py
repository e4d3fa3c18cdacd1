# utils/constants.py

# --- Configuration Store ---
DEFAULT_CONFIG_FILE = "config.txt"              # Backing resource read at startup
DEFAULT_SAVED_CONFIG_FILE = "config_saved.txt"  # Snapshot written after the demo run
CONFIG_COMMENT_PREFIX = "#"
CONFIG_SEPARATOR = "="
CONFIG_DUMP_HEADER = "=== CONFIG ==="
CONFIG_ENCODING = "utf-8"

# Keys the driver reads from / writes to the store
LAST_RUN_KEY = "lastRun"
UNKNOWN_KEY = "unknownKey"

# --- Logging keys (flat key=value, read from the store) ---
LOG_LEVEL_KEY = "log.level"
LOG_TO_CONSOLE_KEY = "log.to_console"
LOG_TO_FILE_KEY = "log.to_file"
LOG_COLORFUL_CONSOLE_KEY = "log.colorful_console"
LOG_DIR_KEY = "log.dir"

BOOTSTRAP_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_LOG_DIR = "logs"
LOG_FILE_NAME = "demo.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# --- Results Directories ---
DEFAULT_RESULTS_DIR = "results"
REPORTS_DIR = "01_Reports"

# --- Report Renderer ---
REPORT_FORMAT_TEXT = "TEXT"
REPORT_FORMAT_HTML = "HTML"
REPORT_FILE_NAMES = {
    REPORT_FORMAT_TEXT: "report.txt",
    REPORT_FORMAT_HTML: "report.html",
}

# --- Singleton check ---
DEFAULT_THREAD_COUNT = 6
