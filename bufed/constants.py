"""Constants and configuration for the bufed editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Names used for platform directories (config, logs)
    APP_NAME = "bufed"
    APP_AUTHOR = "bufed"

    # Screen layout
    STATUS_LINE_HEIGHT = 1  # Rows reserved at the bottom for the status line

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    SETTINGS_FILE_NAME = "settings.json"

    # Logging
    LOG_FILE_NAME = "bufed.log"
    LOG_LEVEL_ENV = "BUFED_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"

    # Status messages
    UNNAMED_BUFFER = "[No Name]"
    SAVE_PROMPT = "File to save in: {}"
    QUIT_CONFIRM_PROMPT = "Save file? (y, n) "
    SAVED_MESSAGE = "Saved to {}"
    HELP_HINT = "Ctrl-S save | Ctrl-Q quit"
