# config.py

# -- Note Discovery Configuration --
# A list of file extensions to be treated as notes.
# Only files sitting directly inside the chosen folder are considered, and the
# comparison ignores case, so 'Ideas.TXT' counts as a note as well.
TEXT_EXTENSIONS = ['.txt']

# -- Display Configuration --
# The maximum number of lines shown for a single note.
# Anything past this is cut off and the note is marked as trimmed.
MAX_LINES = 25

# The maximum number of characters shown for a single note, applied after the
# line limit. The default of 800 keeps a note readable inside an alert window.
MAX_CHARACTERS = 800

# The character appended to a note that was trimmed for display.
ELLIPSIS = '…'

# -- Viewing Configuration --
# The available viewing modes.
# 'random' shows any note on every shuffle, repeats included.
# 'sequential' walks the folder in name order and starts over at the end.
VIEWING_MODES = ('random', 'sequential')
DEFAULT_MODE = 'random'

# The number of notes printed by a single command-line run.
NOTES_PER_RUN = 1

# -- GUI Configuration --
# The title of the application as it appears in the macOS menu bar.
APP_TITLE = "Notecard"

# The menu bar title shown while a note is being loaded in the background.
LOADING_TITLE = "Notecard ⏳"

# How often, in seconds, the menu bar app checks for finished background work.
QUEUE_POLL_INTERVAL = 0.25
