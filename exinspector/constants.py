"""Constants used throughout the exinspector library."""

import re

# File name placeholders that never point at readable source.
UNKNOWN_FILE = "Unknown"
INTERNAL_FILE = "[internal]"

UNREADABLE_FILES = {UNKNOWN_FILE, INTERNAL_FILE}

# "<path>(<line>) : eval()'d code" and "<path>(<line>) : assert code"
EVAL_FILE_PATTERN = re.compile(r"^(.*)\((\d+)\) : (?:eval\(\)'d|assert) code$")

# Documentation links some runtimes embed in generated messages.
DOCREF_PATTERN = re.compile(r"\[<a href='([^']+)'>(?:[^<]+)</a>\]")

# Function names of call indirections that drop the caller's position.
INDIRECTION_MARKERS = ("call_user_func",)

DEFAULT_COMMENT_CONTEXT = "global"
EXCEPTION_MESSAGE_CONTEXT = "Exception message:"

DEFAULT_MAX_FRAMES = 200
DEFAULT_MAX_CHAIN_DEPTH = 100
