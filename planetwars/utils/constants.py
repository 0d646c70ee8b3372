"""Game and protocol constants."""

# Owners
NEUTRAL = 0  # Owner id of unowned planets and killed fleets
SELF_ID = 1  # Id every player sees itself as in a rotated view

# Winner() results
NO_DECISION = -1
DRAW = 0

# Protocol
MESSAGE_TERMINATOR = "go"

# Match defaults
DEFAULT_TURN_TIMEOUT_MS = 1000
DEFAULT_MAX_TURNS = 200

# Seconds to wait for a terminated player process before killing it
PROCESS_SHUTDOWN_GRACE = 1.0
