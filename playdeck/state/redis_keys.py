# playdeck/state/redis_keys.py

"""
Single contract for every key the backend stores.

Never hardcode key strings outside this file.
"""

# =========================
# LIBRARY
# =========================

# Ordered song list
# type: List[Track]
SONGS_KEY = "library:songs"

# Last issued song id (INCR)
SONGS_SEQ_KEY = "library:songs:seq"

# =========================
# PLAYLISTS
# =========================

# type: List[TrackList]
PLAYLISTS_KEY = "playlists:all"

PLAYLISTS_SEQ_KEY = "playlists:seq"

# =========================
# USERS / SESSIONS
# =========================

# type: List[UserRecord]
USERS_KEY = "users:all"

USERS_SEQ_KEY = "users:seq"

# type: Dict[token, Session]
SESSIONS_KEY = "sessions:all"

# =========================
# PLAYER
# =========================

# Last PlaybackState snapshot
# {
#   activeTrack: Track | null
#   isAdvancing: bool
#   elapsedSeconds: int
#   activeList: TrackList | null
#   activeIndex: int
#   hasNext: bool
#   hasPrevious: bool
#   session: int
# }
PLAYER_STATUS_KEY = "player:status"

# =========================
# EVENTS / WS
# =========================

# Single pub/sub channel
EVENTS_CHANNEL = "events:pubsub"
