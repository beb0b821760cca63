"""
Shared constants for GeoGuessr AutoSave.
"""

FEED_URL = "https://www.geoguessr.com/api/v4/feed/private"
GAMESERVER_BASE_URL = "https://game-server.geoguessr.com/api"

# Session cookie that authenticates both the feed and the game server
AUTH_COOKIE_NAME = "_ncfa"

# Head-to-head modes are served from /duels, battle royale from /battle-royale
DUELS_MODES = {"Duels", "TeamDuels"}
BATTLE_ROYALE_MODES = {"BattleRoyaleDistance", "BattleRoyaleCountries"}

# Checkpoint marker kept next to the saved games
CHECKPOINT_FILE = "latest.txt"
RECORD_SUFFIX = ".json"
LOCK_FILE = ".autosave.lock"

# Politeness pauses (milliseconds)
PAGE_DELAY_MS = (1000, 2000)
DOWNLOAD_DELAY_MS = (1000, 3000)
