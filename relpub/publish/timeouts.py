from __future__ import annotations

# Read-only gh queries (auth status). Release delete and create run until
# gh returns, since create uploads the asset.
GH_TIMEOUT_SECONDS = 60.0
