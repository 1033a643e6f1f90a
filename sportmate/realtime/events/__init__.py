"""Per-feature push payloads for the Socket.IO server (notifications today)."""
